"""Render-ready values handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .guwen_models import FullRecord

NoticeKind = Literal["at_start", "empty", "fetch_failed", "invalid_input", "not_loaded"]


@dataclass(frozen=True)
class RenderView:
    record: FullRecord
    page_number: int
    total: Optional[int]
    item_index: int
    method_label: str


@dataclass(frozen=True)
class Notice:
    """A non-fatal "no content" signal the presentation layer displays."""

    kind: NoticeKind
    message: str
    retryable: bool = False
    code: Optional[str] = None
    detail: Optional[str] = None
