""" Typed errors for the guwen browsing core. """

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from guwen_reader.models.browse_models import Notice, NoticeKind


@dataclass(eq=False)
class BrowseError(Exception):
    """Base class for all browse-domain errors."""

    message: str
    url: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)

    code: ClassVar[str] = "browse_error"
    notice_kind: ClassVar[NoticeKind] = "fetch_failed"
    retryable: ClassVar[bool] = False

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:  # pragma: no cover - simple passthrough
        return self.message


class TransportError(BrowseError):
    """Connectivity failure, timeout or non-2xx response."""

    code = "browse.transport"
    notice_kind = "fetch_failed"
    retryable = True


class DecodeError(BrowseError):
    """Malformed JSON or a payload that does not match the expected schema."""

    code = "browse.decode"
    notice_kind = "fetch_failed"
    retryable = True


class NotFoundError(BrowseError):
    """A valid request that matched no record."""

    code = "browse.not_found"
    notice_kind = "empty"


class InvalidInput(BrowseError):
    """Rejected before any request was issued."""

    code = "browse.invalid_input"
    notice_kind = "invalid_input"


_NOTICE_MESSAGES: Dict[str, str] = {
    "fetch_failed": "内容获取错误",
    "empty": "内容为空!",
    "invalid_input": "请输入正整数( >= 1)",
}


def to_notice(error: BrowseError) -> Notice:
    """Convert a browse error into a non-fatal notice for the presentation layer."""

    kind = error.notice_kind
    return Notice(
        kind=kind,
        message=_NOTICE_MESSAGES.get(kind, error.message),
        retryable=error.retryable,
        code=error.code,
        detail=error.message,
    )
