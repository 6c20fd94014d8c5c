"""Structured logging helpers for the browse service."""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping, Optional

from guwen_reader.models.browse_models import Notice
from guwen_reader.models.browsing import PageEnvelope, method_label

_LOGGER = logging.getLogger("guwen_reader.browse")


def _emit(level: int, event: str, *, extra: Optional[Mapping[str, Any]] = None) -> None:
    payload: MutableMapping[str, Any] = {"source": "browse"}
    if extra:
        payload.update(extra)
    _LOGGER.log(level, event, extra=payload)


def log_page_loaded(page: PageEnvelope, duration_ms: float) -> None:
    _emit(
        logging.INFO,
        "browse.page.loaded",
        extra={
            "method": method_label(page.method),
            "page_number": page.page_number,
            "items": len(page.items),
            "total": page.total,
            "duration_ms": duration_ms,
        },
    )


def log_item_resolved(record_id: str, item_index: int, duration_ms: float) -> None:
    _emit(
        logging.DEBUG,
        "browse.item.resolved",
        extra={"record_id": record_id, "item_index": item_index, "duration_ms": duration_ms},
    )


def log_notice(notice: Notice) -> None:
    _emit(logging.INFO, "browse.notice", extra={"kind": notice.kind, "code": notice.code})


def log_fetch_failed(code: str, message: str, *, unexpected: bool = False) -> None:
    _emit(
        logging.ERROR if unexpected else logging.WARNING,
        "browse.fetch.failed",
        extra={"code": code, "error": message},
    )
