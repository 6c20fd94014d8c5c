from .browse_models import Notice, NoticeKind, RenderView
from .browsing import (
    BrowsingMethod,
    ByDynasty,
    ByKeyword,
    ByPage,
    ByWriter,
    MethodKind,
    PageEnvelope,
    build_method,
    list_query,
    method_label,
)
from .guwen_models import FullRecord, ListEntry, ListPayload

__all__ = [
    "BrowsingMethod",
    "ByDynasty",
    "ByKeyword",
    "ByPage",
    "ByWriter",
    "FullRecord",
    "ListEntry",
    "ListPayload",
    "MethodKind",
    "Notice",
    "NoticeKind",
    "PageEnvelope",
    "RenderView",
    "build_method",
    "list_query",
    "method_label",
]
