"""Paginated browsing over the guwen collection."""

from .cursor import AtStart, CursorState, advance, current, next_page, prev_page, query, retreat
from .resolver import DetailResolver
from .session import BrowseOutcome, BrowseSession

__all__ = [
    "AtStart",
    "BrowseOutcome",
    "BrowseSession",
    "CursorState",
    "DetailResolver",
    "advance",
    "current",
    "next_page",
    "prev_page",
    "query",
    "retreat",
]
