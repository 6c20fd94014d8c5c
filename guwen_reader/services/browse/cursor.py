"""Page and item cursors over a remote paginated collection.

Page navigation re-derives the next query from the current envelope alone:
the envelope carries its browsing method, so the caller never restates the
filter. Item navigation walks an index over the loaded page and resolves
full records lazily. Crossing a page boundary is always an explicit page
navigation; ``advance`` past the last entry simply yields no record.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Protocol, Union

from guwen_reader.core.exceptions import NotFoundError
from guwen_reader.models.browsing import BrowsingMethod, PageEnvelope
from guwen_reader.models.guwen_models import FullRecord, ListEntry


class PageSource(Protocol):
    async def fetch_page(self, method: BrowsingMethod, page: int) -> PageEnvelope: ...


class RecordResolver(Protocol):
    async def resolve(self, entry: ListEntry) -> FullRecord: ...


# --- Page cursor ---

async def query(service: PageSource, method: BrowsingMethod, page: int) -> PageEnvelope:
    return await service.fetch_page(method, page)


async def next_page(service: PageSource, current: PageEnvelope) -> PageEnvelope:
    """Request the page after ``current``; past the last page this is an empty page."""

    return await service.fetch_page(current.method, current.page_number + 1)


async def prev_page(service: PageSource, current: PageEnvelope) -> PageEnvelope:
    """Request the page before ``current``; page 1 re-requests page 1."""

    return await service.fetch_page(current.method, max(1, current.page_number - 1))


# --- Item cursor ---

@dataclass(frozen=True)
class CursorState:
    """Where the user is: the loaded page and an index into its entries."""

    page: Optional[PageEnvelope] = None
    item_index: int = 0

    @classmethod
    def empty(cls) -> "CursorState":
        return cls()

    @classmethod
    def loaded(cls, page: PageEnvelope) -> "CursorState":
        return cls(page=page, item_index=0)

    @property
    def is_empty(self) -> bool:
        return self.page is None

    def current_entry(self) -> Optional[ListEntry]:
        if self.page is None:
            return None
        return self.page.entry_at(self.item_index)


@dataclass(frozen=True)
class AtStart:
    """``retreat`` was asked to move before the first entry; ``state`` is unchanged."""

    state: CursorState


async def current(state: CursorState, resolver: RecordResolver) -> Optional[FullRecord]:
    """Resolve the entry under the cursor, or ``None`` when there is nothing to show."""

    entry = state.current_entry()
    if entry is None:
        return None
    try:
        return await resolver.resolve(entry)
    except NotFoundError:
        return None


def advance(state: CursorState) -> CursorState:
    if state.is_empty:
        return state
    return replace(state, item_index=state.item_index + 1)


def retreat(state: CursorState) -> Union[CursorState, AtStart]:
    if state.is_empty or state.item_index == 0:
        return AtStart(state)
    return replace(state, item_index=state.item_index - 1)
