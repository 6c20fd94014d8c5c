"""Single-owner browse session driving the cursors for a presentation layer."""

from __future__ import annotations

import asyncio
import functools
import time
import uuid
from typing import Awaitable, Callable, Optional, Union

from guwen_reader.core.exceptions import BrowseError, DecodeError, to_notice
from guwen_reader.core.logging_config import session_id_var
from guwen_reader.models.browse_models import Notice, RenderView
from guwen_reader.models.browsing import BrowsingMethod, ByKeyword, PageEnvelope, method_label

from . import cursor
from .cursor import AtStart, CursorState
from .logging import log_fetch_failed, log_item_resolved, log_notice, log_page_loaded
from .resolver import DetailResolver, RecordSource

BrowseOutcome = Union[RenderView, Notice]

AT_START_MESSAGE = "无更多内容"
EMPTY_MESSAGE = "内容为空!"
NOT_LOADED_MESSAGE = "请先搜索"


def _serialized(func):
    """Run a session operation under the session lock with its id bound for logging."""

    @functools.wraps(func)
    async def wrapper(self: "BrowseSession", *args, **kwargs):
        token = session_id_var.set(self.session_id)
        try:
            async with self._lock:
                return await func(self, *args, **kwargs)
        finally:
            session_id_var.reset(token)

    return wrapper


class BrowseSession:
    """Owns the ``CursorState`` of one user and serializes every transition.

    Each operation awaits its fetches to completion, swaps the state
    reference, and returns a ``RenderView`` or a ``Notice``. The same
    outcome is published on ``updates`` for presentation layers that
    consume a queue instead of return values. Browse errors never escape.
    """

    def __init__(
        self,
        guwen_service: RecordSource,
        resolver: Optional[DetailResolver] = None,
        *,
        session_id: Optional[str] = None,
        updates: Optional[asyncio.Queue] = None,
    ) -> None:
        self._service = guwen_service
        self._resolver = resolver or DetailResolver(guwen_service)
        self._state = CursorState.empty()
        self._lock = asyncio.Lock()
        self.session_id = session_id or uuid.uuid4().hex
        self.updates: asyncio.Queue = updates if updates is not None else asyncio.Queue()

    @property
    def state(self) -> CursorState:
        return self._state

    # --- Page navigation ---

    @_serialized
    async def query(self, method: BrowsingMethod, page: int = 1) -> BrowseOutcome:
        return await self._load_page(lambda: cursor.query(self._service, method, page))

    @_serialized
    async def next_page(self) -> BrowseOutcome:
        page = self._state.page
        if page is None:
            return self._not_loaded()
        return await self._load_page(lambda: cursor.next_page(self._service, page))

    @_serialized
    async def prev_page(self) -> BrowseOutcome:
        page = self._state.page
        if page is None:
            return self._not_loaded()
        outcome = await self._load_page(lambda: cursor.prev_page(self._service, page))
        if page.page_number == 1 and isinstance(outcome, RenderView):
            self._publish(Notice(kind="at_start", message=AT_START_MESSAGE))
        return outcome

    @_serialized
    async def resolve_by_content(self, text: str) -> BrowseOutcome:
        """Show the first record a keyword search for ``text`` finds, leaving the cursor alone."""

        try:
            record = await self._resolver.resolve_by_content(text)
        except BrowseError as error:
            return self._fail(error)

        return self._publish(
            RenderView(
                record=record,
                page_number=1,
                total=None,
                item_index=0,
                method_label=method_label(ByKeyword(text)),
            )
        )

    # --- Item navigation ---

    @_serialized
    async def next_item(self) -> BrowseOutcome:
        if self._state.is_empty:
            return self._not_loaded()
        advanced = cursor.advance(self._state)
        if advanced.current_entry() is None:
            return self._publish(Notice(kind="empty", message=EMPTY_MESSAGE))
        return await self._show(advanced)

    @_serialized
    async def prev_item(self) -> BrowseOutcome:
        if self._state.is_empty:
            return self._not_loaded()
        moved = cursor.retreat(self._state)
        if isinstance(moved, AtStart):
            return self._publish(Notice(kind="at_start", message=AT_START_MESSAGE))
        return await self._show(moved)

    @_serialized
    async def refresh(self) -> BrowseOutcome:
        """Re-resolve the entry under the cursor, e.g. after a failed fetch."""

        if self._state.is_empty:
            return self._not_loaded()
        return await self._show(self._state)

    # --- Internals ---

    async def _load_page(
        self,
        fetch: Callable[[], Awaitable[PageEnvelope]],
    ) -> BrowseOutcome:
        started = time.perf_counter()
        try:
            page = await fetch()
        except BrowseError as error:
            return self._fail(error)
        log_page_loaded(page, duration_ms=(time.perf_counter() - started) * 1000)

        self._state = CursorState.loaded(page)
        return await self._show(self._state)

    async def _show(self, state: CursorState) -> BrowseOutcome:
        started = time.perf_counter()
        try:
            record = await cursor.current(state, self._resolver)
        except BrowseError as error:
            return self._fail(error)

        self._state = state
        page = state.page
        if record is None or page is None:
            return self._publish(Notice(kind="empty", message=EMPTY_MESSAGE))

        log_item_resolved(record.id, state.item_index, duration_ms=(time.perf_counter() - started) * 1000)
        return self._publish(
            RenderView(
                record=record,
                page_number=page.page_number,
                total=page.total,
                item_index=state.item_index,
                method_label=method_label(page.method),
            )
        )

    def _not_loaded(self) -> Notice:
        return self._publish(Notice(kind="not_loaded", message=NOT_LOADED_MESSAGE))

    def _fail(self, error: BrowseError) -> Notice:
        if error.retryable:
            log_fetch_failed(error.code, error.message, unexpected=isinstance(error, DecodeError))
        return self._publish(to_notice(error))

    def _publish(self, outcome):
        if isinstance(outcome, Notice):
            log_notice(outcome)
        self.updates.put_nowait(outcome)
        return outcome
