"""Lazy full-record resolution for list entries."""

from __future__ import annotations

import logging
from typing import Protocol

from guwen_reader.core.exceptions import NotFoundError
from guwen_reader.models.browsing import BrowsingMethod, ByKeyword, PageEnvelope
from guwen_reader.models.guwen_models import FullRecord, ListEntry

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    async def fetch_page(self, method: BrowsingMethod, page: int) -> PageEnvelope: ...

    async def fetch_detail(self, record_id: str) -> FullRecord: ...


class DetailResolver:
    def __init__(self, guwen_service: RecordSource) -> None:
        self._guwen_service = guwen_service

    async def resolve(self, entry: ListEntry) -> FullRecord:
        return await self._guwen_service.fetch_detail(entry.id)

    async def resolve_by_content(self, text: str) -> FullRecord:
        """Resolve the first record a keyword search for ``text`` finds.

        An empty search raises ``NotFoundError``; transport and decode
        failures propagate as they are.
        """

        page = await self._guwen_service.fetch_page(ByKeyword(text), 1)
        entry = page.entry_at(0)
        if entry is None:
            logger.info(f"Keyword search for '{text}' matched nothing")
            raise NotFoundError(f"No record matches '{text}'", detail={"keyword": text})
        return await self.resolve(entry)
