"""
Pytest configuration and shared fixtures for guwen_reader tests.
"""
from typing import Dict, List, Optional

import pytest

from guwen_reader.core.exceptions import InvalidInput, NotFoundError
from guwen_reader.models.browsing import BrowsingMethod, PageEnvelope, list_query
from guwen_reader.models.guwen_models import FullRecord, ListEntry


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_record(record_id: str, title: Optional[str] = None, **fields) -> FullRecord:
    data = {
        "id": record_id,
        "title": title or f"title-{record_id}",
        "writer": "李白",
        "type": ["唐诗三百首"],
        "content": "床前明月光，疑是地上霜。",
        "remark": "注释",
        "translation": "翻译",
        "shangxi": None,
        "audioUrl": None,
    }
    data.update(fields)
    return FullRecord.model_validate(data)


class StubGuwenService:
    """In-memory stand-in for ``GuwenService`` keyed by the list endpoint parameters."""

    def __init__(self, page_size: int = 3) -> None:
        self.page_size = page_size
        self.collections: Dict[tuple, List[ListEntry]] = {}
        self.records: Dict[str, FullRecord] = {}
        self.page_calls: List[tuple] = []
        self.detail_calls: List[str] = []
        self.fail_pages: Optional[Exception] = None
        self.fail_details: Optional[Exception] = None

    def add_collection(self, method: BrowsingMethod, record_ids: List[str]) -> None:
        endpoint, params = list_query(method, 1)
        key = (endpoint, tuple(sorted((k, v) for k, v in params.items() if k != "page")))
        entries = []
        for record_id in record_ids:
            record = self.records.get(record_id) or make_record(record_id)
            self.records[record_id] = record
            entries.append(ListEntry(id=record.id, title=record.title))
        self.collections[key] = entries

    async def fetch_page(self, method: BrowsingMethod, page: int) -> PageEnvelope:
        if page < 1:
            raise InvalidInput(f"Page number must be a positive integer, got {page!r}")
        self.page_calls.append((method, page))
        if self.fail_pages is not None:
            raise self.fail_pages
        endpoint, params = list_query(method, page)
        key = (endpoint, tuple(sorted((k, v) for k, v in params.items() if k != "page")))
        entries = self.collections.get(key, [])
        start = (page - 1) * self.page_size
        chunk = entries[start:start + self.page_size]
        pages = -(-len(entries) // self.page_size)
        return PageEnvelope(
            total=len(entries),
            page_count=pages,
            page_number=page,
            page_size=self.page_size,
            method=method,
            items=tuple(chunk),
        )

    async def fetch_detail(self, record_id: str) -> FullRecord:
        self.detail_calls.append(record_id)
        if self.fail_details is not None:
            raise self.fail_details
        record = self.records.get(record_id)
        if record is None:
            raise NotFoundError(f"Record not found for '{record_id}'")
        return record


@pytest.fixture
def stub_service():
    return StubGuwenService()


@pytest.fixture
def record_factory():
    return make_record
