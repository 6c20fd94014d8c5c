import asyncio

import pytest

from guwen_reader.models.browsing import ByDynasty, ByPage, ByWriter
from guwen_reader.services.browse.cursor import next_page, prev_page, query


@pytest.fixture
def libai_service(stub_service):
    stub_service.add_collection(ByWriter("李白"), [f"lb{i}" for i in range(7)])
    stub_service.add_collection(ByPage(), [f"all{i}" for i in range(4)])
    return stub_service


def test_query_returns_requested_page_with_method(libai_service):
    envelope = asyncio.run(query(libai_service, ByWriter("李白"), 2))

    assert envelope.method == ByWriter("李白")
    assert envelope.page_number == 2
    assert [entry.id for entry in envelope.items] == ["lb3", "lb4", "lb5"]
    assert len(envelope.items) <= envelope.page_size


def test_next_page_keeps_method_and_increments(libai_service):
    first = asyncio.run(query(libai_service, ByWriter("李白"), 1))

    second = asyncio.run(next_page(libai_service, first))

    assert second.page_number == 2
    assert second.method == ByWriter("李白")
    assert libai_service.page_calls[-1] == (ByWriter("李白"), 2)


def test_next_page_beyond_last_page_is_empty(libai_service):
    last = asyncio.run(query(libai_service, ByWriter("李白"), 3))
    assert last.page_count == 3

    beyond = asyncio.run(next_page(libai_service, last))

    assert beyond.items == ()
    assert beyond.page_number == 4
    assert beyond.method == ByWriter("李白")


def test_prev_page_at_first_page_rerequests_page_one(libai_service):
    first = asyncio.run(query(libai_service, ByPage(), 1))

    again = asyncio.run(prev_page(libai_service, first))

    assert again.page_number == 1
    assert again.items == first.items
    assert libai_service.page_calls[-1] == (ByPage(), 1)


def test_prev_page_steps_back_with_same_method(libai_service):
    third = asyncio.run(query(libai_service, ByWriter("李白"), 3))

    second = asyncio.run(prev_page(libai_service, third))

    assert second.page_number == 2
    assert second.method == ByWriter("李白")


def test_unknown_filter_yields_empty_page(libai_service):
    envelope = asyncio.run(query(libai_service, ByDynasty("fake-era"), 1))

    assert envelope.items == ()
    assert envelope.total == 0
