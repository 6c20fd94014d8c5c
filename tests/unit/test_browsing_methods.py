import pytest

from guwen_reader.models.browsing import (
    ByDynasty,
    ByKeyword,
    ByPage,
    ByWriter,
    PageEnvelope,
    build_method,
    list_query,
    method_label,
)
from guwen_reader.models.guwen_models import ListEntry


@pytest.mark.parametrize(
    "method, expected",
    [
        (ByPage(), ("selectall", {"page": 2})),
        (ByWriter("李白"), ("selectbywriter", {"page": 2, "writer": "李白"})),
        (ByDynasty("唐代"), ("selectbydynasty", {"page": 2, "dynasty": "唐代"})),
        (ByKeyword("明月"), ("selectbykeyword", {"page": 2, "keyword": "明月"})),
    ],
)
def test_list_query_per_method(method, expected):
    assert list_query(method, 2) == expected


def test_method_labels():
    assert method_label(ByPage()) == "总览"
    assert method_label(ByWriter("李白")) == "作者 - 李白"
    assert method_label(ByDynasty("唐代")) == "朝代 - 唐代"
    assert method_label(ByKeyword("明月")) == "关键字 - 明月"


def test_methods_compare_structurally():
    assert ByWriter("李白") == ByWriter("李白")
    assert ByWriter("李白") != ByWriter("杜甫")
    assert ByWriter("李白") != ByDynasty("李白")
    assert ByPage() == ByPage()
    assert len({ByKeyword("a"), ByKeyword("a"), ByPage()}) == 2


def test_build_method_from_form_selection():
    assert build_method("page", "ignored") == ByPage()
    assert build_method("writer", "杜甫") == ByWriter("杜甫")
    assert build_method("dynasty", "宋代") == ByDynasty("宋代")
    assert build_method("keyword", "春") == ByKeyword("春")
    with pytest.raises(ValueError):
        build_method("author", "杜甫")


def test_page_envelope_defaults_and_entry_lookup():
    envelope = PageEnvelope(
        total=2,
        page_count=1,
        page_number=1,
        page_size=10,
        items=(ListEntry(id="a", title="A"), ListEntry(id="b", title="B")),
    )

    assert envelope.method == ByPage()
    assert envelope.is_empty is False
    assert envelope.entry_at(1).id == "b"
    assert envelope.entry_at(2) is None
    assert envelope.entry_at(-1) is None
