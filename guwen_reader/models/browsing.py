"""Browsing methods and the page envelope they travel in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Tuple, Union, assert_never

from .guwen_models import ListEntry

MethodKind = Literal["page", "writer", "dynasty", "keyword"]


@dataclass(frozen=True)
class ByPage:
    """Unfiltered collection order."""


@dataclass(frozen=True)
class ByWriter:
    name: str


@dataclass(frozen=True)
class ByDynasty:
    era: str


@dataclass(frozen=True)
class ByKeyword:
    text: str


BrowsingMethod = Union[ByPage, ByWriter, ByDynasty, ByKeyword]


def list_query(method: BrowsingMethod, page: int) -> Tuple[str, Dict[str, object]]:
    """Return the list endpoint and query parameters for ``method`` at ``page``."""

    if isinstance(method, ByPage):
        return "selectall", {"page": page}
    if isinstance(method, ByWriter):
        return "selectbywriter", {"page": page, "writer": method.name}
    if isinstance(method, ByDynasty):
        return "selectbydynasty", {"page": page, "dynasty": method.era}
    if isinstance(method, ByKeyword):
        return "selectbykeyword", {"page": page, "keyword": method.text}
    assert_never(method)


def method_label(method: BrowsingMethod) -> str:
    if isinstance(method, ByPage):
        return "总览"
    if isinstance(method, ByWriter):
        return f"作者 - {method.name}"
    if isinstance(method, ByDynasty):
        return f"朝代 - {method.era}"
    if isinstance(method, ByKeyword):
        return f"关键字 - {method.text}"
    assert_never(method)


def build_method(kind: MethodKind, value: str = "") -> BrowsingMethod:
    """Build a method from a form selection; ``value`` is ignored for ``page``."""

    if kind == "page":
        return ByPage()
    if kind == "writer":
        return ByWriter(value)
    if kind == "dynasty":
        return ByDynasty(value)
    if kind == "keyword":
        return ByKeyword(value)
    raise ValueError(f"Unknown browsing method: {kind!r}")


@dataclass(frozen=True)
class PageEnvelope:
    """One fetched page of list entries plus the method that produced it."""

    total: int
    page_count: int
    page_number: int
    page_size: int
    method: BrowsingMethod = field(default_factory=ByPage)
    items: Tuple[ListEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    def entry_at(self, index: int) -> ListEntry | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None
