"""Minimal tree-walking interface over parsed HTML.

The table extractor only needs three things from a markup tree: the
elements with a given tag, an attribute value, and trimmed text.
:class:`MarkupNode` states exactly that, and :class:`SoupNode` provides it
on top of BeautifulSoup so the extractor never touches bs4 directly.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag


@runtime_checkable
class MarkupNode(Protocol):
    """Read-only view of one element in a markup tree."""

    @property
    def tag(self) -> str: ...

    def children(self, *tags: str) -> list[MarkupNode]:
        """Direct child elements named any of *tags*, in document order."""
        ...

    def descendants(self, tag: str) -> list[MarkupNode]:
        """All descendant elements named *tag*, in document order."""
        ...

    def attr(self, name: str) -> str | None:
        """Value of attribute *name*, or ``None`` if absent."""
        ...

    def text(self) -> str:
        """Concatenated text content with surrounding whitespace removed."""
        ...


class SoupNode:
    """:class:`MarkupNode` backed by a BeautifulSoup ``Tag``."""

    __slots__ = ("_el",)

    def __init__(self, el: Tag) -> None:
        self._el = el

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag}>)"

    @property
    def tag(self) -> str:
        return self._el.name or ""

    def children(self, *tags: str) -> list[MarkupNode]:
        return [SoupNode(el) for el in self._el.find_all(list(tags), recursive=False)]

    def descendants(self, tag: str) -> list[MarkupNode]:
        return [SoupNode(el) for el in self._el.find_all(tag)]

    def attr(self, name: str) -> str | None:
        value = self._el.get(name)
        if value is None:
            return None
        # multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def text(self) -> str:
        return self._el.get_text().strip()


def load_markup(html: str) -> SoupNode:
    """Parse *html* with lxml and return the document root."""
    return SoupNode(BeautifulSoup(html, "lxml"))
