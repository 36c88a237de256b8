"""
Markup Record Extraction

Thin structural-query layer over BeautifulSoup. Catalog code only ever talks to
`Element`, so the site's markup quirks stay behind CSS selectors defined in
`apkfetch.constants`.
"""

from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag


class Element:
    """A handle on one node of a parsed document."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"Element(<{self._tag.name}>)"

    def find_all(self, query: str) -> List["Element"]:
        """Return all descendants matching the CSS selector `query`, in document order."""
        return [Element(tag) for tag in self._tag.select(query)]

    def find_one(self, query: str) -> Optional["Element"]:
        """Return the first descendant matching `query`, or None."""
        tag = self._tag.select_one(query)
        return Element(tag) if tag is not None else None

    def text(self) -> str:
        """Return the node's text content with surrounding whitespace removed."""
        return self._tag.get_text().strip()

    def attr(self, name: str) -> Optional[str]:
        """
        Return an attribute value, or None when absent.

        Multi-valued attributes such as `class` are joined with spaces.
        """
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)


def parse_document(markup: str) -> Element:
    """
    Parse HTML into a queryable document.

    Uses the stdlib-backed `html.parser` builder, which accepts malformed or truncated
    markup without raising.
    """
    return Element(BeautifulSoup(markup or "", "html.parser"))


def extract(document: Element, query: str) -> List[Element]:
    """Return every element of `document` matching `query`; empty when nothing matches."""
    return document.find_all(query)
