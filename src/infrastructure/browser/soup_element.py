"""
BeautifulSoup-backed rendered element.

Both page backends hand these to the field extraction rules: the static
backend wraps the parsed snapshot directly, the Playwright backend wraps
the outerHTML of each matched element.
"""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from src.domain.interfaces.page_interface import RenderedElement

# Elements whose content never renders as text
_SKIPPED_TAGS = {"script", "style", "template", "noscript"}

# Elements that start on a new line when rendered
_BLOCK_TAGS = {
    "address", "article", "dd", "div", "dl", "dt", "footer", "h1", "h2",
    "h3", "h4", "h5", "h6", "header", "li", "ol", "p", "section", "table",
    "tbody", "thead", "tr", "ul",
}


class SoupElement(RenderedElement):
    """
    RenderedElement over a bs4 Tag.

    Example:
        >>> root = SoupElement.from_html("<li><h3>Ann Lee</h3></li>")
        >>> root.select_one("h3").visible_text()
        'Ann Lee'
    """

    def __init__(self, tag: Tag):
        self._tag = tag

    @classmethod
    def from_html(cls, html: str, parser: str = "html.parser") -> "SoupElement":
        """
        Parse a markup fragment and wrap its first element.

        html.parser keeps fragments such as a bare <tr> where they are;
        lxml would relocate them.
        """
        soup = BeautifulSoup(html, parser)
        first = soup.find(True)
        return cls(first if first is not None else soup)

    @property
    def tag(self) -> str:
        return (self._tag.name or "").lower()

    def select(self, selector: str) -> List[RenderedElement]:
        return [SoupElement(found) for found in self._tag.select(selector)]

    def select_one(self, selector: str) -> Optional[RenderedElement]:
        found = self._tag.select_one(selector)
        return SoupElement(found) if found is not None else None

    def children(self) -> List[RenderedElement]:
        return [SoupElement(child) for child in self._tag.children if isinstance(child, Tag)]

    def matches(self, selector: str) -> bool:
        return self._tag.css.match(selector)

    def visible_text(self, exclude: Optional[str] = None) -> str:
        hidden = {id(t) for t in self._tag.select(exclude)} if exclude else set()
        parts: List[str] = []
        self._collect_text(self._tag, hidden, parts)
        return "".join(parts)

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            # multi-valued attributes such as class
            return " ".join(value)
        return value

    def _collect_text(self, tag: Tag, hidden: set, parts: List[str]) -> None:
        for child in tag.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                parts.append(str(child))
                continue
            if not isinstance(child, Tag) or id(child) in hidden:
                continue
            if child.name in _SKIPPED_TAGS:
                continue
            if child.name == "br":
                parts.append("\n")
                continue
            self._collect_text(child, hidden, parts)
            if child.name in _BLOCK_TAGS:
                parts.append("\n")

    def __repr__(self) -> str:
        return f"SoupElement(<{self.tag}>)"
