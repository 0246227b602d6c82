"""
Static page backend serving saved HTML snapshots.

Snapshots are keyed by page number; navigation reads the page number from
the URL's page query parameter. Used to re-extract saved result pages
offline and as the fixture backend in tests.

Example:
    >>> page = StaticPage({1: html_page_one, 2: html_page_two})
    >>> bundles = await DirectoryCrawler(config).crawl(page)
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, TypeVar
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup

from src.domain.interfaces.page_interface import RenderablePage, RenderedElement
from src.infrastructure.browser.soup_element import SoupElement
from src.utils.exceptions import MarkerTimeoutError, NavigationError, PageParsingError
from src.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StaticPage(RenderablePage):
    """
    RenderablePage over in-memory HTML documents.

    A page number with no snapshot loads an empty document, so marker
    waits on it fail the same way a live page without results would.

    Attributes:
        url: Last URL navigated to.
        visited: Every URL navigated to, in order.
    """

    def __init__(self, pages: Mapping[int, str], page_param: str = "page"):
        self._pages: Dict[int, str] = dict(pages)
        self._page_param = page_param
        self._document: Optional[BeautifulSoup] = None
        self.url: Optional[str] = None
        self.visited: List[str] = []

    @classmethod
    def from_directory(cls, directory: Path, page_param: str = "page") -> "StaticPage":
        """
        Load snapshots named <page number>.html from a directory.

        Raises:
            PageParsingError: If the directory holds no usable snapshot.
        """
        pages: Dict[int, str] = {}
        for path in sorted(Path(directory).glob("*.html")):
            if not path.stem.isdigit():
                logger.warning(f"Skipping snapshot without a page number: {path.name}")
                continue
            pages[int(path.stem)] = path.read_text(encoding="utf-8")

        if not pages:
            raise PageParsingError(
                f"No <page>.html snapshots found in {directory}",
                context={"directory": str(directory)},
            )

        logger.info(f"Loaded {len(pages)} snapshot(s) from {directory}")
        return cls(pages, page_param=page_param)

    async def navigate(self, url: str, wait_until: str = "domcontentloaded") -> None:
        values = parse_qs(urlsplit(url).query).get(self._page_param, [])
        page_number = int(values[0]) if values and values[0].isdigit() else None

        html = self._pages.get(page_number, "") if page_number is not None else ""
        self._document = BeautifulSoup(html, "lxml")
        self.url = url
        self.visited.append(url)
        logger.debug(f"Static navigation to page {page_number} ({len(html)} bytes)")

    async def wait_for_marker(self, selector: str, timeout_ms: int) -> None:
        document = self._require_document()
        if document.select_one(selector) is None:
            raise MarkerTimeoutError(
                f"Marker not present: {selector}",
                selector=selector,
                timeout_ms=timeout_ms,
            )

    async def extract_all(
        self,
        selector: str,
        mapper: Callable[[RenderedElement], T],
    ) -> List[T]:
        document = self._require_document()
        return [mapper(SoupElement(found)) for found in document.select(selector)]

    def _require_document(self) -> BeautifulSoup:
        if self._document is None:
            raise NavigationError("No page loaded; call navigate() first")
        return self._document
