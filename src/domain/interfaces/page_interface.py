"""
Abstract interfaces for rendered pages and their elements.

The crawler and the field extraction rules only talk to these contracts,
so they run the same against a live browser page and against saved
markup.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, TypeVar

T = TypeVar("T")


class RenderedElement(ABC):
    """
    Read-only view of one element in a rendered document.
    """

    @property
    @abstractmethod
    def tag(self) -> str:
        """Lower-case tag name."""

    @abstractmethod
    def select(self, selector: str) -> List["RenderedElement"]:
        """Return descendants matching a CSS selector, in document order."""

    @abstractmethod
    def select_one(self, selector: str) -> Optional["RenderedElement"]:
        """Return the first descendant matching a CSS selector, or None."""

    @abstractmethod
    def children(self) -> List["RenderedElement"]:
        """Return direct child elements (text nodes excluded)."""

    @abstractmethod
    def matches(self, selector: str) -> bool:
        """Return True if this element itself matches a CSS selector."""

    @abstractmethod
    def visible_text(self, exclude: Optional[str] = None) -> str:
        """
        Text as a reader would see it.

        Line breaks and block boundaries become newlines. The result is
        not stripped.

        Args:
            exclude: CSS selector for descendants whose text is left out
                (e.g. screen-reader-only decoration).
        """

    @abstractmethod
    def attr(self, name: str) -> Optional[str]:
        """Return an attribute value, or None when it is missing."""


class RenderablePage(ABC):
    """
    Abstract base class for a page the crawler can drive.

    Defines the contract for navigating, waiting for rendered markers,
    and mapping matched elements into values.
    """

    @abstractmethod
    async def navigate(self, url: str, wait_until: str = "domcontentloaded") -> None:
        """
        Navigate to a URL.

        Args:
            url: Absolute URL to load.
            wait_until: Load state after which navigation settles.
        """

    @abstractmethod
    async def wait_for_marker(self, selector: str, timeout_ms: int) -> None:
        """
        Wait for an element matching selector to appear.

        Raises:
            MarkerTimeoutError: If no element appears within timeout_ms.
        """

    @abstractmethod
    async def extract_all(
        self,
        selector: str,
        mapper: Callable[[RenderedElement], T],
    ) -> List[T]:
        """
        Map every element matching selector, in document order.

        Args:
            selector: CSS selector for the elements to map.
            mapper: Function applied to each matched element.

        Returns:
            Mapped values in the order the elements were rendered.
        """
