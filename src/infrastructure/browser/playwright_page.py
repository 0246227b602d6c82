"""
Playwright page backend.

Handles:
- Browser session management with Playwright
- Navigation and marker waits on the live page
- Handing matched elements to the extraction rules as parsed markup

Example:
    >>> async with browser_session(config.browser) as page:
    ...     bundles = await DirectoryCrawler(config.crawler).crawl(page)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List, Optional, TypeVar, TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from src.domain.interfaces.page_interface import RenderablePage, RenderedElement
from src.infrastructure.browser.soup_element import SoupElement
from src.utils.config import BrowserConfig
from src.utils.exceptions import MarkerTimeoutError, NavigationError
from src.utils.logger import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)

T = TypeVar("T")

# Serializes each matched element in document order
_OUTER_HTML_SCRIPT = "elements => elements.map(el => el.outerHTML)"

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PlaywrightPage(RenderablePage):
    """
    RenderablePage over a Playwright Page.

    Attributes:
        page: Underlying Playwright page.
    """

    def __init__(self, page: "Page"):
        self.page = page

    @property
    def url(self) -> str:
        return self.page.url

    async def navigate(self, url: str, wait_until: str = "domcontentloaded") -> None:
        """
        Navigate to url.

        Raises:
            NavigationError: If Playwright fails to load the page.
        """
        try:
            await self.page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise NavigationError(str(e), url=url) from e

    async def wait_for_marker(self, selector: str, timeout_ms: int) -> None:
        try:
            await self.page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise MarkerTimeoutError(
                f"Timed out after {timeout_ms}ms waiting for {selector}",
                selector=selector,
                timeout_ms=timeout_ms,
            ) from e

    async def extract_all(
        self,
        selector: str,
        mapper: Callable[[RenderedElement], T],
    ) -> List[T]:
        fragments: List[str] = await self.page.eval_on_selector_all(selector, _OUTER_HTML_SCRIPT)
        logger.debug(f"Matched {len(fragments)} element(s) for {selector}")
        return [mapper(SoupElement.from_html(html)) for html in fragments]


@asynccontextmanager
async def browser_session(config: Optional[BrowserConfig] = None) -> AsyncIterator[PlaywrightPage]:
    """
    Launch Chromium and yield a ready PlaywrightPage.

    The browser is always closed on exit, including when the body raises.

    Args:
        config: Browser settings. Defaults to BrowserConfig().
    """
    config = config or BrowserConfig()

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=config.headless,
            args=BROWSER_ARGS,
        )
        logger.info(f"Browser launched (headless={config.headless})")

        try:
            context = await browser.new_context(
                viewport={'width': config.viewport_width, 'height': config.viewport_height},
            )
            page = await context.new_page()
            page.set_default_timeout(config.default_timeout_ms)
            yield PlaywrightPage(page)
        finally:
            await browser.close()
            logger.info("Browser closed")
