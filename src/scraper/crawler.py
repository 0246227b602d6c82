"""Paginated crawl over the directory results listing.

The crawler walks result pages one at a time: navigate, pause, wait for
the list, extract records, compare the page fingerprint with the previous
page, then hand the page to the sink. It stops on the first of:

- the list never renders (not found)
- the list renders without named items (exhausted)
- the page repeats the previous one (duplicate)
- the page budget is spent (budget)

Example:
    >>> crawler = DirectoryCrawler(config.crawler)
    >>> bundles = await crawler.crawl(page, max_pages=5, on_page=sink)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from src.domain.interfaces.page_interface import RenderablePage
from src.utils.config import CrawlerConfig
from src.utils.exceptions import ValidationError
from src.utils.logger import get_logger, log_execution_time

from .extractor import ContactExtractor
from .models import CrawlOutcome, CrawlResult, PageBundle
from .navigator import starting_page, url_for_page
from .signature import page_signature
from .waiter import ResultWaiter

logger = get_logger(__name__)

PageSink = Callable[[PageBundle], Awaitable[None]]


@dataclass
class CrawlState:
    """
    Mutable state of one crawl run.

    Created when a run starts and dropped when it returns.
    """
    page_number: int
    previous_signature: Optional[str] = None
    pages_fetched: int = 0
    bundles: List[PageBundle] = field(default_factory=list)
    outcome: CrawlOutcome = CrawlOutcome.RUNNING


class DirectoryCrawler:
    """
    Drives the fetch/wait/extract/compare loop over result pages.

    Attributes:
        config: Crawl settings (base URL, budget, timeouts, selectors).
        extractor: Record extraction rules.
        waiter: List readiness check.
    """

    def __init__(
        self,
        config: Optional[CrawlerConfig] = None,
        extractor: Optional[ContactExtractor] = None,
        waiter: Optional[ResultWaiter] = None,
    ):
        self.config = config or CrawlerConfig()
        self.extractor = extractor or ContactExtractor(self.config.selectors)
        self.waiter = waiter or ResultWaiter(self.config)

    async def crawl(
        self,
        page: RenderablePage,
        base_url: Optional[str] = None,
        start_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        on_page: Optional[PageSink] = None,
    ) -> List[PageBundle]:
        """
        Crawl result pages and return the accepted bundles in page order.

        Args:
            page: Page to drive.
            base_url: Results URL template. Defaults to config.base_url.
            start_page: First page number. Defaults to config.start_page,
                then to the page number in the base URL.
            max_pages: Page budget. Defaults to config.max_pages; None
                means no budget.
            on_page: Awaited once per accepted page, before the next
                page is fetched.

        Returns:
            Accepted PageBundles, whichever stop condition ended the run.

        Raises:
            InvalidURLError: If the base URL is not absolute.
            ValidationError: If start_page or max_pages is below 1.
            ScraperError: On any page failure other than a missing list.
        """
        result = await self.crawl_with_outcome(page, base_url, start_page, max_pages, on_page)
        return result.bundles

    async def crawl_with_outcome(
        self,
        page: RenderablePage,
        base_url: Optional[str] = None,
        start_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        on_page: Optional[PageSink] = None,
    ) -> CrawlResult:
        """Same as crawl(), also reporting why the run stopped."""
        base_url = base_url or self.config.base_url
        page_param = self.config.page_param

        if start_page is None:
            start_page = self.config.start_page or starting_page(base_url, page_param)
        if max_pages is None:
            max_pages = self.config.max_pages

        if start_page < 1:
            raise ValidationError(
                f"start_page must be at least 1, got {start_page}",
                context={"start_page": start_page},
            )
        if max_pages is not None and max_pages < 1:
            raise ValidationError(
                f"max_pages must be at least 1, got {max_pages}",
                context={"max_pages": max_pages},
            )

        state = CrawlState(page_number=start_page)
        budget = f"{max_pages} page(s)" if max_pages is not None else "unbounded"
        logger.info(f"Starting crawl at page {start_page} (budget: {budget})")

        with log_execution_time(logger, "directory crawl"):
            while state.outcome is CrawlOutcome.RUNNING:
                await self._crawl_one(page, base_url, state, max_pages, on_page)

        records = sum(len(bundle.records) for bundle in state.bundles)
        logger.info(
            f"Crawl finished ({state.outcome.value}): "
            f"{records} records across {len(state.bundles)} page(s)"
        )
        return CrawlResult(
            bundles=state.bundles,
            outcome=state.outcome,
            pages_fetched=state.pages_fetched,
        )

    async def _crawl_one(
        self,
        page: RenderablePage,
        base_url: str,
        state: CrawlState,
        max_pages: Optional[int],
        on_page: Optional[PageSink],
    ) -> None:
        """Run one iteration, updating state in place."""
        page_number = state.page_number
        url = url_for_page(base_url, page_number, self.config.page_param)

        await page.navigate(url, wait_until=self.config.navigation_wait_until)
        logger.info(f"Loaded results page {page_number}")
        await asyncio.sleep(self.config.pacing_ms / 1000)

        if not await self.waiter.wait_for_results(page):
            logger.info(f"Results list not found on page {page_number}. Stopping.")
            state.outcome = CrawlOutcome.STOPPED_NOT_FOUND
            return

        records = await self.extractor.extract_page(page)
        if not records:
            logger.info(f"No items on page {page_number}. Stopping.")
            state.outcome = CrawlOutcome.STOPPED_EXHAUSTED
            return

        signature = page_signature(await self.extractor.item_names(page))
        if state.previous_signature is not None and signature == state.previous_signature:
            logger.info(f"Page {page_number} looks identical to previous. Stopping.")
            state.outcome = CrawlOutcome.STOPPED_DUPLICATE
            return

        bundle = PageBundle(page_number=page_number, records=tuple(records))
        if on_page is not None:
            await on_page(bundle)

        state.bundles.append(bundle)
        state.previous_signature = signature
        state.pages_fetched += 1
        state.page_number += 1
        logger.debug(f"Accepted page {page_number} with {len(records)} record(s)")

        if max_pages is not None and state.pages_fetched >= max_pages:
            logger.info(f"Reached page budget ({max_pages}). Stopping.")
            state.outcome = CrawlOutcome.STOPPED_BUDGET


async def crawl_directory(
    page: RenderablePage,
    config: Optional[CrawlerConfig] = None,
    base_url: Optional[str] = None,
    start_page: Optional[int] = None,
    max_pages: Optional[int] = None,
    on_page: Optional[PageSink] = None,
) -> List[PageBundle]:
    """Crawl with a one-off DirectoryCrawler. See DirectoryCrawler.crawl."""
    crawler = DirectoryCrawler(config)
    return await crawler.crawl(page, base_url, start_page, max_pages, on_page)
