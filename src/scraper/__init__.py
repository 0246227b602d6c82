"""Paginated crawling of the local help directory.

This module provides the pagination-and-extraction engine:
- DirectoryCrawler: fetch/wait/extract/compare loop with a page budget
- ContactExtractor: list item to ContactRecord rules
- ResultWaiter: list readiness check
- url_for_page / starting_page: page URL arithmetic
- PageFileSink: incremental JSON persistence
- Data models: ContactRecord, PageBundle, CrawlOutcome, CrawlResult

Usage:
    from src.infrastructure.browser import browser_session
    from src.scraper import DirectoryCrawler, PageFileSink

    sink = PageFileSink(Path("output/json"), label="32073")
    async with browser_session() as page:
        bundles = await DirectoryCrawler().crawl(page, max_pages=5, on_page=sink)
    sink.write_combined()
"""

from .crawler import CrawlState, DirectoryCrawler, crawl_directory
from .extractor import ContactExtractor
from .models import ContactRecord, CrawlOutcome, CrawlResult, PageBundle
from .navigator import starting_page, url_for_page
from .signature import page_signature
from .storage import PageFileSink, load_records, read_json, write_json
from .waiter import ResultWaiter

__all__ = [
    "ContactRecord",
    "PageBundle",
    "CrawlOutcome",
    "CrawlResult",
    "CrawlState",
    "DirectoryCrawler",
    "crawl_directory",
    "ContactExtractor",
    "ResultWaiter",
    "page_signature",
    "url_for_page",
    "starting_page",
    "PageFileSink",
    "load_records",
    "read_json",
    "write_json",
]
