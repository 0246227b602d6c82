"""Command-line interface for the directory crawler.

Usage:
    python -m src.scraper.cli --url "https://www.healthcare.gov/find-local-help/results?...&page=1" --max-pages 5
"""

import argparse
import asyncio
import sys
from pathlib import Path

from tqdm import tqdm

from src.domain.interfaces.page_interface import RenderablePage
from src.infrastructure.browser import StaticPage, browser_session
from src.utils import get_config, get_logger, log_exception, set_log_level
from src.utils.config import AppConfig

from .crawler import DirectoryCrawler
from .models import CrawlResult, PageBundle
from .storage import PageFileSink, zip_label

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Crawl a paginated local help directory into JSON contact records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Crawl from the configured results URL until the directory runs out
  python -m src.scraper.cli

  # Crawl a captured results URL, 5 pages starting at page 3
  python -m src.scraper.cli --url "https://www.healthcare.gov/find-local-help/results?zip_code=32073&page=1" \\
      --start-page 3 --max-pages 5

  # Re-extract saved snapshots (1.html, 2.html, ...) without a browser
  python -m src.scraper.cli --from-html snapshots/ --output-dir output/replay
        """
    )

    parser.add_argument(
        '--url',
        type=str,
        default=None,
        help='Results URL to crawl (overrides config); only its page parameter and fragment change'
    )

    parser.add_argument(
        '--start-page',
        type=int,
        default=None,
        help='First page to fetch (default: page number in the URL, else 1)'
    )

    parser.add_argument(
        '--max-pages',
        type=int,
        default=None,
        help='Maximum number of pages to accept (overrides config)'
    )

    parser.add_argument(
        '--output-dir',
        type=Path,
        default=None,
        help='Output directory for JSON files (overrides config)'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to configuration file (default: auto-detect)'
    )

    parser.add_argument(
        '--headed',
        action='store_true',
        help='Show the browser window'
    )

    parser.add_argument(
        '--from-html',
        type=Path,
        default=None,
        metavar='DIR',
        help='Crawl saved <page>.html snapshots from DIR instead of a live browser'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Override log level'
    )

    args = parser.parse_args(argv)
    if args.start_page is not None and args.start_page < 1:
        parser.error("--start-page must be at least 1")
    if args.max_pages is not None and args.max_pages < 1:
        parser.error("--max-pages must be at least 1")
    return args


async def run_crawl(page: RenderablePage, config: AppConfig, args: argparse.Namespace) -> tuple[CrawlResult, PageFileSink]:
    """Crawl with a file sink and a progress bar, then write the combined file."""
    base_url = args.url or config.crawler.base_url
    output_dir = args.output_dir or Path(config.output.output_dir)
    sink = PageFileSink(output_dir, label=zip_label(base_url, config.output.zip_param))

    crawler = DirectoryCrawler(config.crawler)

    with tqdm(desc="Crawling pages", unit="page", total=args.max_pages or config.crawler.max_pages) as progress:
        async def on_page(bundle: PageBundle) -> None:
            await sink(bundle)
            progress.update(1)
            progress.set_postfix(records=len(sink.records))

        result = await crawler.crawl_with_outcome(
            page,
            base_url=base_url,
            start_page=args.start_page,
            max_pages=args.max_pages,
            on_page=on_page,
        )

    sink.write_combined()
    return result, sink


async def main(argv=None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    try:
        config = get_config(args.config)

        set_log_level(args.log_level or config.log_level)
        if args.headed:
            config.browser.headless = False

        logger.info("=" * 60)
        logger.info("Local Help Directory Crawler")
        logger.info("=" * 60)
        logger.info(f"URL: {args.url or config.crawler.base_url}")
        logger.info(f"Start page: {args.start_page or config.crawler.start_page or 'from URL'}")
        logger.info(f"Max pages: {args.max_pages or config.crawler.max_pages or 'unbounded'}")
        logger.info(f"Source: {args.from_html or 'live browser'}")
        logger.info("=" * 60)

        if args.from_html:
            page = StaticPage.from_directory(args.from_html, page_param=config.crawler.page_param)
            result, sink = await run_crawl(page, config, args)
        else:
            async with browser_session(config.browser) as page:
                result, sink = await run_crawl(page, config, args)

        print("\n" + "=" * 60)
        print("CRAWL SUMMARY")
        print("=" * 60)
        print(f"Stopped: {result.outcome.value}")
        print(f"Pages Accepted: {result.pages_fetched}")
        print(f"Total Records: {result.total_records}")
        print(f"Combined File: {sink.combined_path()}")
        print("=" * 60)

        if sink.records:
            print("\nFirst 5 records:")
            for i, record in enumerate(sink.records[:5], 1):
                location = ", ".join(part for part in (record.city, record.state) if part)
                print(f"  {i}. {record.name}" + (f" - {location}" if location else ""))

        return 0

    except KeyboardInterrupt:
        logger.warning("Crawl interrupted by user")
        print("\n✗ Crawl cancelled by user")
        return 1

    except Exception as e:
        log_exception(logger, "directory crawl", e)
        print(f"\n✗ Crawl failed: {e}")
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
