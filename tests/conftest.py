"""Pytest fixtures and markup builders for the local help scraper tests."""

from typing import Optional

import pytest

from src.infrastructure.browser.static_page import StaticPage
from src.utils.config import AppConfig, CrawlerConfig, SelectorConfig, reset_config
from src.utils.logger import set_log_level

BASE_URL = (
    "https://www.healthcare.gov/find-local-help/results"
    "?q=ORANGE+PARK%2C+FL+32073&zip_code=32073&page=1&types=agent&types=multistate&name=#1"
)


def make_item(
    name: Optional[str],
    address_lines: Optional[list[str]] = None,
    phone: Optional[str] = None,
    extra: str = "",
) -> str:
    """Build the markup of one result list item."""
    heading = f"<h3>{name}</h3>" if name is not None else ""
    address = ""
    if address_lines:
        address = "<address>" + "<br>".join(address_lines) + "</address>"
    phone_link = f'<a href="tel:{phone}">{phone}</a>' if phone else ""
    return f"<li>{heading}{address}{phone_link}{extra}</li>"


def make_results_page(items: list[str], with_container: bool = True) -> str:
    """Wrap list items in a results page document."""
    body = "<ol>" + "".join(items) + "</ol>"
    if with_container:
        body = f'<div id="filter-results-container">{body}</div>'
    return f"<html><body>{body}</body></html>"


def make_named_page(prefix: str, count: int) -> str:
    """Results page with count items named '<prefix> <n>'."""
    return make_results_page([make_item(f"{prefix} {i}") for i in range(1, count + 1)])


@pytest.fixture
def selectors() -> SelectorConfig:
    """Selectors matching the markup built by make_results_page."""
    return SelectorConfig(list_items="ol li")


@pytest.fixture
def crawler_config(selectors) -> CrawlerConfig:
    """Crawler configuration without pacing delay."""
    return CrawlerConfig(
        base_url=BASE_URL,
        pacing_ms=0,
        container_timeout_ms=10,
        items_timeout_ms=10,
        selectors=selectors,
    )


@pytest.fixture
def test_config(crawler_config, tmp_path) -> AppConfig:
    """Application configuration writing into a temporary directory."""
    config = AppConfig(crawler=crawler_config, log_level="DEBUG")
    config.output.output_dir = str(tmp_path / "json")
    return config


@pytest.fixture
def static_page_factory():
    """Build a StaticPage from a page-number to markup mapping."""
    def factory(pages: dict[int, str]) -> StaticPage:
        return StaticPage(pages)
    return factory


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached configuration and package log level between tests."""
    yield
    reset_config()
    set_log_level("INFO")
