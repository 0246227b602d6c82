"""Unit tests for page URL arithmetic."""

import pytest

from src.scraper.navigator import query_value, starting_page, url_for_page
from src.utils.exceptions import InvalidURLError

CAPTURED_URL = (
    "https://www.healthcare.gov/find-local-help/results?q=ORANGE+PARK%2C+FL+32073"
    "&lat=30.17055&lng=-81.7348&city=ORANGE+PARK&state=FL&zip_code=32073&mp=FFM"
    "&page=95&coverage=individual&types=agent&types=multistate&name=#95"
)


class TestUrlForPage:
    """Test building page URLs from a template."""

    def test_sets_page_and_fragment(self):
        url = url_for_page("https://example.test/results?page=1#1", 7)
        assert url == "https://example.test/results?page=7#7"

    def test_preserves_other_parameters_verbatim(self):
        url = url_for_page(CAPTURED_URL, 3)

        assert url == (
            "https://www.healthcare.gov/find-local-help/results?q=ORANGE+PARK%2C+FL+32073"
            "&lat=30.17055&lng=-81.7348&city=ORANGE+PARK&state=FL&zip_code=32073&mp=FFM"
            "&page=3&coverage=individual&types=agent&types=multistate&name=#3"
        )

    def test_appends_missing_page_parameter(self):
        url = url_for_page("https://example.test/results?zip_code=32073", 2)
        assert url == "https://example.test/results?zip_code=32073&page=2#2"

    def test_no_query(self):
        assert url_for_page("https://example.test/results", 4) == "https://example.test/results?page=4#4"

    def test_custom_page_parameter(self):
        url = url_for_page("https://example.test/r?p=1&page=9", 5, page_param="p")
        assert url == "https://example.test/r?p=5&page=9#5"

    def test_repeated_page_parameter_collapses(self):
        url = url_for_page("https://example.test/r?page=1&a=b&page=2", 6)
        assert url == "https://example.test/r?page=6&a=b#6"

    @pytest.mark.parametrize("base_url", [
        "results?page=1",
        "/find-local-help/results?page=2",
        "not a url",
        "",
    ])
    def test_rejects_relative_urls(self, base_url):
        with pytest.raises(InvalidURLError):
            url_for_page(base_url, 1)


class TestStartingPage:
    """Test deriving the first page from a URL."""

    def test_reads_page_parameter(self):
        assert starting_page(CAPTURED_URL) == 95

    @pytest.mark.parametrize("query,expected", [
        ("", 1),
        ("?page=", 1),
        ("?page=abc", 1),
        ("?page=0", 1),
        ("?page=-4", 1),
        ("?page=12", 12),
        ("?zip_code=32073", 1),
    ])
    def test_defaults_to_one(self, query, expected):
        assert starting_page(f"https://example.test/results{query}") == expected

    def test_rejects_relative_url(self):
        with pytest.raises(InvalidURLError):
            starting_page("results?page=3")


def test_query_value_decodes():
    assert query_value(CAPTURED_URL, "q") == "ORANGE PARK, FL 32073"
    assert query_value(CAPTURED_URL, "zip_code") == "32073"
    assert query_value(CAPTURED_URL, "missing") is None
