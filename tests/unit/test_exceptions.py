"""Unit tests for the exception hierarchy."""

from src.utils.exceptions import (
    AppException,
    InvalidURLError,
    MarkerTimeoutError,
    ScraperError,
    ValidationError,
)


def test_codes_default_per_class():
    assert ValidationError("bad").code == "VALIDATION_ERROR"
    assert InvalidURLError().code == "INVALID_URL"
    assert AppException("x", code="CUSTOM").code == "CUSTOM"


def test_context_keeps_given_values_only():
    error = MarkerTimeoutError("late", selector="ol li", timeout_ms=0, context={"page": 2})

    assert error.context == {"page": 2, "selector": "ol li", "timeout_ms": 0}
    assert isinstance(error, ScraperError)
    assert str(error) == "[MARKER_TIMEOUT] late"


def test_url_omitted_when_missing():
    assert InvalidURLError("nope").context == {}
