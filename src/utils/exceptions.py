"""
Custom exception hierarchy for the local help scraper.

- AppException: Base for all application errors
- ConfigError: Configuration file problems
- ScraperError: Browser and page errors
- ValidationError: Bad URLs and crawl arguments

Every exception carries a message, a short code (one per class) and a
context dict with the offending values (url, selector, path, ...).

Example:
    >>> from src.utils.exceptions import InvalidURLError
    >>> raise InvalidURLError("Base URL is not absolute", url="results?page=2")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code; defaults to the class's default_code.
        context: Values describing what failed.
    """

    default_code = "APP_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def _with_values(context: Optional[Dict[str, Any]], **values: Any) -> Dict[str, Any]:
    """Merge the given non-None values into a copy of context."""
    merged = dict(context or {})
    merged.update({key: value for key, value in values.items() if value is not None})
    return merged


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """Raised when configuration cannot be loaded."""

    default_code = "CONFIG_ERROR"


class ConfigFileNotFoundError(ConfigError):
    """
    Raised when the configuration file does not exist.

    Example:
        >>> raise ConfigFileNotFoundError(
        ...     "Configuration file not found",
        ...     path="config/config.yaml"
        ... )
    """

    default_code = "CONFIG_FILE_NOT_FOUND"

    def __init__(
        self,
        message: str = "Configuration file not found",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=_with_values(context, path=path))


# ============================================
# Scraper Errors
# ============================================


class ScraperError(AppException):
    """
    Base exception for browser and page errors.

    Raised for navigation failures, marker waits that time out and
    markup that cannot be read.
    """

    default_code = "SCRAPER_ERROR"


class NavigationError(ScraperError):
    """
    Raised when the browser fails to navigate to a page.

    Example:
        >>> raise NavigationError(
        ...     "net::ERR_NAME_NOT_RESOLVED",
        ...     url="https://www.healthcare.gov/find-local-help/results?page=3"
        ... )
    """

    default_code = "NAVIGATION_ERROR"

    def __init__(
        self,
        message: str = "Navigation failed",
        url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=_with_values(context, url=url))


class MarkerTimeoutError(ScraperError):
    """
    Raised when a marker selector does not appear within its timeout.

    The result waiter treats this as an expected outcome; everywhere else
    it propagates like any other scraper error.
    """

    default_code = "MARKER_TIMEOUT"

    def __init__(
        self,
        message: str = "Marker did not appear in time",
        selector: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            context=_with_values(context, selector=selector, timeout_ms=timeout_ms),
        )


class PageParsingError(ScraperError):
    """
    Raised when rendered markup cannot be read at all.

    Missing fields never raise this; they decay to absent values.
    """

    default_code = "PAGE_PARSE"

    def __init__(
        self,
        message: str = "Failed to parse page content",
        url: Optional[str] = None,
        selector: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=_with_values(context, url=url, selector=selector))


# ============================================
# Validation Errors
# ============================================


class ValidationError(AppException):
    """Raised when a URL or crawl argument is out of range."""

    default_code = "VALIDATION_ERROR"


class InvalidURLError(ValidationError):
    """Raised when the base URL is not an absolute HTTP(S) URL."""

    default_code = "INVALID_URL"

    def __init__(
        self,
        message: str = "Invalid URL",
        url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=_with_values(context, url=url))
