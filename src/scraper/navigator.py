"""URL helpers for walking a paginated results listing.

Only the page query parameter and the fragment change between pages; the
fragment mirrors the page number so client-side routers keyed on it render
the same page the query asks for.
"""

from urllib.parse import unquote_plus, urlsplit, urlunsplit

from src.utils.exceptions import InvalidURLError

DEFAULT_PAGE_PARAM = "page"


def _split_absolute(base_url: str):
    try:
        parts = urlsplit(base_url)
    except ValueError as e:
        raise InvalidURLError(f"Malformed base URL: {e}", url=base_url) from e

    if not parts.scheme or not parts.netloc:
        raise InvalidURLError("Base URL must be absolute (scheme and host)", url=base_url)
    return parts


def _query_pairs(query: str) -> list[tuple[str, str, str]]:
    """Split a raw query into (raw segment, decoded key, decoded value)."""
    pairs = []
    for segment in query.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs.append((segment, unquote_plus(key), unquote_plus(value)))
    return pairs


def url_for_page(base_url: str, page_number: int, page_param: str = DEFAULT_PAGE_PARAM) -> str:
    """Build the URL of one results page.

    Every other query segment is kept byte for byte, including repeated
    keys and blank values. When the page parameter is missing it is
    appended.

    Args:
        base_url: Absolute results URL used as the template
        page_number: Page to address
        page_param: Query parameter holding the page number

    Returns:
        URL with page_param and fragment set to page_number

    Raises:
        InvalidURLError: If base_url is not a well-formed absolute URL
    """
    parts = _split_absolute(base_url)
    page_segment = f"{page_param}={page_number}"

    segments = []
    replaced = False
    for segment, key, _ in _query_pairs(parts.query):
        if key == page_param:
            if not replaced:
                segments.append(page_segment)
                replaced = True
            continue
        segments.append(segment)
    if not replaced:
        segments.append(page_segment)

    return urlunsplit((
        parts.scheme,
        parts.netloc,
        parts.path,
        "&".join(segments),
        str(page_number),
    ))


def starting_page(base_url: str, page_param: str = DEFAULT_PAGE_PARAM) -> int:
    """Read the page number a base URL points at.

    Returns:
        The first page parameter's value, or 1 when it is absent, not a
        number, or not positive

    Raises:
        InvalidURLError: If base_url is not a well-formed absolute URL
    """
    parts = _split_absolute(base_url)
    for _, key, value in _query_pairs(parts.query):
        if key == page_param:
            try:
                page = int(value.strip())
            except ValueError:
                return 1
            return page if page > 0 else 1
    return 1


def query_value(url: str, name: str) -> str | None:
    """Return the first decoded value of a query parameter, or None."""
    for _, key, value in _query_pairs(urlsplit(url).query):
        if key == name:
            return value
    return None
