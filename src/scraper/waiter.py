"""Readiness check for a freshly navigated results page."""

from src.domain.interfaces.page_interface import RenderablePage
from src.utils.config import CrawlerConfig
from src.utils.exceptions import MarkerTimeoutError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ResultWaiter:
    """Waits until a results page has rendered its list.

    Phase one waits for the results container but tolerates its absence,
    since some valid pages render the list without it. Phase two waits for
    the first list item; its timeout means the page has no content.
    """

    def __init__(self, config: CrawlerConfig):
        self.config = config
        self.selectors = config.selectors

    async def wait_for_results(self, page: RenderablePage) -> bool:
        """Wait for list content on the current page.

        Args:
            page: Page that has already been navigated

        Returns:
            True once at least one list item is present, False if none
            appeared within the items timeout

        Raises:
            Any non-timeout failure from the page
        """
        try:
            await page.wait_for_marker(self.selectors.results_container, self.config.container_timeout_ms)
        except MarkerTimeoutError:
            logger.debug("Results container not found; waiting for list items anyway")

        try:
            await page.wait_for_marker(self.selectors.list_items, self.config.items_timeout_ms)
        except MarkerTimeoutError as e:
            logger.debug(f"List items not found: {e}")
            return False

        return True
