# Browser Package
"""
Page backends implementing the RenderablePage contract.

This module provides:
- PlaywrightPage / browser_session: live Chromium page
- StaticPage: saved HTML snapshots
- SoupElement: BeautifulSoup element view shared by both
"""

from src.infrastructure.browser.soup_element import SoupElement
from src.infrastructure.browser.static_page import StaticPage
from src.infrastructure.browser.playwright_page import PlaywrightPage, browser_session

__all__ = [
    "SoupElement",
    "StaticPage",
    "PlaywrightPage",
    "browser_session",
]
