"""Field extraction for directory result items.

This module turns one rendered list item into a ContactRecord. Every
optional field decays to None when its markup is missing or does not
parse; only an item without a name is dropped.

Parsing rules:
1. Name from the first heading, screen-reader text removed
2. Address block split into lines; second line parsed as City, ST ZIP
3. Phone, email and website from scheme-prefixed anchors
4. Years of service from a "<N> year" phrase
5. Roles from badges
6. Languages and licensed states from labeled rows
7. Office hours from rows with a bold weekday label
"""

import re
from typing import Iterator, List, Optional

from src.domain.interfaces.page_interface import RenderablePage, RenderedElement
from src.utils.config import SelectorConfig
from src.utils.logger import get_logger

from .models import WEEKDAYS, ContactRecord

logger = get_logger(__name__)

CITY_STATE_ZIP_RE = re.compile(r"^(.+?),\s*([A-Z]{2})\s*(\d{5})(-\d{4})?$")
YEARS_RE = re.compile(r"(\d+)\s*year", re.IGNORECASE)
LANGUAGES_LABEL_RE = re.compile(r"^languages spoken:?$", re.IGNORECASE)
LICENSED_IN_LABEL_RE = re.compile(r"^licensed in:?$", re.IGNORECASE)


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs and trim."""
    return " ".join((text or "").split())


def split_address_block(text: str) -> list[str]:
    """Split an address block into trimmed, non-empty lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def parse_city_state_zip(line: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """Parse ``City, ST 12345[-6789]`` into (city, state, zip).

    Returns:
        Three Nones when the line does not match. The ZIP+4 suffix is
        dropped.
    """
    match = CITY_STATE_ZIP_RE.match(line.strip())
    if not match:
        return None, None, None
    return match.group(1).strip(), match.group(2), match.group(3)


def parse_years_of_service(text: str) -> Optional[int]:
    """Return N from the first "<N> year" phrase, or None."""
    match = YEARS_RE.search(text)
    return int(match.group(1)) if match else None


def split_tokens(text: str, separators: str = r",") -> Optional[list[str]]:
    """Split on a separator pattern, keeping trimmed non-empty tokens.

    Returns:
        None instead of an empty list
    """
    tokens = [clean_text(token) for token in re.split(separators, text)]
    tokens = [token for token in tokens if token]
    return tokens or None


class ContactExtractor:
    """Maps rendered directory list items into ContactRecords."""

    def __init__(self, selectors: Optional[SelectorConfig] = None):
        self.selectors = selectors or SelectorConfig()

    async def extract_page(self, page: RenderablePage) -> List[ContactRecord]:
        """Extract every named record on the current page, in list order."""
        parsed = await page.extract_all(self.selectors.list_items, self.parse_item)
        records = [record for record in parsed if record is not None]

        dropped = len(parsed) - len(records)
        if dropped:
            logger.debug(f"Dropped {dropped} item(s) without a name")
        return records

    async def item_names(self, page: RenderablePage) -> List[str]:
        """Return the rendered names of the current page's items, blanks omitted."""
        names = await page.extract_all(self.selectors.list_items, self.extract_name)
        return [name for name in names if name]

    def extract_name(self, item: RenderedElement) -> str:
        heading = item.select_one(self.selectors.name)
        return self._text(heading)

    def parse_item(self, item: RenderedElement) -> Optional[ContactRecord]:
        """Parse one list item.

        Args:
            item: Rendered list item element

        Returns:
            ContactRecord, or None when the item has no name
        """
        name = self.extract_name(item)
        if not name:
            return None

        address, city, state, zip_code = self._extract_address(item)

        return ContactRecord(
            name=name,
            address=address,
            city=city,
            state=state,
            zip=zip_code,
            phone=self._extract_phone(item),
            website=self._extract_website(item),
            email=self._extract_email(item),
            years_of_service=self._extract_years(item),
            roles=self._extract_roles(item),
            languages=self._extract_labeled_list(item, LANGUAGES_LABEL_RE, r"[,\n]"),
            licensed_in=self._extract_labeled_list(item, LICENSED_IN_LABEL_RE, r","),
            hours=self._extract_hours(item),
        )

    def _text(self, element: Optional[RenderedElement]) -> str:
        if element is None:
            return ""
        return clean_text(element.visible_text(self.selectors.screen_reader_only))

    def _extract_address(self, item: RenderedElement):
        element = item.select_one(self.selectors.address)
        if element is None:
            return None, None, None, None

        lines = split_address_block(element.visible_text(self.selectors.screen_reader_only))
        address = lines[0] if lines else None
        city, state, zip_code = parse_city_state_zip(lines[1]) if len(lines) > 1 else (None, None, None)
        return address, city, state, zip_code

    def _extract_phone(self, item: RenderedElement) -> Optional[str]:
        phone = self._text(item.select_one(self.selectors.phone))
        if not phone:
            phone = self._text(item.select_one(self.selectors.phone_fallback))
        return phone or None

    def _extract_email(self, item: RenderedElement) -> Optional[str]:
        anchor = item.select_one(self.selectors.email)
        if anchor is None:
            return None

        email = clean_text(anchor.attr("title")) or self._text(anchor)
        if not email:
            # mailto:someone@example.com?subject=...
            href = anchor.attr("href") or ""
            email = href.split(":", 1)[-1].split("?", 1)[0].strip()
        return email or None

    def _extract_website(self, item: RenderedElement) -> Optional[str]:
        anchor = item.select_one(self.selectors.website)
        if anchor is None:
            return None
        return (anchor.attr("href") or "").strip() or None

    def _extract_years(self, item: RenderedElement) -> Optional[int]:
        for region in item.select(self.selectors.years_region):
            years = parse_years_of_service(self._text(region))
            if years is not None:
                return years
        return None

    def _extract_roles(self, item: RenderedElement) -> Optional[list[str]]:
        roles = [self._text(badge) for badge in item.select(self.selectors.badge)]
        roles = [role for role in roles if role]
        return roles or None

    def _row_cells(self, item: RenderedElement) -> Iterator[List[RenderedElement]]:
        for row in item.select(self.selectors.row):
            cells = row.children()
            if len(cells) >= 2:
                yield cells

    def _extract_labeled_list(
        self, item: RenderedElement, label: re.Pattern, separators: str
    ) -> Optional[list[str]]:
        for cells in self._row_cells(item):
            for label_cell, value_cell in zip(cells, cells[1:]):
                if label.match(self._text(label_cell)):
                    raw = value_cell.visible_text(self.selectors.screen_reader_only)
                    return split_tokens(raw, separators)
        return None

    def _is_bold(self, cell: RenderedElement) -> bool:
        # the label cell can be the bold element itself or wrap one
        bold = self.selectors.bold_label
        return cell.tag == "th" or cell.matches(bold) or cell.select_one(bold) is not None

    def _extract_hours(self, item: RenderedElement) -> Optional[dict[str, str]]:
        hours: dict[str, str] = {}
        for cells in self._row_cells(item):
            label_cell, value_cell = cells[0], cells[1]
            if not self._is_bold(label_cell):
                continue

            day = self._text(label_cell).rstrip(":").strip()
            if day not in WEEKDAYS:
                continue

            time_range = self._text(value_cell)
            if time_range:
                hours[day] = time_range
        return hours or None
