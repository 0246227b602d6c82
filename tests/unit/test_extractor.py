"""Unit tests for contact field extraction."""

import asyncio

import pytest

from conftest import make_item, make_results_page
from src.infrastructure.browser.soup_element import SoupElement
from src.infrastructure.browser.static_page import StaticPage
from src.scraper.extractor import (
    ContactExtractor,
    parse_city_state_zip,
    parse_years_of_service,
    split_address_block,
    split_tokens,
)

FULL_ITEM = """
<li>
  <h3><span class="ds-u-visibility--screen-reader">Agent or broker: </span>Jane   Doe</h3>
  <span class="ds-c-badge">Agent</span>
  <span class="ds-c-badge">Broker</span>
  <span class="ds-c-badge">  </span>
  <address>
    123 Main St<br>
    Orlando, FL 32801-1234
  </address>
  <a href="tel:4075550100">(407) 555-0100</a>
  <a href="mailto:jane@example.com" title="jane@example.com">Email Jane</a>
  <a href="https://janedoe.example.com">Website</a>
  <p>Licensed agent</p>
  <p>Helping people for 12 Years</p>
  <table>
    <tr><th>Languages spoken:</th><td>English, Spanish,
      Haitian Creole</td></tr>
    <tr><th>Licensed in</th><td>FL, GA, , AL</td></tr>
    <tr><td><b>Mon</b></td><td>9am - 5pm</td></tr>
    <tr><td><b>Wed:</b></td><td>10am-2pm</td></tr>
    <tr><td><b>Lunch</b></td><td>closed</td></tr>
    <tr><td>Fri</td><td>not bold</td></tr>
  </table>
</li>
"""


@pytest.fixture
def extractor(selectors):
    return ContactExtractor(selectors)


def parse(extractor, html):
    return extractor.parse_item(SoupElement.from_html(html))


class TestParseItem:
    """Test mapping one list item into a record."""

    def test_full_item(self, extractor):
        record = parse(extractor, FULL_ITEM)

        assert record.name == "Jane Doe"
        assert record.address == "123 Main St"
        assert record.city == "Orlando"
        assert record.state == "FL"
        assert record.zip == "32801"
        assert record.phone == "(407) 555-0100"
        assert record.email == "jane@example.com"
        assert record.website == "https://janedoe.example.com"
        assert record.years_of_service == 12
        assert record.roles == ["Agent", "Broker"]
        assert record.languages == ["English", "Spanish", "Haitian Creole"]
        assert record.licensed_in == ["FL", "GA", "AL"]
        assert record.hours == {"Mon": "9am - 5pm", "Wed": "10am-2pm"}

    def test_item_without_name_is_dropped(self, extractor):
        assert parse(extractor, make_item(None, ["123 Main St"])) is None
        assert parse(extractor, make_item("   ")) is None

    def test_screen_reader_only_name_is_dropped(self, extractor):
        html = '<li><h3><span class="sr-only">Agent</span></h3></li>'
        assert parse(extractor, html) is None

    def test_name_only_item_has_no_optional_fields(self, extractor):
        record = parse(extractor, make_item("Sam Smith"))

        assert record.name == "Sam Smith"
        assert record.to_json_dict() == {"name": "Sam Smith"}

    def test_address_lines(self, extractor):
        record = parse(extractor, make_item("A", ["123 Main St", "Orlando, FL 32801"]))

        assert record.address == "123 Main St"
        assert record.city == "Orlando"
        assert record.state == "FL"
        assert record.zip == "32801"

    def test_unparsable_city_line(self, extractor):
        record = parse(extractor, make_item("A", ["123 Main St", "Orlando Florida"]))

        assert record.address == "123 Main St"
        assert record.city is None
        assert record.state is None
        assert record.zip is None

    def test_single_line_address(self, extractor):
        record = parse(extractor, make_item("A", ["PO Box 12"]))

        assert record.address == "PO Box 12"
        assert record.city is None

    def test_phone_fallback_element(self, extractor):
        html = '<li><h3>A</h3><span data-cy="phone"> 904-555-0101 </span></li>'
        assert parse(extractor, html).phone == "904-555-0101"

    def test_email_prefers_title(self, extractor):
        html = '<li><h3>A</h3><a href="mailto:x@example.com" title="real@example.com">x@example.com</a></li>'
        assert parse(extractor, html).email == "real@example.com"

    def test_email_falls_back_to_text_then_href(self, extractor):
        text_html = '<li><h3>A</h3><a href="mailto:x@example.com">shown@example.com</a></li>'
        href_html = '<li><h3>A</h3><a href="mailto:x@example.com?subject=Hi"></a></li>'

        assert parse(extractor, text_html).email == "shown@example.com"
        assert parse(extractor, href_html).email == "x@example.com"

    def test_website_is_first_http_anchor(self, extractor):
        html = (
            '<li><h3>A</h3><a href="tel:1">1</a>'
            '<a href="http://first.example.com">one</a>'
            '<a href="https://second.example.com">two</a></li>'
        )
        assert parse(extractor, html).website == "http://first.example.com"

    def test_languages_blank_tokens(self, extractor):
        html = "<li><h3>A</h3><table><tr><td>Languages spoken:</td><td>  , </td></tr></table></li>"
        assert parse(extractor, html).languages is None

    def test_languages_row_with_div_cells(self, extractor):
        html = (
            '<li><h3>A</h3><div class="ds-l-row"><div><strong>LANGUAGES SPOKEN</strong></div>'
            "<div>English, Spanish</div></div></li>"
        )
        assert parse(extractor, html).languages == ["English", "Spanish"]

    def test_label_must_match_whole_text(self, extractor):
        html = "<li><h3>A</h3><table><tr><td>Other languages spoken</td><td>French</td></tr></table></li>"
        assert parse(extractor, html).languages is None

    def test_hours_ignore_unknown_labels(self, extractor):
        html = (
            "<li><h3>A</h3><table>"
            "<tr><td><b>Wed</b></td><td>9am-5pm</td></tr>"
            "<tr><td><b>Lunch</b></td><td>closed</td></tr>"
            "</table></li>"
        )
        record = parse(extractor, html)

        assert record.hours == {"Wed": "9am-5pm"}
        assert "Lunch" not in record.hours

    def test_hours_label_cell_is_bold_element(self, extractor):
        html = (
            "<li><h3>A</h3>"
            '<div class="ds-l-row"><b>Wed</b><span>9am-5pm</span></div>'
            "<table>"
            '<tr><td class="ds-u-font-weight--bold">Mon</td><td>8-4</td></tr>'
            '<tr><td class="plain">Tue</td><td>not bold</td></tr>'
            "</table></li>"
        )
        record = parse(extractor, html)

        assert record.hours == {"Wed": "9am-5pm", "Mon": "8-4"}

    def test_no_years_phrase(self, extractor):
        html = "<li><h3>A</h3><p>Certified application counselor</p></li>"
        assert parse(extractor, html).years_of_service is None


class TestExtractPage:
    """Test extracting a whole rendered page."""

    def test_records_in_list_order_without_unnamed(self, extractor):
        html = make_results_page([
            make_item("First"),
            make_item(None),
            make_item("Second"),
            make_item(""),
            make_item("Third"),
        ])
        page = StaticPage({1: html})

        async def run():
            await page.navigate("https://example.test/results?page=1")
            return await extractor.extract_page(page), await extractor.item_names(page)

        records, names = asyncio.run(run())

        assert [r.name for r in records] == ["First", "Second", "Third"]
        assert names == ["First", "Second", "Third"]

    def test_extraction_is_deterministic(self, extractor):
        first = parse(extractor, FULL_ITEM)
        second = parse(extractor, FULL_ITEM)
        assert first == second


class TestHelpers:
    """Test the parsing helpers."""

    def test_split_address_block(self):
        assert split_address_block("\n  123 Main St \n\n Orlando, FL 32801\n") == [
            "123 Main St",
            "Orlando, FL 32801",
        ]

    @pytest.mark.parametrize("line,expected", [
        ("Orlando, FL 32801", ("Orlando", "FL", "32801")),
        ("Orange Park,FL 32073-4455", ("Orange Park", "FL", "32073")),
        ("St. Augustine, FL32084", ("St. Augustine", "FL", "32084")),
        ("Orlando, fl 32801", (None, None, None)),
        ("Orlando, FL 3280", (None, None, None)),
        ("", (None, None, None)),
    ])
    def test_parse_city_state_zip(self, line, expected):
        assert parse_city_state_zip(line) == expected

    @pytest.mark.parametrize("text,expected", [
        ("5 years of service", 5),
        ("1 YEAR", 1),
        ("Serving since 2010", None),
        ("", None),
    ])
    def test_parse_years_of_service(self, text, expected):
        assert parse_years_of_service(text) == expected

    def test_split_tokens(self):
        assert split_tokens("English, Spanish") == ["English", "Spanish"]
        assert split_tokens(" , ,") is None
        assert split_tokens("English\nSpanish", r"[,\n]") == ["English", "Spanish"]
