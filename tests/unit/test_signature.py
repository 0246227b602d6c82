"""Unit tests for page fingerprints."""

from src.scraper.signature import page_signature


def test_signature_format():
    assert page_signature(["Ann", "Bob", "Cy"]) == "Ann|Cy|3"


def test_single_name():
    assert page_signature(["Ann"]) == "Ann|Ann|1"


def test_empty_page_has_no_signature():
    assert page_signature([]) is None


def test_same_ends_and_count_collide():
    assert page_signature(["Ann", "Bob", "Cy"]) == page_signature(["Ann", "Zed", "Cy"])


def test_count_distinguishes_pages():
    assert page_signature(["Ann", "Cy"]) != page_signature(["Ann", "Bob", "Cy"])
