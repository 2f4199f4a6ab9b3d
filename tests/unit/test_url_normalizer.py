"""
Unit tests for vendor link normalization.
"""

import pytest

from shelfarchive.exceptions import ShelfArchiveException, UnrecognizedLinkError
from shelfarchive.ingestion.url_normalizer import (
    ExternalIdNormalizer,
    ExternalReference,
    Vendor,
    normalize_url,
)


class TestExternalIdNormalizer:
    """Test vendor id extraction."""

    @pytest.mark.parametrize("url,vendor,external_id", [
        ("https://www.amazon.com/Fingersmith-Sarah-Waters/dp/1573229725", Vendor.AMAZON, "1573229725"),
        ("https://www.amazon.ca/gp/product/B00ABCDE12?ref=x", Vendor.AMAZON, "B00ABCDE12"),
        ("https://amazon.co.uk/dp/0860685233/", Vendor.AMAZON, "0860685233"),
        ("https://www.goodreads.com/book/show/80018.Fingersmith", Vendor.GOODREADS, "80018"),
        ("https://goodreads.com/book/show/12345", Vendor.GOODREADS, "12345"),
        ("https://www.goodreads.com/book/show/12345-some-title", Vendor.GOODREADS, "12345"),
        ("https://www.amazon.com/dp/B00ZV9PXP2", Vendor.AMAZON, "B00ZV9PXP2"),
        ("https://play.google.com/store/books/details?id=abc123XYZ&hl=en", Vendor.PLAYBOOKS, "abc123XYZ"),
    ])
    def test_recognized_links(self, url, vendor, external_id):
        ref = normalize_url(url)
        assert ref == ExternalReference(vendor=vendor, external_id=external_id)

    def test_hostname_case_insensitive(self):
        ref = normalize_url("https://WWW.GOODREADS.COM/book/show/42")
        assert ref.vendor is Vendor.GOODREADS

    def test_surrounding_whitespace(self):
        ref = normalize_url("  https://www.goodreads.com/book/show/42  ")
        assert ref.external_id == "42"

    def test_class_and_alias_agree(self):
        url = "https://www.goodreads.com/book/show/42"
        assert ExternalIdNormalizer.normalize(url) == normalize_url(url)

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "www.amazon.com/dp/1573229725",
        "https://example.com/dp/1573229725",
        "https://www.goodreads.com/author/show/123",
        "https://play.google.com/store/books/details?hl=en",
        "https://play.google.com/store/books/details?id=",
        "http://[::1",
    ])
    def test_unrecognized(self, url):
        with pytest.raises(UnrecognizedLinkError):
            normalize_url(url)

    def test_asin_must_be_ten_uppercase_characters(self):
        with pytest.raises(UnrecognizedLinkError):
            normalize_url("https://www.amazon.com/dp/157322972")
        with pytest.raises(UnrecognizedLinkError):
            normalize_url("https://www.amazon.com/dp/b00abcde12")

    def test_only_first_hostname_match_is_evaluated(self):
        # Amazon host with a Goodreads-shaped path is not retried as Goodreads
        with pytest.raises(UnrecognizedLinkError):
            normalize_url("https://amazon.goodreads.com/book/show/42")

    def test_error_message(self):
        with pytest.raises(ShelfArchiveException) as exc_info:
            normalize_url("https://example.com")

        error = exc_info.value
        assert error.message == "The provided link does not map to a recognized volume."
        assert error.code == "UNRECOGNIZED_LINK"
