"""
External ID Normalizer

Turns a pasted retail or catalog link into a (vendor, external id) pair:
- Amazon: 10-character ASIN after /dp/ or /gp/product/
- Goodreads: numeric id after /book/show/
- Google Play Books: ``id`` query parameter

Vendors are tried by hostname in that order and only the first hostname
match is evaluated. Every failure surfaces as UnrecognizedLinkError.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from urllib.parse import SplitResult, parse_qs, urlsplit

from loguru import logger

from shelfarchive.exceptions import UnrecognizedLinkError


class Vendor(str, Enum):
    AMAZON = "AMAZON"
    GOODREADS = "GOODREADS"
    PLAYBOOKS = "PLAYBOOKS"


@dataclass(frozen=True)
class ExternalReference:
    """Normalized pointer into a vendor catalog."""

    vendor: Vendor
    external_id: str


_ASIN_PATH = re.compile(r"/(dp|gp/product)/([A-Z0-9]{10})")
_GOODREADS_PATH = re.compile(r"/book/show/(\d+)")


def _amazon_id(parts: SplitResult) -> Optional[str]:
    match = _ASIN_PATH.search(parts.path)
    return match.group(2) if match else None


def _goodreads_id(parts: SplitResult) -> Optional[str]:
    match = _GOODREADS_PATH.search(parts.path)
    return match.group(1) if match else None


def _playbooks_id(parts: SplitResult) -> Optional[str]:
    values = parse_qs(parts.query).get("id")
    return values[0] if values else None


class ExternalIdNormalizer:
    """
    Vendor link parser.

    Usage:
        ref = ExternalIdNormalizer.normalize("https://www.goodreads.com/book/show/12345-x")
        ref.vendor, ref.external_id   # (Vendor.GOODREADS, "12345")
    """

    # (hostname marker, vendor, extractor), in priority order
    VENDOR_PATTERNS: list[tuple[str, Vendor, Callable[[SplitResult], Optional[str]]]] = [
        ("amazon.", Vendor.AMAZON, _amazon_id),
        ("goodreads.com", Vendor.GOODREADS, _goodreads_id),
        ("play.google.com", Vendor.PLAYBOOKS, _playbooks_id),
    ]

    @classmethod
    def normalize(cls, url: str) -> ExternalReference:
        """
        Parse ``url`` into an ExternalReference.

        Raises:
            UnrecognizedLinkError: URL is malformed or matches no vendor
        """
        try:
            parts = urlsplit((url or "").strip())
            hostname = parts.hostname
        except ValueError:
            raise UnrecognizedLinkError(detail=f"Unparseable link: {url!r}") from None

        if not parts.scheme or not hostname:
            raise UnrecognizedLinkError(detail=f"Unparseable link: {url!r}")

        hostname = hostname.lower()
        for marker, vendor, extract in cls.VENDOR_PATTERNS:
            if marker not in hostname:
                continue
            external_id = extract(parts)
            if external_id:
                logger.debug(f"Normalized {url} -> {vendor.value}:{external_id}")
                return ExternalReference(vendor=vendor, external_id=external_id)
            break

        raise UnrecognizedLinkError(detail=f"No vendor pattern matched {url!r}")


normalize_url = ExternalIdNormalizer.normalize
