"""
Boundary Schemas for LLM Responses

Pydantic models that coerce loosely shaped JSON from the remote archivist
service into typed records before anything else touches it:
- Shelf scan results
- Book enrichment
- Author records
- Reading opportunities (ARCs, contests, free books)

Design Decisions:
1. camelCase aliases: the remote service speaks camelCase JSON
2. Lenient lists: invalid items are dropped, not fatal
3. Whitespace trimmed and empty strings treated as missing
"""

import json
from enum import Enum
from typing import Any, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from shelfarchive.storage.models import AuthorRelease, BookMetadata, SourceLink


RawPayload = Union[str, bytes, dict, None]


def _load_payload(raw: RawPayload) -> Optional[Any]:
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)):
        try:
            return json.loads(raw or "{}")
        except ValueError as e:
            logger.warning(f"Discarding non-JSON response: {e}")
            return None
    return raw


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


class BoundaryModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


# =============================================================================
# Shelf scan
# =============================================================================

class ScannedBook(BoundaryModel):
    """Title/author pair read off a shelf photo."""

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    isbn: Optional[str] = None
    synopsis: Optional[str] = None
    tropes: list[str] = Field(default_factory=list)

    @field_validator("tropes", mode="before")
    @classmethod
    def _clean_tropes(cls, v: Any) -> list[str]:
        if not v:
            return []
        return _dedupe([str(t).strip() for t in v if str(t).strip()])

    def to_record(self) -> dict:
        """Fields for ``ArchiveRepository.add_books``."""
        return self.model_dump(exclude_none=True)


class ScanResponse(BoundaryModel):
    books: list[ScannedBook] = Field(default_factory=list)

    @classmethod
    def parse_payload(cls, raw: RawPayload) -> list[ScannedBook]:
        """
        Extract scanned books, skipping unusable entries.

        Args:
            raw: JSON text or decoded object from the remote service

        Returns:
            Valid ScannedBook records, possibly empty
        """
        data = _load_payload(raw)
        if not isinstance(data, dict):
            return []

        books = []
        for item in data.get("books") or []:
            try:
                books.append(ScannedBook.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed scan entry {item!r}: {e.error_count()} errors")
        return books


# =============================================================================
# Enrichment
# =============================================================================

class EnrichmentResponse(BoundaryModel):
    """Catalog details found for an existing book."""

    isbn: Optional[str] = None
    synopsis: Optional[str] = None
    cover_url: Optional[str] = None
    tropes: list[str] = Field(default_factory=list)
    is_canadian: Optional[bool] = None
    publisher: Optional[str] = None

    @field_validator("isbn", "synopsis", "cover_url", "publisher", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("tropes", mode="before")
    @classmethod
    def _clean_tropes(cls, v: Any) -> list[str]:
        if not v:
            return []
        return _dedupe([str(t).strip() for t in v if str(t).strip()])

    @property
    def metadata(self) -> Optional[BookMetadata]:
        return BookMetadata(publisher=self.publisher) if self.publisher else None

    @classmethod
    def parse_payload(cls, raw: RawPayload) -> "EnrichmentResponse":
        data = _load_payload(raw)
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Discarding malformed enrichment: {e.error_count()} errors")
            return cls()


# =============================================================================
# Authors
# =============================================================================

class SourceLinkModel(BoundaryModel):
    title: str = ""
    uri: str


class ReleaseModel(BoundaryModel):
    title: str = Field(..., min_length=1)
    release_date: str
    is_upcoming: bool = False
    synopsis: Optional[str] = None


class AuthorRecordResponse(BoundaryModel):
    """Full author record returned by a sync call."""

    biography: str = ""
    historical_context: str = ""
    bibliography: list[str] = Field(default_factory=list)
    sources: list[SourceLinkModel] = Field(default_factory=list)
    releases: list[ReleaseModel] = Field(default_factory=list)
    last_pulse: Optional[str] = None

    @field_validator("bibliography", mode="before")
    @classmethod
    def _clean_bibliography(cls, v: Any) -> list[str]:
        if not v:
            return []
        return [str(t).strip() for t in v if str(t).strip()]

    def to_pulse_fields(self) -> dict:
        """Keyword fields for ``ArchiveRepository.update_author``."""
        fields = {
            "biography": self.biography,
            "historical_context": self.historical_context,
            "bibliography": list(self.bibliography),
            "sources": [SourceLink(title=s.title, uri=s.uri) for s in self.sources],
            "releases": [
                AuthorRelease(
                    title=r.title,
                    release_date=r.release_date,
                    is_upcoming=r.is_upcoming,
                    synopsis=r.synopsis,
                )
                for r in self.releases
            ],
        }
        if self.last_pulse is not None:
            fields["last_pulse"] = self.last_pulse
        return fields


# =============================================================================
# Opportunities
# =============================================================================

class OpportunityType(str, Enum):
    """Kinds of reading opportunity the archivist can surface."""
    ARC = "Arc"
    CONTEST = "Contest"
    FREE_BOOK = "Free Book"


class Opportunity(BoundaryModel):
    """An advance copy, giveaway or free edition found by the archivist."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    category: OpportunityType
    # source_link and validity_score arrive in snake_case
    source_link: str = Field(..., min_length=1, alias="source_link")
    timestamp: str = Field(..., min_length=1)
    author: Optional[str] = None
    description: str = ""
    validity_score: Optional[float] = Field(None, alias="validity_score")

    @field_validator("author", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def mentions(self, keyword: str) -> bool:
        return keyword.lower() in f"{self.title} {self.description}".lower()


class OpportunityResponse(BoundaryModel):
    resources: list[Opportunity] = Field(default_factory=list)

    @classmethod
    def parse_payload(cls, raw: RawPayload, keyword: Optional[str] = None) -> list[Opportunity]:
        """
        Extract opportunities, skipping unusable entries.

        Args:
            raw: JSON text or decoded object from the remote service
            keyword: If given, keep only items whose title or description
                mentions it (case-insensitive)

        Returns:
            Valid Opportunity records in payload order, possibly empty
        """
        data = _load_payload(raw)
        if not isinstance(data, dict):
            return []

        found = []
        for item in data.get("resources") or []:
            try:
                found.append(Opportunity.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed opportunity {item!r}: {e.error_count()} errors")

        if keyword:
            kept = [o for o in found if o.mentions(keyword)]
            logger.debug(f"Keyword '{keyword}' kept {len(kept)}/{len(found)} opportunities")
            return kept
        return found
