"""
Archive data models for Shelf Archive.

Plain dataclasses for the records held in the archive blob. Serialized form
uses the camelCase keys of the stored JSON document so existing archives
round-trip unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


ARCHIVE_VERSION = "2.0.0"


class Theme(str, Enum):
    """Display theme, cycled in declaration order."""
    LIGHT = "light"
    DARK = "dark"
    SEPIA = "sepia"


@dataclass
class BookMetadata:
    """Catalog metadata attached to a book after reconciliation."""

    publisher: Optional[str] = None

    def to_dict(self) -> dict:
        return {"publisher": self.publisher}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["BookMetadata"]:
        if not data:
            return None
        return cls(publisher=data.get("publisher"))


@dataclass
class Book:
    """A single archived volume."""

    id: str
    title: str
    author: str
    scanned_at: str = ""

    # Catalog data
    isbn: Optional[str] = None
    synopsis: Optional[str] = None
    cover_url: Optional[str] = None
    tropes: list[str] = field(default_factory=list)
    metadata: Optional[BookMetadata] = None
    is_canadian: Optional[bool] = None

    # Organization
    shelf_id: Optional[str] = None

    # User data
    rating: Optional[float] = None
    personal_notes: Optional[str] = None
    source_urls: list[str] = field(default_factory=list)

    @property
    def publisher(self) -> Optional[str]:
        return self.metadata.publisher if self.metadata else None

    def to_dict(self) -> dict:
        """Convert to the stored JSON shape, omitting unset optionals."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "scannedAt": self.scanned_at,
        }
        optional = {
            "isbn": self.isbn,
            "synopsis": self.synopsis,
            "coverUrl": self.cover_url,
            "shelfId": self.shelf_id,
            "isCanadian": self.is_canadian,
            "rating": self.rating,
            "personalNotes": self.personal_notes,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.tropes:
            data["tropes"] = list(self.tropes)
        if self.source_urls:
            data["sourceUrls"] = list(self.source_urls)
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Book":
        """Create from the stored JSON shape."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            author=data.get("author", ""),
            scanned_at=data.get("scannedAt", ""),
            isbn=data.get("isbn"),
            synopsis=data.get("synopsis"),
            cover_url=data.get("coverUrl"),
            tropes=list(data.get("tropes") or []),
            metadata=BookMetadata.from_dict(data.get("metadata")),
            is_canadian=data.get("isCanadian"),
            shelf_id=data.get("shelfId"),
            rating=data.get("rating"),
            personal_notes=data.get("personalNotes"),
            source_urls=list(data.get("sourceUrls") or []),
        )


@dataclass
class Shelf:
    """User-created or synthesized grouping of books."""

    id: str
    title: str
    description: Optional[str] = None
    is_virtual: bool = False

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.description is not None:
            data["description"] = self.description
        if self.is_virtual:
            data["isVirtual"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Shelf":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description"),
            is_virtual=bool(data.get("isVirtual", False)),
        )


@dataclass
class ShelfWithBooks(Shelf):
    """Shelf plus its member books, in encounter order."""

    books: list[Book] = field(default_factory=list)


@dataclass
class SourceLink:
    title: str
    uri: str

    def to_dict(self) -> dict:
        return {"title": self.title, "uri": self.uri}


@dataclass
class AuthorRelease:
    """Published or announced title for a tracked author."""

    title: str
    release_date: str
    is_upcoming: bool = False
    synopsis: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "title": self.title,
            "releaseDate": self.release_date,
            "isUpcoming": self.is_upcoming,
        }
        if self.synopsis is not None:
            data["synopsis"] = self.synopsis
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AuthorRelease":
        return cls(
            title=data.get("title", ""),
            release_date=data.get("releaseDate", ""),
            is_upcoming=bool(data.get("isUpcoming", False)),
            synopsis=data.get("synopsis"),
        )


@dataclass
class AuthorPulse:
    """Tracked author record kept current by the author sync queue."""

    name: str
    biography: str = ""
    historical_context: str = ""
    bibliography: list[str] = field(default_factory=list)
    sources: list[SourceLink] = field(default_factory=list)
    last_pulse: Optional[str] = None
    is_favorite: bool = False
    releases: list[AuthorRelease] = field(default_factory=list)
    last_checked: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "name": self.name,
            "biography": self.biography,
            "historicalContext": self.historical_context,
            "bibliography": list(self.bibliography),
            "sources": [s.to_dict() for s in self.sources],
        }
        if self.last_pulse is not None:
            data["lastPulse"] = self.last_pulse
        if self.is_favorite:
            data["isFavorite"] = True
        if self.releases:
            data["releases"] = [r.to_dict() for r in self.releases]
        if self.last_checked is not None:
            data["lastChecked"] = self.last_checked
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AuthorPulse":
        return cls(
            name=data.get("name", ""),
            biography=data.get("biography", ""),
            historical_context=data.get("historicalContext", ""),
            bibliography=list(data.get("bibliography") or []),
            sources=[
                SourceLink(title=s.get("title", ""), uri=s.get("uri", ""))
                for s in data.get("sources") or []
            ],
            last_pulse=data.get("lastPulse"),
            is_favorite=bool(data.get("isFavorite", False)),
            releases=[AuthorRelease.from_dict(r) for r in data.get("releases") or []],
            last_checked=data.get("lastChecked"),
        )


@dataclass
class ArchiveSettings:
    canadian_focus: bool = False
    auto_enrich: bool = True

    def to_dict(self) -> dict:
        return {"canadianFocus": self.canadian_focus, "autoEnrich": self.auto_enrich}

    @classmethod
    def from_dict(cls, data: dict) -> "ArchiveSettings":
        return cls(
            canadian_focus=bool(data.get("canadianFocus", False)),
            auto_enrich=bool(data.get("autoEnrich", True)),
        )


@dataclass
class ArchiveState:
    """
    The whole archive, persisted as one blob.

    Books are kept newest first.
    """

    version: str = ARCHIVE_VERSION
    books: list[Book] = field(default_factory=list)
    shelves: list[Shelf] = field(default_factory=list)
    author_pulses: dict[str, AuthorPulse] = field(default_factory=dict)
    api_key_ready: bool = False
    archivist_icon: Optional[str] = None
    theme: Theme = Theme.LIGHT
    settings: ArchiveSettings = field(default_factory=ArchiveSettings)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "version": self.version,
            "books": [b.to_dict() for b in self.books],
            "shelves": [s.to_dict() for s in self.shelves if not s.is_virtual],
            "authorPulses": {name: p.to_dict() for name, p in self.author_pulses.items()},
            "apiKeyReady": self.api_key_ready,
            "theme": self.theme.value,
            "settings": self.settings.to_dict(),
        }
        if self.archivist_icon is not None:
            data["archivistIcon"] = self.archivist_icon
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ArchiveState":
        """Create from a stored blob, back-filling fields legacy blobs lack."""
        return cls(
            version=data.get("version") or ARCHIVE_VERSION,
            books=[Book.from_dict(b) for b in data.get("books") or []],
            shelves=[Shelf.from_dict(s) for s in data.get("shelves") or []],
            author_pulses={
                name: AuthorPulse.from_dict({"name": name, **pulse})
                for name, pulse in (data.get("authorPulses") or {}).items()
            },
            api_key_ready=bool(data.get("apiKeyReady", False)),
            archivist_icon=data.get("archivistIcon"),
            theme=Theme(data.get("theme") or Theme.LIGHT.value),
            settings=ArchiveSettings.from_dict(data.get("settings") or {}),
        )
