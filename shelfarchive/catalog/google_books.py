"""
Google Books API Client

Searches the Google Books Volume API for catalog records used to
reconcile covers and publisher data.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger


@dataclass
class CatalogRecord:
    """Standardized book record from an external catalog."""
    title: str
    authors: List[str] = field(default_factory=list)
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    description: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    thumbnail_url: Optional[str] = None
    isbn_10: Optional[str] = None
    isbn_13: Optional[str] = None
    google_books_id: Optional[str] = None

    @property
    def author(self) -> str:
        return self.authors[0] if self.authors else ""

    @property
    def isbn(self) -> Optional[str]:
        return self.isbn_13 or self.isbn_10


class GoogleBooksClient:
    """Client for Google Books API."""

    BASE_URL = "https://www.googleapis.com/books/v1/volumes"
    MAX_RESULTS = 40

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            api_key: Optional API key; unauthenticated requests get lower quotas
            timeout: Request timeout in seconds
            transport: Custom httpx transport
        """
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        if not self.api_key:
            logger.warning("No Google Books API key provided. Rate limits will be lower.")

    async def search(self, query: str, max_results: int = 5) -> List[CatalogRecord]:
        """
        Search for books.

        Args:
            query: Search query string
            max_results: Maximum number of results to return

        Returns:
            List of CatalogRecord objects (empty on any failure)
        """
        if not query or not query.strip():
            return []

        params: Dict[str, Any] = {
            "q": query,
            "maxResults": min(max_results, self.MAX_RESULTS),
            "printType": "books",
        }
        if self.api_key:
            params["key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.BASE_URL, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Failed to search Google Books: {e}")
            return []

        if resp.status_code != 200:
            logger.error(f"Google Books API error {resp.status_code}: {resp.text[:200]}")
            return []

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Google Books returned invalid JSON: {e}")
            return []

        results = []
        for item in data.get("items", []):
            record = self._parse_volume(item)
            if record:
                results.append(record)
        return results

    async def search_book(self, title: str, author: Optional[str] = None, max_results: int = 5) -> List[CatalogRecord]:
        """Field-qualified title/author search."""
        query = f"intitle:{title}"
        if author:
            query += f" inauthor:{author}"
        return await self.search(query, max_results=max_results)

    def _parse_volume(self, item: Dict[str, Any]) -> Optional[CatalogRecord]:
        """Parse raw API response into CatalogRecord."""
        volume_info = item.get("volumeInfo") or {}
        title = volume_info.get("title")
        if not title:
            logger.warning(f"Skipping volume without title: {item.get('id')}")
            return None

        isbn_10 = None
        isbn_13 = None
        for identifier in volume_info.get("industryIdentifiers", []):
            if identifier.get("type") == "ISBN_10":
                isbn_10 = identifier.get("identifier")
            elif identifier.get("type") == "ISBN_13":
                isbn_13 = identifier.get("identifier")

        image_links = volume_info.get("imageLinks", {})
        thumbnail = image_links.get("thumbnail") or image_links.get("smallThumbnail")
        if thumbnail:
            thumbnail = thumbnail.replace("http://", "https://")

        return CatalogRecord(
            title=title,
            authors=volume_info.get("authors", []),
            publisher=volume_info.get("publisher"),
            published_date=volume_info.get("publishedDate"),
            description=volume_info.get("description"),
            categories=volume_info.get("categories", []),
            thumbnail_url=thumbnail,
            isbn_10=isbn_10,
            isbn_13=isbn_13,
            google_books_id=item.get("id"),
        )
