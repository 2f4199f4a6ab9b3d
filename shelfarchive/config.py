"""
Configuration for Shelf Archive.

Settings are plain dataclass fields with defaults, overridable from the
environment (and a local .env file when present).
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Storage
    archive_path: str = "./data/archive.json"
    storage_key: str = "sapphic_shelves_archive_v2"

    # Logging
    log_level: str = "INFO"

    # Lexicon
    lexicon_pool_size: int = 18
    lexicon_display_limit: int = 10

    # Matching
    cover_match_threshold: int = 70

    # External APIs
    google_books_api_key: Optional[str] = None
    http_timeout: float = 10.0

    # Archive defaults
    canadian_focus: bool = False
    auto_enrich: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        load_dotenv()
        return cls(
            archive_path=os.getenv("SHELFARCHIVE_PATH", cls.archive_path),
            storage_key=os.getenv("SHELFARCHIVE_STORAGE_KEY", cls.storage_key),
            log_level=os.getenv("SHELFARCHIVE_LOG_LEVEL", cls.log_level).upper(),
            lexicon_pool_size=int(os.getenv("SHELFARCHIVE_LEXICON_POOL_SIZE", cls.lexicon_pool_size)),
            lexicon_display_limit=int(os.getenv("SHELFARCHIVE_LEXICON_LIMIT", cls.lexicon_display_limit)),
            cover_match_threshold=int(os.getenv("SHELFARCHIVE_COVER_THRESHOLD", cls.cover_match_threshold)),
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY"),
            http_timeout=float(os.getenv("SHELFARCHIVE_HTTP_TIMEOUT", cls.http_timeout)),
            canadian_focus=_env_bool("SHELFARCHIVE_CANADIAN_FOCUS", cls.canadian_focus),
            auto_enrich=_env_bool("SHELFARCHIVE_AUTO_ENRICH", cls.auto_enrich),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()
