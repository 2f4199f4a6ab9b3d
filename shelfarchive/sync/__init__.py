"""
Sync Module

Sequential refresh of tracked author records.
"""

from shelfarchive.sync.author_sync import (
    AuthorSyncQueue,
    SyncProgress,
    SyncReport,
    KEY_COMPROMISED_MESSAGE,
)

__all__ = [
    "AuthorSyncQueue",
    "SyncProgress",
    "SyncReport",
    "KEY_COMPROMISED_MESSAGE",
]
