"""
Author Sync Queue

Refreshes tracked author records from the remote archivist service:
- Strictly sequential: one remote call in flight at a time
- Progress callback after each author completes
- Per-author failures recorded, batch continues
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger

from shelfarchive.ingestion.client import ArchivistClient
from shelfarchive.storage.archive_repository import ArchiveRepository, utc_now_iso

KEY_COMPROMISED_MESSAGE = "Archival Key Compromised. Please rotate via Settings."

ProgressCallback = Callable[["SyncProgress"], None]


def _is_key_failure(error: Exception) -> bool:
    text = str(error)
    return "403" in text or "leaked" in text


@dataclass
class SyncProgress:
    current: int
    total: int
    name: str

    @property
    def fraction(self) -> float:
        return self.current / self.total if self.total else 1.0


@dataclass
class SyncReport:
    """Outcome of one batch."""

    total: int = 0
    synced: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)  # name -> user-facing message
    key_compromised: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


class AuthorSyncQueue:
    """
    Sequential author refresher.

    Usage:
        queue = AuthorSyncQueue(client, repo, on_progress=print)
        report = await queue.run(["Sarah Waters", "Jeanette Winterson"])
    """

    def __init__(
        self,
        client: ArchivistClient,
        repository: ArchiveRepository,
        on_progress: Optional[ProgressCallback] = None,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.client = client
        self.repository = repository
        self.on_progress = on_progress
        self.clock = clock
        self.in_flight: set[str] = set()

    def is_syncing(self, name: str) -> bool:
        return name in self.in_flight

    async def sync_one(self, name: str, report: Optional[SyncReport] = None) -> bool:
        """
        Refresh a single author.

        Returns:
            True on success
        """
        report = report if report is not None else SyncReport(total=1)
        self.in_flight.add(name)
        try:
            record = await self.client.sync_author(name)
            self.repository.update_author(
                name,
                **record.to_pulse_fields(),
                last_checked=self.clock(),
            )
            report.synced.append(name)
            return True
        except Exception as e:
            logger.error(f"Author sync failed for {name}: {e}")
            if _is_key_failure(e):
                report.key_compromised = True
                report.failed[name] = KEY_COMPROMISED_MESSAGE
            else:
                report.failed[name] = f"Archival sync failed for {name}. Verify connection."
            return False
        finally:
            self.in_flight.discard(name)

    async def run(self, names: Iterable[str]) -> SyncReport:
        """
        Sync a batch of authors one after another.

        Args:
            names: Authors to refresh, in order

        Returns:
            SyncReport for the batch
        """
        targets = list(names)
        report = SyncReport(total=len(targets))
        if not targets:
            return report

        logger.info(f"Syncing {len(targets)} authors")
        for i, name in enumerate(targets, start=1):
            await self.sync_one(name, report)
            if self.on_progress is not None:
                self.on_progress(SyncProgress(current=i, total=len(targets), name=name))

        logger.info(f"Author sync done: {len(report.synced)} ok, {len(report.failed)} failed")
        return report
