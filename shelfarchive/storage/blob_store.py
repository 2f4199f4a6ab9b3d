"""
JSON Blob Store

Key/value file store holding the archive as one JSON document per key.
Reads and writes are whole-blob; the last write wins.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Union

from loguru import logger

from shelfarchive.exceptions import ArchiveCorruptError
from shelfarchive.storage.models import ArchiveState

DEFAULT_STORAGE_KEY = "sapphic_shelves_archive_v2"


class JsonBlobStore:
    """
    File-backed store for ``ArchiveState``.

    Usage:
        store = JsonBlobStore("./data/archive.json")
        state = store.load()
        store.save(state)
    """

    def __init__(
        self,
        path: Union[str, Path],
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.path = Path(path)
        self.storage_key = storage_key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            raise ArchiveCorruptError(detail=f"{self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ArchiveCorruptError(detail=f"{self.path}: top level is not an object")
        return data

    def _write_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def load(self) -> ArchiveState:
        """
        Load the archive, or a fresh default one if nothing is stored.

        Raises:
            ArchiveCorruptError: Stored blob is not a decodable archive
        """
        blob = self._read_all().get(self.storage_key)
        if blob is None:
            logger.info(f"No archive under '{self.storage_key}', starting fresh")
            return ArchiveState()
        if not isinstance(blob, dict):
            raise ArchiveCorruptError(detail=f"Archive '{self.storage_key}' is not an object")

        try:
            state = ArchiveState.from_dict(blob)
        except (KeyError, TypeError, ValueError) as e:
            raise ArchiveCorruptError(detail=str(e)) from e

        logger.debug(f"Loaded archive: {len(state.books)} books, {len(state.shelves)} shelves")
        return state

    def save(self, state: ArchiveState) -> None:
        data = self._read_all()
        data[self.storage_key] = state.to_dict()
        self._write_all(data)

    def clear(self) -> None:
        data = self._read_all()
        if data.pop(self.storage_key, None) is not None:
            self._write_all(data)
            logger.info(f"Cleared archive '{self.storage_key}'")
