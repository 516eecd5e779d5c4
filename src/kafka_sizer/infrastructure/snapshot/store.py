"""Key-value blob stores for the saved snapshot."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from kafka_sizer.domain import PersistenceUnavailableError


class FileSnapshotStore:
    """
    Stores each key as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a reader never sees a half-written snapshot.
    """

    def __init__(self, directory: str | Path):
        """
        Initialize FileSnapshotStore.

        Args:
            directory: Directory holding snapshot files (created on first write)
        """
        self.directory = Path(directory).expanduser()
        self._logger = logging.getLogger(__name__)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        """
        Read a snapshot blob.

        Returns:
            Stored blob, or None if no snapshot exists

        Raises:
            PersistenceUnavailableError: If the file exists but cannot be read
        """
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceUnavailableError(f"Cannot read snapshot {path}: {e}") from e

    def write(self, key: str, blob: str) -> None:
        """
        Write a snapshot blob atomically.

        Raises:
            PersistenceUnavailableError: If the directory or file cannot be written
        """
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceUnavailableError(f"Cannot write snapshot {path}: {e}") from e

        self._logger.debug(f"Wrote {len(blob)} bytes to {path}")


class InMemorySnapshotStore:
    """Process-local store, for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob
