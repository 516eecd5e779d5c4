"""Unit tests for snapshot stores."""

from pathlib import Path

import pytest

from kafka_sizer.core import SnapshotStore
from kafka_sizer.domain import PersistenceUnavailableError
from kafka_sizer.infrastructure.snapshot import (
    SNAPSHOT_KEY,
    FileSnapshotStore,
    InMemorySnapshotStore,
)


class TestFileSnapshotStore:
    """Test suite for FileSnapshotStore."""

    def test_missing_key_reads_none(self, tmp_path: Path) -> None:
        assert FileSnapshotStore(tmp_path / "state").read(SNAPSHOT_KEY) is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        store = FileSnapshotStore(tmp_path / "state")
        store.write(SNAPSHOT_KEY, '{"inputs": {}}')

        assert store.path_for(SNAPSHOT_KEY) == tmp_path / "state" / "kafka-sizing-data.json"
        assert store.read(SNAPSHOT_KEY) == '{"inputs": {}}'

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        store = FileSnapshotStore(tmp_path)
        store.write(SNAPSHOT_KEY, "first")
        store.write(SNAPSHOT_KEY, "second")

        assert store.read(SNAPSHOT_KEY) == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["kafka-sizing-data.json"]

    def test_unreadable_snapshot(self, tmp_path: Path) -> None:
        store = FileSnapshotStore(tmp_path)
        store.path_for(SNAPSHOT_KEY).mkdir()

        with pytest.raises(PersistenceUnavailableError, match="Cannot read snapshot"):
            store.read(SNAPSHOT_KEY)

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "state"
        blocker.write_text("not a directory")

        with pytest.raises(PersistenceUnavailableError, match="Cannot write snapshot"):
            FileSnapshotStore(blocker).write(SNAPSHOT_KEY, "{}")

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileSnapshotStore(tmp_path), SnapshotStore)


class TestInMemorySnapshotStore:
    """Test suite for InMemorySnapshotStore."""

    def test_read_write(self) -> None:
        store = InMemorySnapshotStore()
        assert store.read(SNAPSHOT_KEY) is None

        store.write(SNAPSHOT_KEY, "{}")

        assert store.read(SNAPSHOT_KEY) == "{}"
        assert isinstance(store, SnapshotStore)
