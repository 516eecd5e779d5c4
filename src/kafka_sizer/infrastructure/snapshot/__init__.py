"""
Snapshot persistence.

- FileSnapshotStore / InMemorySnapshotStore - key-value blob stores
- codec - JSON encoding of input set, topology and save time
"""

from kafka_sizer.infrastructure.snapshot.codec import SNAPSHOT_KEY, Snapshot, decode, encode
from kafka_sizer.infrastructure.snapshot.store import FileSnapshotStore, InMemorySnapshotStore

__all__ = [
    "SNAPSHOT_KEY",
    "Snapshot",
    "decode",
    "encode",
    "FileSnapshotStore",
    "InMemorySnapshotStore",
]
