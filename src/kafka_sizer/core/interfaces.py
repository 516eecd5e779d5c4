"""
Protocol interfaces for collaborators of the sizing engine.

Using Protocol (PEP 544) for structural subtyping, allowing flexible
implementations without forcing inheritance.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class SnapshotStore(Protocol):
    """
    Protocol for the key-value blob store holding the saved input snapshot.

    Implementations raise PersistenceUnavailableError when the underlying
    storage cannot be read or written.
    """

    def read(self, key: str) -> Optional[str]:
        """
        Read a blob.

        Args:
            key: Snapshot key

        Returns:
            Stored blob, or None if nothing was saved under the key
        """
        ...

    def write(self, key: str, blob: str) -> None:
        """
        Write a blob, replacing any previous value.

        Args:
            key: Snapshot key
            blob: Serialized snapshot
        """
        ...
