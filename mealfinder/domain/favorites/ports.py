"""
Port for the key-value persistence medium.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStore(Protocol):
    """
    Port for durable, synchronous, string-keyed storage.

    Whole-value get/set only. Implementations raise PersistenceError
    when the medium cannot be read or written.
    """

    def get(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        ...
