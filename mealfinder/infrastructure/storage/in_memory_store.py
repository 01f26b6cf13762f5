"""
In-memory key-value store.

Session-only implementation of IKeyValueStore, used in tests and
when no durable medium is configured.
"""

from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class InMemoryKeyValueStore:
    """In-memory implementation of IKeyValueStore port.

    Persistence: values lost on process restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug("Stored value", key=key, size=len(value))

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

