"""Key-value storage implementations."""

from mealfinder.infrastructure.storage.in_memory_store import InMemoryKeyValueStore
from mealfinder.infrastructure.storage.json_file_store import JsonFileKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
