"""Key-value store factory.

Environment-based storage selection:
- MEALFINDER_STORAGE_BACKEND=file (default): JSON file at
  MEALFINDER_FAVORITES_PATH, survives restarts
- MEALFINDER_STORAGE_BACKEND=inmemory: session only, for tests
"""

from mealfinder.domain.favorites.ports import IKeyValueStore
from mealfinder.infrastructure.config import Settings
from mealfinder.infrastructure.storage.in_memory_store import InMemoryKeyValueStore
from mealfinder.infrastructure.storage.json_file_store import JsonFileKeyValueStore


def create_key_value_store(settings: Settings) -> IKeyValueStore:
    """Create the key-value store selected by settings.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.storage_backend

    if backend == "inmemory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return JsonFileKeyValueStore(settings.favorites_path)

    raise ValueError(
        f"Unknown MEALFINDER_STORAGE_BACKEND '{backend}'. Use 'file' or 'inmemory'"
    )
