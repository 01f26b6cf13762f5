"""Configuration utilities for infrastructure layer."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MEALDB_BASE_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_FAVORITES_PATH = Path.home() / ".mealfinder" / "favorites.json"


def load_environment(env_path: Optional[Path] = None) -> None:
    """
    Load variables from a .env file into the process environment.

    Variables already set in the environment win over the file.

    Args:
        env_path: Explicit .env path, defaults to searching from the cwd
    """
    if env_path is None:
        load_dotenv()
    else:
        load_dotenv(env_path)


def get_mealdb_base_url() -> str:
    """
    Get TheMealDB API base URL.

    Returns:
        MEALDB_BASE_URL without trailing slash, defaults to the public v1 API
    """
    return os.getenv("MEALDB_BASE_URL", DEFAULT_MEALDB_BASE_URL).rstrip("/")


def get_mealdb_timeout() -> Optional[float]:
    """
    Get HTTP timeout for catalog requests.

    Returns:
        MEALDB_TIMEOUT_S in seconds, or None (no timeout) when unset or blank

    Raises:
        ValueError: If the variable is not a positive number
    """
    raw = os.getenv("MEALDB_TIMEOUT_S", "").strip()
    if not raw:
        return None

    timeout = float(raw)
    if timeout <= 0:
        raise ValueError(f"MEALDB_TIMEOUT_S must be positive, got {raw}")
    return timeout


def get_favorites_path() -> Path:
    """
    Get the favorites storage file.

    Returns:
        MEALFINDER_FAVORITES_PATH, defaults to ~/.mealfinder/favorites.json
    """
    raw = os.getenv("MEALFINDER_FAVORITES_PATH")
    return Path(raw).expanduser() if raw else DEFAULT_FAVORITES_PATH


def get_log_level() -> str:
    """Get LOG_LEVEL, defaults to INFO."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_storage_backend() -> str:
    """
    Get the favorites storage backend.

    Returns:
        MEALFINDER_STORAGE_BACKEND lowercased: "file" (default) or "inmemory"
    """
    return os.getenv("MEALFINDER_STORAGE_BACKEND", "file").strip().lower()


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    mealdb_base_url: str
    mealdb_timeout_s: Optional[float]
    favorites_path: Path
    log_level: str
    storage_backend: str = "file"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read every setting from the environment."""
        return cls(
            mealdb_base_url=get_mealdb_base_url(),
            mealdb_timeout_s=get_mealdb_timeout(),
            favorites_path=get_favorites_path(),
            log_level=get_log_level(),
            storage_backend=get_storage_backend(),
        )
