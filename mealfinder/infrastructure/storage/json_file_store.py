"""
JSON file key-value store.

Durable implementation of IKeyValueStore: every key lives in one
JSON object on disk. Each write replaces the whole file atomically
(temp file + os.replace), so a crash never leaves a half-written
document behind. A corrupt document reads as empty and is moved
aside by the next write.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

import structlog

from mealfinder.domain.shared.errors import PersistenceError

logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore:
    """File-backed implementation of IKeyValueStore port.

    Example:
        >>> store = JsonFileKeyValueStore(Path("/tmp/mealfinder.json"))
        >>> store.set("foodie-favorites", '["52771"]')
        >>> store.get("foodie-favorites")
        '["52771"]'
    """

    def __init__(self, path: Path) -> None:
        """Initialize store.

        Args:
            path: JSON file; created (with parent directories) on first write
        """
        self.path = Path(path)

    @property
    def corrupt_path(self) -> Path:
        """Where a corrupt document is moved before it is rewritten."""
        return self.path.with_name(f"{self.path.name}.corrupt")

    @staticmethod
    def _parse(raw: str) -> Optional[Dict[str, str]]:
        """Decode a document, None if it is not a JSON object of strings."""
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            return None
        return data

    def _read_all(self, quarantine: bool = False) -> Dict[str, str]:
        """Read the whole document.

        A corrupt document reads as empty. With ``quarantine`` it is also
        moved aside to ``corrupt_path`` so the next write starts clean.

        Raises:
            PersistenceError: If the file exists but cannot be read or
                moved aside
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e

        data = self._parse(raw)
        if data is not None:
            return data

        logger.warning("Corrupt storage file", path=str(self.path))
        if quarantine:
            self._quarantine()
        return {}

    def _quarantine(self) -> None:
        try:
            os.replace(self.path, self.corrupt_path)
        except OSError as e:
            raise PersistenceError(f"Cannot move aside corrupt {self.path}: {e}") from e
        logger.warning(
            "Corrupt storage file moved aside",
            path=str(self.path),
            moved_to=str(self.corrupt_path),
        )

    def _write_all(self, data: Dict[str, str]) -> None:
        """Replace the whole document atomically.

        Raises:
            PersistenceError: If the file cannot be written
        """
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error("Storage write failed", path=str(self.path), error=str(e))
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all(quarantine=True)
        data[key] = value
        self._write_all(data)
        logger.debug("Stored value", key=key, path=str(self.path))

    def remove(self, key: str) -> None:
        data = self._read_all(quarantine=True)
        if key in data:
            del data[key]
            self._write_all(data)
