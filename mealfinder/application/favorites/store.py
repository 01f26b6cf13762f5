"""
Favorites store.

Single source of truth for "is meal X favorited". The detail view
toggle, the favorites list and the bulk clear all go through one
instance, so they can never disagree about membership.

The id set is persisted as a JSON array under one key. Every
mutation reads, modifies and writes the whole set synchronously
before the in-memory copy is updated, so no await ever splits a
mutation in two. A set that could not be read is never written over.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Iterator, Optional

import structlog

from mealfinder.domain.favorites.ports import IKeyValueStore
from mealfinder.domain.meal.models import Meal
from mealfinder.domain.meal.ports import IMealLookupService
from mealfinder.domain.shared.errors import (
    MealLookupError,
    PersistenceError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

FAVORITES_KEY = "foodie-favorites"


@dataclass(frozen=True)
class ToggleResult:
    """Membership after a toggle."""

    meal_id: str
    now_favorite: bool


def _normalize_id(meal_id: str) -> str:
    if not isinstance(meal_id, str) or not meal_id.strip():
        raise ValidationError("Meal id cannot be empty")
    return meal_id.strip()


class FavoritesStore:
    """Persisted, ordered, duplicate-free set of favorite meal ids.

    Example:
        >>> store = FavoritesStore(InMemoryKeyValueStore(), lookup)
        >>> store.toggle("53049").now_favorite
        True
        >>> store.is_favorite("53049")
        True
    """

    def __init__(
        self,
        storage: IKeyValueStore,
        lookup: IMealLookupService,
        key: str = FAVORITES_KEY,
    ) -> None:
        """Initialize store. Storage is read lazily on first use.

        Args:
            storage: Key-value persistence medium
            lookup: Catalog used to hydrate ids into meals
            key: Storage key holding the JSON id array
        """
        self._storage = storage
        self._lookup = lookup
        self._key = key
        self._ids: Optional[list[str]] = None

    # ─── loading ──────────────────────────────────────────────

    def _load(self) -> list[str]:
        """Stored id set, read on first successful use.

        An unreadable medium is not cached as an empty set: the read is
        retried by the next operation, and nothing is written until it
        succeeds.

        Raises:
            PersistenceError: If the medium cannot be read
        """
        if self._ids is not None:
            return self._ids

        try:
            raw = self._storage.get(self._key)
        except PersistenceError as e:
            logger.warning("Favorites unreadable", key=self._key, error=str(e))
            raise

        self._ids = self._decode(raw)
        logger.debug("Favorites loaded", count=len(self._ids))
        return self._ids

    def _decode(self, raw: Optional[str]) -> list[str]:
        """Parse the stored array; anything malformed loads as empty."""
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Favorites value is not JSON, starting empty", key=self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Favorites value is not a list, starting empty", key=self._key)
            return []

        ids: list[str] = []
        for item in data:
            if isinstance(item, str) and item.strip() and item.strip() not in ids:
                ids.append(item.strip())
        return ids

    # ─── persistence ──────────────────────────────────────────

    def _commit(self, updated: list[str]) -> None:
        """Persist the whole set, then adopt it in memory.

        On failure the in-memory set is left as it was.

        Raises:
            PersistenceError: If the write fails
        """
        try:
            self._storage.set(self._key, json.dumps(updated))
        except PersistenceError:
            logger.error("Favorites write failed", key=self._key, count=len(updated))
            raise
        except OSError as e:
            logger.error("Favorites write failed", key=self._key, error=str(e))
            raise PersistenceError(f"Cannot persist favorites: {e}") from e
        self._ids = updated

    # ─── queries ──────────────────────────────────────────────

    def is_favorite(self, meal_id: str) -> bool:
        return meal_id.strip() in self._load()

    def ids(self) -> list[str]:
        """Snapshot of favorite ids in insertion order."""
        return list(self._load())

    def __contains__(self, meal_id: object) -> bool:
        return isinstance(meal_id, str) and self.is_favorite(meal_id)

    def __len__(self) -> int:
        return len(self._load())

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    # ─── mutations ────────────────────────────────────────────

    def toggle(self, meal_id: str) -> ToggleResult:
        """Add the id if absent, remove it if present.

        Returns:
            Resulting membership, so callers need not re-read storage

        Raises:
            PersistenceError: If the write fails; membership is unchanged
            ValidationError: If the id is blank
        """
        meal_id = _normalize_id(meal_id)
        current = self._load()

        if meal_id in current:
            self._commit([i for i in current if i != meal_id])
            now_favorite = False
        else:
            self._commit(current + [meal_id])
            now_favorite = True

        logger.info("Favorite toggled", meal_id=meal_id, now_favorite=now_favorite)
        return ToggleResult(meal_id=meal_id, now_favorite=now_favorite)

    def add(self, meal_id: str) -> bool:
        """Mark as favorite.

        Returns:
            True if the id was added, False if it was already a favorite
        """
        meal_id = _normalize_id(meal_id)
        current = self._load()
        if meal_id in current:
            return False
        self._commit(current + [meal_id])
        logger.info("Favorite added", meal_id=meal_id)
        return True

    def remove(self, meal_id: str) -> bool:
        """Unmark as favorite.

        Returns:
            True if the id was removed, False if it was not a favorite
        """
        meal_id = _normalize_id(meal_id)
        current = self._load()
        if meal_id not in current:
            return False
        self._commit([i for i in current if i != meal_id])
        logger.info("Favorite removed", meal_id=meal_id)
        return True

    def clear_all(self) -> None:
        """Remove every favorite and persist the empty array. Idempotent.

        Raises:
            PersistenceError: If the write fails; favorites are unchanged
        """
        previous = len(self._load())
        self._commit([])
        logger.info("Favorites cleared", removed=previous)

    # ─── hydration ────────────────────────────────────────────

    async def _resolve(self, meal_id: str) -> Optional[Meal]:
        try:
            return await self._lookup.lookup_by_id(meal_id)
        except MealLookupError as e:
            logger.warning("Favorite lookup failed", meal_id=meal_id, error=str(e))
            return None

    async def hydrate(self) -> list[Meal]:
        """Resolve every favorite id to its meal, concurrently.

        Ids that fail or are no longer in the catalog are skipped but
        stay in the stored set: a missing record is not proof of
        permanent deletion.

        Returns:
            Meals in stored id order, regardless of completion order

        Raises:
            PersistenceError: If the stored set cannot be read
        """
        ids = self.ids()
        if not ids:
            return []

        results = await asyncio.gather(*(self._resolve(meal_id) for meal_id in ids))
        meals = [meal for meal in results if meal is not None]

        if len(meals) < len(ids):
            logger.info("Some favorites not hydrated", requested=len(ids), hydrated=len(meals))
        return meals
