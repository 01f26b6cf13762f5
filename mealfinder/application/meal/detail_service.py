"""
Meal detail service.

Composes a meal record with its derived display fields and the
favorite flag from the shared favorites store.
"""

from dataclasses import dataclass
from typing import List, Optional

import structlog

from mealfinder.application.favorites.store import FavoritesStore, ToggleResult
from mealfinder.domain.meal.models import IngredientLine, Meal
from mealfinder.domain.meal.ports import IMealLookupService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MealDetail:
    """Everything the detail view shows for one meal."""

    meal: Meal
    ingredients: List[IngredientLine]
    tags: List[str]
    youtube_video_id: Optional[str]
    instruction_paragraphs: List[str]
    is_favorite: bool


class MealDetailService:
    """Detail view operations."""

    def __init__(self, lookup: IMealLookupService, favorites: FavoritesStore) -> None:
        self._lookup = lookup
        self._favorites = favorites

    async def get_detail(self, meal_id: str) -> Optional[MealDetail]:
        """Load a meal with derived fields.

        Returns:
            Detail, or None when the catalog has no such meal

        Raises:
            MealLookupError: If the lookup fails
            PersistenceError: If the favorites set cannot be read
        """
        meal = await self._lookup.lookup_by_id(meal_id)
        if meal is None:
            logger.info("Meal detail not found", meal_id=meal_id)
            return None

        return MealDetail(
            meal=meal,
            ingredients=list(meal.ingredients),
            tags=meal.tag_list(),
            youtube_video_id=meal.youtube_video_id(),
            instruction_paragraphs=meal.instruction_paragraphs(),
            is_favorite=self._favorites.is_favorite(meal.id),
        )

    def toggle_favorite(self, meal_id: str) -> ToggleResult:
        return self._favorites.toggle(meal_id)

    async def random_meal_id(self) -> Optional[str]:
        """Id of a random meal for the header's shortcut, None if none."""
        meal = await self._lookup.random_pick()
        return meal.id if meal is not None else None
