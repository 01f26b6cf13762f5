"""
Port for the remote meal catalog.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Optional, Protocol, runtime_checkable

from mealfinder.domain.meal.models import Area, CatalogIngredient, Category, Meal


@runtime_checkable
class IMealLookupService(Protocol):
    """
    Port for the meal lookup service.

    Stateless request/response access to the remote catalog.
    Implementations never cache and never retry.

    Every operation raises MealLookupError on transport or parse
    failure. An empty list or None is a valid, non-error outcome.
    """

    async def search_by_name(self, term: str) -> list[Meal]:
        """Meals whose name matches the term."""
        ...

    async def search_by_ingredient(self, term: str) -> list[Meal]:
        """Meals using the given main ingredient."""
        ...

    async def filter_by_category(self, name: str) -> list[Meal]:
        """Meals in the category."""
        ...

    async def filter_by_area(self, name: str) -> list[Meal]:
        """Meals from the area."""
        ...

    async def lookup_by_id(self, meal_id: str) -> Optional[Meal]:
        """Full meal record, or None when the id is unknown."""
        ...

    async def random_pick(self) -> Optional[Meal]:
        """One random meal, or None."""
        ...

    async def list_categories(self) -> list[Category]:
        """All categories."""
        ...

    async def list_areas(self) -> list[Area]:
        """All areas."""
        ...

    async def list_ingredients(self) -> list[CatalogIngredient]:
        """All ingredients."""
        ...
