"""
Catalog metadata service.

Loads the lookup metadata the header and landing surfaces show
alongside (and concurrently with) the main discovery results.
"""

import asyncio
from dataclasses import dataclass, field
from typing import List

import structlog

from mealfinder.domain.meal.models import Area, CatalogIngredient, Category, Meal
from mealfinder.domain.meal.ports import IMealLookupService

logger = structlog.get_logger(__name__)

HEADER_CATEGORY_LIMIT = 12
HEADER_AREA_LIMIT = 15
LANDING_CATEGORY_LIMIT = 8
FEATURED_MEAL_COUNT = 4


@dataclass(frozen=True)
class HeaderMetadata:
    """Category and area shortcuts for the navigation header."""

    categories: List[Category] = field(default_factory=list)
    areas: List[Area] = field(default_factory=list)


@dataclass(frozen=True)
class LandingMetadata:
    """Popular categories and featured meals for the landing page."""

    categories: List[Category] = field(default_factory=list)
    featured: List[Meal] = field(default_factory=list)


class CatalogMetadataService:
    """Loads category, area, ingredient and featured-meal metadata.

    Failures propagate as MealLookupError; this service does not
    decide how a surface degrades.
    """

    def __init__(self, lookup: IMealLookupService) -> None:
        self._lookup = lookup

    async def load_header(self) -> HeaderMetadata:
        """Fetch categories and areas concurrently and trim for the header."""
        categories, areas = await asyncio.gather(
            self._lookup.list_categories(),
            self._lookup.list_areas(),
        )
        logger.debug("Header metadata loaded", categories=len(categories), areas=len(areas))
        return HeaderMetadata(
            categories=categories[:HEADER_CATEGORY_LIMIT],
            areas=areas[:HEADER_AREA_LIMIT],
        )

    async def load_landing(self, featured_count: int = FEATURED_MEAL_COUNT) -> LandingMetadata:
        """Fetch popular categories and a few random featured meals.

        Random picks that come back empty are dropped, and the same
        meal drawn twice is shown once.
        """
        categories = await self._lookup.list_categories()
        picks = await asyncio.gather(*(self._lookup.random_pick() for _ in range(featured_count)))

        featured: List[Meal] = []
        for meal in picks:
            if meal is not None and meal not in featured:
                featured.append(meal)

        logger.debug("Landing metadata loaded", categories=len(categories), featured=len(featured))
        return LandingMetadata(
            categories=categories[:LANDING_CATEGORY_LIMIT],
            featured=featured,
        )

    async def list_categories(self) -> List[Category]:
        return await self._lookup.list_categories()

    async def list_areas(self) -> List[Area]:
        return await self._lookup.list_areas()

    async def list_ingredients(self) -> List[CatalogIngredient]:
        return await self._lookup.list_ingredients()
