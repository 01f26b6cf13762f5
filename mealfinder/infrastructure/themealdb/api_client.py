"""
TheMealDB API client - Implements IMealLookupService port.

Stateless request/response wrapper around the public catalog.
Never caches, never retries: callers decide what a failure means.
"""

from typing import Any, Callable, Optional, TypeVar

import httpx
import structlog

from mealfinder.domain.meal.mapper import MealDBMapper
from mealfinder.domain.meal.models import Area, CatalogIngredient, Category, Meal
from mealfinder.domain.shared.errors import MealLookupError
from mealfinder.infrastructure.config import DEFAULT_MEALDB_BASE_URL, Settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class TheMealDBClient:
    """
    TheMealDB API client implementing IMealLookupService port.

    Example:
        >>> async with TheMealDBClient() as client:
        ...     meals = await client.search_by_name("Arrabiata")
        ...     meal = await client.lookup_by_id(meals[0].id)
    """

    USER_AGENT = "mealfinder/1.0"

    def __init__(
        self,
        base_url: str = DEFAULT_MEALDB_BASE_URL,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: API root including the key segment
            timeout_seconds: Request timeout, None for no timeout
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TheMealDBClient":
        """Build a client from resolved settings."""
        return cls(
            base_url=settings.mealdb_base_url,
            timeout_seconds=settings.mealdb_timeout_s,
        )

    async def __aenter__(self) -> "TheMealDBClient":
        """Async context manager entry."""
        self._session = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={"User-Agent": self.USER_AGENT},
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    async def _get_json(self, endpoint: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET an endpoint and decode its JSON body.

        Raises:
            MealLookupError: On transport error, error status or non-JSON body
        """
        if not self._session:
            raise MealLookupError("Client not initialized, use async with")

        url = f"{self.base_url}/{endpoint}"
        logger.debug("Catalog request", endpoint=endpoint, params=params)

        try:
            response = await self._session.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Catalog request failed", endpoint=endpoint, error=str(e))
            raise MealLookupError(f"TheMealDB request failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "Catalog error status",
                endpoint=endpoint,
                status=response.status_code,
            )
            raise MealLookupError(f"TheMealDB API error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            logger.warning("Catalog returned invalid JSON", endpoint=endpoint)
            raise MealLookupError(f"TheMealDB returned invalid JSON for {endpoint}") from e

    async def _fetch(
        self,
        endpoint: str,
        parse: Callable[[Any], T],
        params: Optional[dict[str, str]] = None,
    ) -> T:
        """GET and map a response, turning shape errors into MealLookupError."""
        payload = await self._get_json(endpoint, params)
        try:
            return parse(payload)
        except ValueError as e:
            logger.warning("Malformed catalog response", endpoint=endpoint, error=str(e))
            raise MealLookupError(f"Malformed TheMealDB response from {endpoint}: {e}") from e

    async def _fetch_one(self, endpoint: str, params: Optional[dict[str, str]] = None) -> Optional[Meal]:
        meals = await self._fetch(endpoint, MealDBMapper.parse_meals, params)
        return meals[0] if meals else None

    async def search_by_name(self, term: str) -> list[Meal]:
        """Search meals by name.

        Args:
            term: Name fragment, e.g. "Arrabiata"

        Returns:
            Matching meals with full records, [] when none

        Raises:
            MealLookupError: If the request fails
        """
        meals = await self._fetch("search.php", MealDBMapper.parse_meals, {"s": term})
        logger.info("Name search", term=term, count=len(meals))
        return meals

    async def search_by_ingredient(self, term: str) -> list[Meal]:
        """Search meals by main ingredient (partial records)."""
        meals = await self._fetch("filter.php", MealDBMapper.parse_meals, {"i": term})
        logger.info("Ingredient search", term=term, count=len(meals))
        return meals

    async def filter_by_category(self, name: str) -> list[Meal]:
        """Filter meals by category (partial records)."""
        meals = await self._fetch("filter.php", MealDBMapper.parse_meals, {"c": name})
        logger.info("Category filter", category=name, count=len(meals))
        return meals

    async def filter_by_area(self, name: str) -> list[Meal]:
        """Filter meals by area (partial records)."""
        meals = await self._fetch("filter.php", MealDBMapper.parse_meals, {"a": name})
        logger.info("Area filter", area=name, count=len(meals))
        return meals

    async def lookup_by_id(self, meal_id: str) -> Optional[Meal]:
        """Get the full record of one meal.

        Returns:
            The meal, or None if the id is unknown

        Raises:
            MealLookupError: If the request fails
        """
        meal = await self._fetch_one("lookup.php", {"i": meal_id})
        if meal is None:
            logger.info("Meal not found", meal_id=meal_id)
        return meal

    async def random_pick(self) -> Optional[Meal]:
        """Get one random meal."""
        return await self._fetch_one("random.php")

    async def list_categories(self) -> list[Category]:
        """List all categories with thumbnails and descriptions."""
        return await self._fetch("categories.php", MealDBMapper.parse_categories)

    async def list_areas(self) -> list[Area]:
        """List all areas."""
        return await self._fetch("list.php", MealDBMapper.parse_areas, {"a": "list"})

    async def list_ingredients(self) -> list[CatalogIngredient]:
        """List all ingredients."""
        return await self._fetch("list.php", MealDBMapper.parse_ingredients, {"i": "list"})
