"""
TheMealDB data mapper.

Transforms TheMealDB API responses to domain models.
"""

from typing import Any, Optional

from mealfinder.domain.meal.models import (
    Area,
    CatalogIngredient,
    Category,
    IngredientLine,
    Meal,
)

MAX_INGREDIENTS = 20


def _clean(value: Any) -> Optional[str]:
    """Trimmed string, or None for null / blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _records(payload: Any, key: str) -> list[dict[str, Any]]:
    """Pull the record list out of a response envelope.

    TheMealDB answers ``{"meals": null}`` when nothing matches.

    Raises:
        ValueError: If the envelope or its records have the wrong shape
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Expected JSON object, got {type(payload).__name__}")

    records = payload.get(key)
    if records is None:
        return []
    if not isinstance(records, list):
        raise ValueError(f"Expected list under '{key}', got {type(records).__name__}")
    if not all(isinstance(record, dict) for record in records):
        raise ValueError(f"Non-object record under '{key}'")
    return records


class MealDBMapper:
    """Maps TheMealDB API data to domain models."""

    @staticmethod
    def extract_ingredients(record: dict[str, Any]) -> list[IngredientLine]:
        """Extract ordered ingredient lines from a raw meal record.

        Ingredients live in twenty numbered field pairs
        (``strIngredient1``/``strMeasure1`` .. ``strIngredient20``/
        ``strMeasure20``), any of which may be missing, null or blank.

        Args:
            record: Raw meal record

        Returns:
            Lines for every position with a non-blank ingredient, in
            position order. Missing measures become "".

        Example:
            >>> MealDBMapper.extract_ingredients(
            ...     {"strIngredient1": " penne ", "strIngredient2": ""}
            ... )
            [IngredientLine(ingredient='penne', measure='')]
        """
        lines: list[IngredientLine] = []
        for position in range(1, MAX_INGREDIENTS + 1):
            ingredient = _clean(record.get(f"strIngredient{position}"))
            if ingredient is None:
                continue
            measure = _clean(record.get(f"strMeasure{position}")) or ""
            lines.append(IngredientLine(ingredient=ingredient, measure=measure))
        return lines

    @staticmethod
    def parse_meal(record: dict[str, Any]) -> Meal:
        """Parse one raw meal record.

        Raises:
            ValueError: If the record has no id
        """
        meal_id = _clean(record.get("idMeal"))
        if meal_id is None:
            raise ValueError("Meal record without idMeal")

        return Meal(
            id=meal_id,
            name=_clean(record.get("strMeal")) or "",
            thumbnail=_clean(record.get("strMealThumb")),
            category=_clean(record.get("strCategory")),
            area=_clean(record.get("strArea")),
            instructions=record.get("strInstructions") or None,
            tags=_clean(record.get("strTags")),
            youtube_url=_clean(record.get("strYoutube")),
            source_url=_clean(record.get("strSource")),
            ingredients=MealDBMapper.extract_ingredients(record),
        )

    @staticmethod
    def parse_meals(payload: Any) -> list[Meal]:
        """Parse a search/filter/lookup/random response into meals."""
        return [MealDBMapper.parse_meal(record) for record in _records(payload, "meals")]

    @staticmethod
    def parse_categories(payload: Any) -> list[Category]:
        """Parse a ``categories.php`` response."""
        categories = []
        for record in _records(payload, "categories"):
            name = _clean(record.get("strCategory"))
            if name is None:
                continue
            categories.append(
                Category(
                    name=name,
                    id=_clean(record.get("idCategory")),
                    thumbnail=_clean(record.get("strCategoryThumb")),
                    description=_clean(record.get("strCategoryDescription")),
                )
            )
        return categories

    @staticmethod
    def parse_areas(payload: Any) -> list[Area]:
        """Parse a ``list.php?a=list`` response."""
        names = (_clean(record.get("strArea")) for record in _records(payload, "meals"))
        return [Area(name=name) for name in names if name is not None]

    @staticmethod
    def parse_ingredients(payload: Any) -> list[CatalogIngredient]:
        """Parse a ``list.php?i=list`` response."""
        ingredients = []
        for record in _records(payload, "meals"):
            name = _clean(record.get("strIngredient"))
            if name is None:
                continue
            ingredients.append(
                CatalogIngredient(
                    name=name,
                    id=_clean(record.get("idIngredient")),
                    description=_clean(record.get("strDescription")),
                )
            )
        return ingredients
