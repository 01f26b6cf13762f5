"""
Shared fixtures for mealfinder tests.

Raw records mirror real TheMealDB responses
(Spicy Arrabiata Penne 52771, Teriyaki Chicken Casserole 52772,
Sushi 53065, Big Mac 53049).
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from mealfinder.domain.meal.mapper import MealDBMapper
from mealfinder.domain.meal.models import Meal
from mealfinder.infrastructure.storage.in_memory_store import InMemoryKeyValueStore
from mealfinder.infrastructure.themealdb.api_client import TheMealDBClient


# ═══════════════════════════════════════════════════════════
# RAW RECORD FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def arrabiata_record() -> dict[str, Any]:
    """Full lookup record for Spicy Arrabiata Penne."""
    record: dict[str, Any] = {
        "idMeal": "52771",
        "strMeal": "Spicy Arrabiata Penne",
        "strCategory": "Vegetarian",
        "strArea": "Italian",
        "strInstructions": (
            "Bring a large pot of water to a boil.\r\n"
            "\r\n"
            "In a large skillet, heat the olive oil over medium-high heat.\r\n"
            "Spoon into serving bowls and garnish with chopped parsley."
        ),
        "strMealThumb": "https://www.themealdb.com/images/media/meals/ustsqw1468250014.jpg",
        "strTags": "Pasta,Curry",
        "strYoutube": "https://www.youtube.com/watch?v=1IszT_guI08",
        "strSource": None,
        "strIngredient1": "penne rigate",
        "strMeasure1": "1 pound",
        "strIngredient2": "olive oil",
        "strMeasure2": "1/4 cup",
        "strIngredient3": "garlic",
        "strMeasure3": "3 cloves",
        "strIngredient4": "chopped tomatoes",
        "strMeasure4": "1 tin ",
        "strIngredient5": "red chilli flakes",
        "strMeasure5": "1/2 teaspoon",
        "strIngredient6": "italian seasoning",
        "strMeasure6": "1/2 teaspoon",
        "strIngredient7": "basil",
        "strMeasure7": "6 leaves",
        "strIngredient8": "Parmigiano-Reggiano",
        "strMeasure8": "spinkling",
    }
    for position in range(9, 21):
        record[f"strIngredient{position}"] = ""
        record[f"strMeasure{position}"] = ""
    return record


@pytest.fixture
def teriyaki_record() -> dict[str, Any]:
    """Partial filter record, as returned by filter.php."""
    return {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
    }


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def arrabiata(arrabiata_record: dict[str, Any]) -> Meal:
    return MealDBMapper.parse_meal(arrabiata_record)


@pytest.fixture
def teriyaki(teriyaki_record: dict[str, Any]) -> Meal:
    return MealDBMapper.parse_meal(teriyaki_record)


@pytest.fixture
def sushi() -> Meal:
    return Meal(id="53065", name="Sushi", category="Seafood", area="Japanese")


@pytest.fixture
def big_mac() -> Meal:
    return Meal(id="53049", name="Big Mac", category="Beef", area="American")


# ═══════════════════════════════════════════════════════════
# COLLABORATOR FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def mock_lookup() -> AsyncMock:
    """Mock meal lookup service.

    Default behavior: every list operation finds nothing and every
    single-record operation returns None. Override per test.
    """
    lookup = AsyncMock(spec=TheMealDBClient)
    lookup.search_by_name.return_value = []
    lookup.search_by_ingredient.return_value = []
    lookup.filter_by_category.return_value = []
    lookup.filter_by_area.return_value = []
    lookup.lookup_by_id.return_value = None
    lookup.random_pick.return_value = None
    lookup.list_categories.return_value = []
    lookup.list_areas.return_value = []
    lookup.list_ingredients.return_value = []
    return lookup


@pytest.fixture
def memory_storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
