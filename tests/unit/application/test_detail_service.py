"""
Unit tests for MealDetailService.
"""

from unittest.mock import AsyncMock

import pytest

from mealfinder.application.favorites.store import FavoritesStore
from mealfinder.application.meal.detail_service import MealDetailService
from mealfinder.domain.meal.models import IngredientLine, Meal
from mealfinder.domain.shared.errors import MealLookupError
from mealfinder.infrastructure.storage.in_memory_store import InMemoryKeyValueStore


@pytest.fixture
def favorites(memory_storage: InMemoryKeyValueStore, mock_lookup: AsyncMock) -> FavoritesStore:
    return FavoritesStore(memory_storage, mock_lookup)


@pytest.fixture
def service(mock_lookup: AsyncMock, favorites: FavoritesStore) -> MealDetailService:
    return MealDetailService(mock_lookup, favorites)


class TestGetDetail:
    async def test_full_record(
        self, service: MealDetailService, mock_lookup: AsyncMock, arrabiata: Meal
    ) -> None:
        mock_lookup.lookup_by_id.return_value = arrabiata

        detail = await service.get_detail("52771")

        mock_lookup.lookup_by_id.assert_awaited_once_with("52771")
        assert detail is not None
        assert detail.meal == arrabiata
        assert len(detail.ingredients) == 8
        assert detail.ingredients[3] == IngredientLine(ingredient="chopped tomatoes", measure="1 tin")
        assert detail.tags == ["Pasta", "Curry"]
        assert detail.youtube_video_id == "1IszT_guI08"
        assert detail.instruction_paragraphs == [
            "Bring a large pot of water to a boil.",
            "In a large skillet, heat the olive oil over medium-high heat.",
            "Spoon into serving bowls and garnish with chopped parsley.",
        ]
        assert detail.is_favorite is False

    async def test_partial_record(
        self, service: MealDetailService, mock_lookup: AsyncMock, teriyaki: Meal
    ) -> None:
        mock_lookup.lookup_by_id.return_value = teriyaki

        detail = await service.get_detail("52772")

        assert detail is not None
        assert detail.tags == []
        assert detail.youtube_video_id is None
        assert detail.instruction_paragraphs == []

    async def test_reflects_favorite_flag(
        self,
        service: MealDetailService,
        mock_lookup: AsyncMock,
        favorites: FavoritesStore,
        big_mac: Meal,
    ) -> None:
        mock_lookup.lookup_by_id.return_value = big_mac
        favorites.toggle("53049")

        detail = await service.get_detail("53049")

        assert detail is not None
        assert detail.is_favorite is True

    async def test_not_found(self, service: MealDetailService) -> None:
        assert await service.get_detail("00000") is None

    async def test_lookup_failure_propagates(self, service: MealDetailService, mock_lookup: AsyncMock) -> None:
        mock_lookup.lookup_by_id.side_effect = MealLookupError("TheMealDB API error: 500")

        with pytest.raises(MealLookupError):
            await service.get_detail("52771")


class TestActions:
    def test_toggle_favorite_goes_through_shared_store(
        self, service: MealDetailService, favorites: FavoritesStore
    ) -> None:
        result = service.toggle_favorite("53049")

        assert result.now_favorite is True
        assert favorites.is_favorite("53049")

    async def test_random_meal_id(self, service: MealDetailService, mock_lookup: AsyncMock, sushi: Meal) -> None:
        mock_lookup.random_pick.return_value = sushi

        assert await service.random_meal_id() == "53065"

    async def test_random_meal_id_none(self, service: MealDetailService) -> None:
        assert await service.random_meal_id() is None
