"""Unit tests for discovery query, result state and deep-link models."""

import pytest
from pydantic import ValidationError

from mealfinder.domain.discovery.models import (
    DeepLinkParams,
    DiscoveryMode,
    DiscoveryQuery,
    ResultState,
    SearchKind,
)
from mealfinder.domain.meal.models import Meal


class TestDiscoveryQuery:
    """Test the tagged discovery query value."""

    def test_value_equality(self) -> None:
        assert DiscoveryQuery.category("Seafood") == DiscoveryQuery(
            mode=DiscoveryMode.CATEGORY, term="Seafood"
        )
        assert DiscoveryQuery.category("Seafood") != DiscoveryQuery.area("Seafood")
        assert DiscoveryQuery.random() == DiscoveryQuery.random()

    def test_search_kind_maps_to_mode(self) -> None:
        assert DiscoveryQuery.search("Beef", SearchKind.INGREDIENT).mode == DiscoveryMode.INGREDIENT
        assert DiscoveryQuery.search("Arrabiata").mode == DiscoveryMode.NAME

    def test_idle(self) -> None:
        query = DiscoveryQuery.idle()
        assert query.is_idle
        assert query.term is None

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_filter_mode_requires_term(self, term: str) -> None:
        with pytest.raises(ValidationError):
            DiscoveryQuery(mode=DiscoveryMode.CATEGORY, term=term)

    def test_random_takes_no_term(self) -> None:
        with pytest.raises(ValidationError):
            DiscoveryQuery(mode=DiscoveryMode.RANDOM, term="anything")

    def test_frozen(self) -> None:
        query = DiscoveryQuery.area("Italian")
        with pytest.raises(ValidationError):
            query.term = "French"  # type: ignore[misc]


class TestResultState:
    """Test result state flags."""

    def test_initial(self) -> None:
        state = ResultState.initial()

        assert state.query.is_idle
        assert state.items == []
        assert not state.loading
        assert not state.has_queried
        assert not state.is_empty

    def test_empty_result_is_distinct_from_error(self) -> None:
        empty = ResultState(query=DiscoveryQuery.category("Seafood"), has_queried=True)
        failed = ResultState(query=DiscoveryQuery.category("Seafood"), has_queried=True, error="boom")

        assert empty.is_empty
        assert not failed.is_empty

    def test_loading_is_not_empty(self) -> None:
        state = ResultState(query=DiscoveryQuery.category("Seafood"), has_queried=True, loading=True)
        assert not state.is_empty

    def test_with_items_is_not_empty(self) -> None:
        state = ResultState(
            query=DiscoveryQuery.search("Arrabiata"),
            items=[Meal(id="52771", name="Spicy Arrabiata Penne")],
            has_queried=True,
        )
        assert not state.is_empty


class TestDeepLinkParams:
    """Test deep-link parameter parsing."""

    def test_from_query_string(self) -> None:
        params = DeepLinkParams.from_query_string("?category=Seafood")

        assert params.category == "Seafood"
        assert params.area is None

    def test_url_decoding(self) -> None:
        params = DeepLinkParams.from_query_string("area=Saudi%20Arabian")
        assert params.area == "Saudi Arabian"

    def test_blank_values_are_absent(self) -> None:
        params = DeepLinkParams.from_query_string("category=&area=%20")
        assert params.is_empty

    def test_from_mapping_ignores_other_keys(self) -> None:
        params = DeepLinkParams.from_mapping({"category": "Beef", "area": "British", "page": "2"})

        assert params.category == "Beef"
        assert params.area == "British"

    def test_empty(self) -> None:
        assert DeepLinkParams().is_empty
