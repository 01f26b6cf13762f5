"""
Discovery domain models.

The query being shown, the state of its results, and the deep-link
parameters a hosting surface can pass in.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mealfinder.domain.meal.models import Meal


class DiscoveryMode(str, Enum):
    """Mutually exclusive discovery modes."""

    NONE = "none"  # Idle, nothing queried yet
    NAME = "name"
    INGREDIENT = "ingredient"
    CATEGORY = "category"
    AREA = "area"
    RANDOM = "random"


class SearchKind(str, Enum):
    """Kind of free-text search."""

    NAME = "name"
    INGREDIENT = "ingredient"

    def to_mode(self) -> DiscoveryMode:
        """Discovery mode for this search kind."""
        return DiscoveryMode(self.value)


_TERMLESS_MODES = {DiscoveryMode.NONE, DiscoveryMode.RANDOM}


class DiscoveryQuery(BaseModel):
    """
    The active discovery request: one mode plus its term.

    A tagged value rather than a set of flags, so a category and a
    search term can never be active at the same time. Compared by
    value on mode and term.

    Example:
        >>> q = DiscoveryQuery(mode=DiscoveryMode.CATEGORY, term="Seafood")
        >>> assert q == DiscoveryQuery.category("Seafood")
        >>> assert DiscoveryQuery.idle().is_idle
    """

    model_config = ConfigDict(frozen=True)

    mode: DiscoveryMode = Field(DiscoveryMode.NONE, description="Active mode")
    term: Optional[str] = Field(None, description="Mode parameter")

    @model_validator(mode="after")
    def check_term(self) -> DiscoveryQuery:
        """Term required for search/filter modes, forbidden otherwise."""
        if self.mode in _TERMLESS_MODES:
            if self.term is not None:
                raise ValueError(f"Mode {self.mode.value} takes no term")
        elif not self.term or not self.term.strip():
            raise ValueError(f"Mode {self.mode.value} requires a term")
        return self

    @property
    def is_idle(self) -> bool:
        """True for the query-less state."""
        return self.mode == DiscoveryMode.NONE

    @classmethod
    def idle(cls) -> DiscoveryQuery:
        return cls(mode=DiscoveryMode.NONE)

    @classmethod
    def search(cls, term: str, kind: SearchKind = SearchKind.NAME) -> DiscoveryQuery:
        return cls(mode=kind.to_mode(), term=term)

    @classmethod
    def category(cls, name: str) -> DiscoveryQuery:
        return cls(mode=DiscoveryMode.CATEGORY, term=name)

    @classmethod
    def area(cls, name: str) -> DiscoveryQuery:
        return cls(mode=DiscoveryMode.AREA, term=name)

    @classmethod
    def random(cls) -> DiscoveryQuery:
        return cls(mode=DiscoveryMode.RANDOM)


class ResultState(BaseModel):
    """
    What the discovery surface currently shows.

    Replaced wholesale on every change, never mutated.

    Attributes:
        query: Query these results belong to
        items: Result meals
        loading: A request for ``query`` is in flight
        has_queried: False only while idle
        error: Message of the last failed request, if any
    """

    model_config = ConfigDict(frozen=True)

    query: DiscoveryQuery = Field(default_factory=DiscoveryQuery.idle)
    items: list[Meal] = Field(default_factory=list)
    loading: bool = False
    has_queried: bool = False
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """A finished, successful query that found nothing."""
        return self.has_queried and not self.loading and self.error is None and not self.items

    @classmethod
    def initial(cls) -> ResultState:
        return cls()


class DeepLinkParams(BaseModel):
    """
    Category / area selection passed in by the hosting surface.

    Example:
        >>> params = DeepLinkParams.from_query_string("category=Seafood&area=")
        >>> assert params.category == "Seafood"
        >>> assert params.area is None
    """

    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    area: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def blank_to_none(cls, data: Any) -> Any:
        """Treat blank values as absent."""
        if isinstance(data, dict):
            return {
                key: (value.strip() or None) if isinstance(value, str) else value
                for key, value in data.items()
            }
        return data

    @property
    def is_empty(self) -> bool:
        return self.category is None and self.area is None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> DeepLinkParams:
        """Build from a mapping such as parsed route parameters."""
        return cls(category=params.get("category"), area=params.get("area"))

    @classmethod
    def from_query_string(cls, query: str) -> DeepLinkParams:
        """Build from a raw URL query string (leading '?' allowed)."""
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        return cls.from_mapping({key: values[0] for key, values in parsed.items()})
