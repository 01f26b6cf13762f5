"""
Meal catalog domain models.

Read-only views of TheMealDB records. The remote catalog owns them;
the only field used for identity is the meal id.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_YOUTUBE_ID = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")


class IngredientLine(BaseModel):
    """One (ingredient, measure) pair of a recipe.

    Example:
        >>> line = IngredientLine(ingredient="penne rigate", measure="1 pound")
        >>> assert line.measure == "1 pound"
    """

    model_config = ConfigDict(frozen=True)

    ingredient: str = Field(..., min_length=1, description="Ingredient name")
    measure: str = Field("", description="Quantity, may be empty")


class Meal(BaseModel):
    """Meal record from the remote catalog.

    Filter endpoints return partial records (id, name, thumbnail), so
    everything except the id and name is optional.

    Example:
        >>> meal = Meal(id="52771", name="Spicy Arrabiata Penne")
        >>> assert meal == Meal(id="52771", name="Renamed")
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable meal identifier")
    name: str = Field(..., description="Display name")
    thumbnail: Optional[str] = Field(None, description="Thumbnail image URL")
    category: Optional[str] = Field(None, description="Category name")
    area: Optional[str] = Field(None, description="Area / country name")
    instructions: Optional[str] = Field(None, description="Free-text instructions")
    tags: Optional[str] = Field(None, description="Comma separated tags")
    youtube_url: Optional[str] = Field(None, description="Video URL")
    source_url: Optional[str] = Field(None, description="Original recipe URL")
    ingredients: list[IngredientLine] = Field(
        default_factory=list, description="Ordered ingredient lines"
    )

    def __eq__(self, other: object) -> bool:
        """Meals are equal when their ids are."""
        if not isinstance(other, Meal):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash on id only."""
        return hash(self.id)

    def tag_list(self) -> list[str]:
        """Tags split on commas, trimmed, blanks dropped."""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def youtube_video_id(self) -> Optional[str]:
        """Extract the video id from a youtube.com or youtu.be URL.

        Example:
            >>> meal = Meal(
            ...     id="1",
            ...     name="x",
            ...     youtube_url="https://www.youtube.com/watch?v=1IszT_guI08",
            ... )
            >>> meal.youtube_video_id()
            '1IszT_guI08'
        """
        if not self.youtube_url:
            return None
        match = _YOUTUBE_ID.search(self.youtube_url)
        return match.group(1) if match else None

    def instruction_paragraphs(self) -> list[str]:
        """Instructions split on line breaks, blank lines dropped."""
        if not self.instructions:
            return []
        return [p.strip() for p in self.instructions.splitlines() if p.strip()]


class Category(BaseModel):
    """Meal category. The name doubles as the filter value."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Category name")
    id: Optional[str] = Field(None, description="Remote category id")
    thumbnail: Optional[str] = Field(None, description="Category image URL")
    description: Optional[str] = Field(None, description="Category description")


class Area(BaseModel):
    """Area (country / cuisine). The name doubles as the filter value."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Area name")


class CatalogIngredient(BaseModel):
    """Ingredient known to the catalog, usable as an ingredient search term."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Ingredient name")
    id: Optional[str] = Field(None, description="Remote ingredient id")
    description: Optional[str] = Field(None, description="Ingredient description")
