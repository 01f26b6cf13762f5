"""TheMealDB API adapter."""

from mealfinder.infrastructure.themealdb.api_client import TheMealDBClient

__all__ = [
    "TheMealDBClient",
]
