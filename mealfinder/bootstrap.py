"""
Composition root.

Wires the TheMealDB client, key-value storage and application
services into one object a hosting surface can drive.

Usage:
    async with open_mealfinder() as app:
        await app.coordinator.apply_deep_link(
            DeepLinkParams.from_query_string("category=Seafood")
        )
        app.favorites.toggle("53049")
        meals = await app.favorites.hydrate()
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import structlog

from mealfinder.application.catalog.metadata_service import CatalogMetadataService
from mealfinder.application.discovery.coordinator import QueryCoordinator
from mealfinder.application.favorites.store import FavoritesStore
from mealfinder.application.meal.detail_service import MealDetailService
from mealfinder.domain.favorites.ports import IKeyValueStore
from mealfinder.domain.meal.ports import IMealLookupService
from mealfinder.infrastructure.config import Settings, load_environment
from mealfinder.infrastructure.logging_config import configure_logging
from mealfinder.infrastructure.storage.factory import create_key_value_store
from mealfinder.infrastructure.themealdb.api_client import TheMealDBClient

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MealFinder:
    """Application services sharing one lookup service and one favorites store."""

    coordinator: QueryCoordinator
    favorites: FavoritesStore
    catalog: CatalogMetadataService
    detail: MealDetailService


def build_mealfinder(lookup: IMealLookupService, storage: IKeyValueStore) -> MealFinder:
    """Wire services around an already open lookup service."""
    favorites = FavoritesStore(storage, lookup)
    return MealFinder(
        coordinator=QueryCoordinator(lookup),
        favorites=favorites,
        catalog=CatalogMetadataService(lookup),
        detail=MealDetailService(lookup, favorites),
    )


@asynccontextmanager
async def open_mealfinder(settings: Optional[Settings] = None) -> AsyncIterator[MealFinder]:
    """Open a TheMealDB session and yield wired services.

    Args:
        settings: Explicit settings; read from .env / environment when None
    """
    if settings is None:
        load_environment()
        settings = Settings.from_env()
    configure_logging(settings.log_level)

    storage = create_key_value_store(settings)
    logger.info(
        "Starting mealfinder",
        base_url=settings.mealdb_base_url,
        storage=settings.storage_backend,
    )

    async with TheMealDBClient.from_settings(settings) as client:
        yield build_mealfinder(client, storage)
