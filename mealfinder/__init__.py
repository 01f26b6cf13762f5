"""
Meal discovery engine for TheMealDB.

Structure:
- domain/: Models, mapper, errors and ports
- infrastructure/: TheMealDB client, key-value storage, config, logging
- application/: Query coordinator, favorites store, catalog and detail services
"""

__version__ = "1.0.0"
