"""
Domain exceptions.

Typed exceptions for explicit error handling.
None of these is fatal: every failure maps to a smaller, explicit state
(empty list, unchanged prior result, in-memory-only favorites).
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all mealfinder errors.

    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# VALIDATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - Meal id is empty or whitespace

    Example:
        >>> raise ValidationError("Meal id cannot be empty")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all remote catalog errors.
    """

    pass


class MealLookupError(ExternalServiceError):
    """
    Meal catalog lookup failed.

    Raised when:
    - Network error or non-2xx response
    - Response body is not JSON
    - Response JSON has an unexpected shape

    A lookup that simply finds nothing is not an error: list
    operations return [] and single-record lookups return None.

    Example:
        >>> raise MealLookupError("TheMealDB error: 503")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InfrastructureError(DomainError):
    """
    Infrastructure layer error.

    Base class for storage errors.
    """

    pass


class PersistenceError(InfrastructureError):
    """
    Key-value storage read or write failed.

    Raised when:
    - Storage file cannot be read or written
    - Disk full / permission denied
    - Stored document is corrupt

    The favorites store keeps working in memory and reports
    this once per failed operation.

    Example:
        >>> raise PersistenceError("Cannot write favorites.json")
    """

    pass
