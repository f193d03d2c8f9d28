"""
Domain exceptions.

Typed exceptions for explicit error handling across the analysis
pipeline. Recognition-stage errors abort an analysis; lookup errors are
per-food and never escape the resolver.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


class ConfigurationError(DomainError):
    """
    Required configuration is missing or invalid.

    Example:
        >>> raise ConfigurationError("RECOGNITION_API_KEY is not set")
    """

    pass


# ═══════════════════════════════════════════════════════════
# MEAL DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class MealDomainError(DomainError):
    """Base exception for meal domain."""

    pass


class InvalidMealTypeError(MealDomainError):
    """
    Meal type is not one of the fixed meal types.

    Example:
        >>> raise InvalidMealTypeError("Unknown meal type: 'brunch'")
    """

    pass


class EmptySummaryError(MealDomainError):
    """Raised when saving a daily summary that has nothing in it."""

    pass


# ═══════════════════════════════════════════════════════════
# RECOGNITION STAGE
# ═══════════════════════════════════════════════════════════


class RecognitionError(MealDomainError):
    """
    AI food recognition failed.

    Base class for every failure that aborts a whole analysis.
    The message is shown to the user as an inline error.
    """

    pass


class EncodingFailedError(RecognitionError):
    """
    Image could not be turned into an upload payload.

    Raised when:
    - Bytes are not a decodable image
    - JPEG encoder produced no bytes
    """

    pass


class RecognitionNetworkError(RecognitionError):
    """
    Recognition endpoint could not be reached or answered with an error.

    Attributes:
        detail: Transport or HTTP error description
    """

    def __init__(self, detail: str) -> None:
        super().__init__(f"Request error: {detail}")
        self.detail = detail


class InvalidResponseError(RecognitionError):
    """
    Recognition response is malformed or missing expected fields.

    Example:
        >>> raise InvalidResponseError("choices[0].message.content missing")
    """

    pass


class EmptyResultError(RecognitionError):
    """Recognition succeeded but named no foods."""

    pass


# ═══════════════════════════════════════════════════════════
# RESOLUTION STAGE
# ═══════════════════════════════════════════════════════════


class LookupFailedError(MealDomainError):
    """
    Nutrition lookup transport failure.

    Raised by lookup adapters internally; the resolver converts it into
    a "no data" resolution (or a fallback record) and never propagates it.
    """

    pass


# ═══════════════════════════════════════════════════════════
# PERSISTENCE
# ═══════════════════════════════════════════════════════════


class LedgerStoreError(DomainError):
    """
    Stored ledger cannot be read back.

    Example:
        >>> raise LedgerStoreError("Ledger file ledger.json is corrupt: ...")
    """

    pass
