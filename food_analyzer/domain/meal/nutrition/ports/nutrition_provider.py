"""Port (interface) for nutrition data providers.

This port defines the contract that external nutrition lookup services
must implement to be used by the domain layer.
"""

from typing import Protocol

from food_analyzer.domain.meal.nutrition.entities.resolution import LookupOutcome


class INutritionProvider(Protocol):
    """
    Interface for nutrition data providers.

    This port follows the Dependency Inversion Principle:
    - Domain layer defines the interface (port)
    - Infrastructure layer implements it (adapter)

    Implementations report failures through ``LookupOutcome.status``
    instead of raising, so the caller can tell a network failure apart
    from "no match".
    """

    async def lookup(self, name: str) -> LookupOutcome:
        """
        Look up nutrients for one normalized food name.

        Args:
            name: Food name (e.g. "fried rice", "banana")

        Returns:
            LookupOutcome with a record when status is FOUND

        Example:
            >>> outcome = await provider.lookup("banana")
            >>> if outcome.has_record():
            ...     print(outcome.record.calories)
        """
        ...
