"""MealType value object."""

from __future__ import annotations

from enum import Enum

from food_analyzer.domain.shared.errors import InvalidMealTypeError


class MealType(str, Enum):
    """
    Closed set of meal slots in the daily ledger.

    Declaration order is the display order used by summaries.
    """

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"
    AFTERNOON_TEA = "Afternoon Tea"

    @classmethod
    def parse(cls, value: "str | MealType") -> MealType:
        """
        Parse a display value ("Afternoon Tea") or member name ("AFTERNOON_TEA").

        Matching is case-insensitive; spaces and underscores are
        interchangeable.

        Raises:
            InvalidMealTypeError: If value is not a known meal type

        Example:
            >>> MealType.parse("afternoon tea")
            <MealType.AFTERNOON_TEA: 'Afternoon Tea'>
        """
        if isinstance(value, MealType):
            return value

        key = str(value).strip().upper().replace(" ", "_")
        for member in cls:
            if member.name == key:
                return member

        raise InvalidMealTypeError(f"Unknown meal type: {value!r}")

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
