"""Pydantic models for the Edamam food-database parser response."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EdamamFood(BaseModel):
    """``food`` object; only the nutrient map is used."""

    model_config = ConfigDict(extra="ignore")

    food_id: Optional[str] = Field(None, alias="foodId")
    label: Optional[str] = None
    nutrients: Dict[str, float] = Field(default_factory=dict)


class EdamamMatch(BaseModel):
    """Item of ``parsed`` or ``hints``."""

    model_config = ConfigDict(extra="ignore")

    food: Optional[EdamamFood] = None


class ParserResponse(BaseModel):
    """
    ``GET /api/food-database/v2/parser`` response.

    Example:
        >>> body = ParserResponse.model_validate(
        ...     {"parsed": [{"food": {"nutrients": {"ENERC_KCAL": 52.0}}}]}
        ... )
        >>> body.best_match().nutrients
        {'ENERC_KCAL': 52.0}
    """

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    parsed: Optional[List[EdamamMatch]] = None
    hints: Optional[List[EdamamMatch]] = None

    def best_match(self) -> Optional[EdamamFood]:
        """First parsed food, else first hint, else None."""
        if self.parsed and self.parsed[0].food is not None:
            return self.parsed[0].food
        if self.hints:
            return self.hints[0].food
        return None
