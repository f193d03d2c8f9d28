"""Request/response models of the HTTP API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AnalysisResponse(BaseModel):
    """Result of ``POST /analysis``; recognition failures are reported in ``error``."""

    status: str = Field(..., description="completed | failed | stale")
    generation: int
    error: Optional[str] = None
    progress: str = ""
    result: Optional[Dict[str, Any]] = None


class CommitRequest(BaseModel):
    meal_type: str = Field(..., description="Breakfast, Lunch, Dinner, Snack, Dessert, Afternoon Tea")


class CommitResponse(BaseModel):
    committed: bool
    ledger: Dict[str, Any]


class SummaryResponse(BaseModel):
    report: str


class MealTypesResponse(BaseModel):
    meal_types: List[str]
