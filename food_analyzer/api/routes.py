"""REST endpoints for photo analysis and the daily ledger."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from food_analyzer.api.schemas import (
    AnalysisResponse,
    CommitRequest,
    CommitResponse,
    MealTypesResponse,
    SummaryResponse,
)
from food_analyzer.application.meal.commands import (
    CommitAnalysisCommand,
    CommitAnalysisCommandHandler,
    ResetLedgerCommand,
    ResetLedgerCommandHandler,
)
from food_analyzer.application.meal.orchestrators import MealAnalysisOrchestrator
from food_analyzer.application.meal.queries import (
    GetDailySummaryQuery,
    GetDailySummaryQueryHandler,
)
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.shared.errors import InvalidMealTypeError

logger = logging.getLogger(__name__)

# Maximum upload size: 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024

router = APIRouter(prefix="/api/v1", tags=["analysis"])


def _orchestrator(request: Request) -> MealAnalysisOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Analysis service not ready")
    return orchestrator


def _ledger(request: Request) -> DailyLedger:
    return request.app.state.ledger


@router.post("/analysis", response_model=AnalysisResponse)
async def analyze_photo(
    request: Request,
    file: UploadFile = File(..., description="Meal photo"),
) -> AnalysisResponse:
    """Analyze one meal photo and make it the current analysis.

    Example:
        ```bash
        curl -X POST http://localhost:8080/api/v1/analysis -F "file=@lunch.jpg"
        ```
    """
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        )

    logger.info(
        "Analysis request",
        extra={"file_name": file.filename, "content_type": file.content_type, "size": len(content)},
    )
    outcome = await _orchestrator(request).analyze(content)
    return AnalysisResponse(**outcome.to_dict())


@router.delete("/analysis")
async def reset_analysis(request: Request) -> Dict[str, Any]:
    orchestrator = _orchestrator(request)
    orchestrator.reset_analysis()
    return {"status": "reset", "generation": orchestrator.generation}


@router.post("/ledger/commit", response_model=CommitResponse)
async def commit_analysis(request: Request, body: CommitRequest) -> CommitResponse:
    try:
        meal_type = MealType.parse(body.meal_type)
    except InvalidMealTypeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    ledger = _ledger(request)
    handler = CommitAnalysisCommandHandler(
        _orchestrator(request), ledger, request.app.state.store
    )
    committed = await handler.handle(CommitAnalysisCommand(meal_type=meal_type))
    return CommitResponse(committed=committed, ledger=ledger.snapshot().to_dict())


@router.post("/ledger/reset")
async def reset_ledger(request: Request) -> Dict[str, Any]:
    ledger = _ledger(request)
    handler = ResetLedgerCommandHandler(
        ledger,
        orchestrator=getattr(request.app.state, "orchestrator", None),
        store=request.app.state.store,
    )
    await handler.handle(ResetLedgerCommand())
    return ledger.snapshot().to_dict()


@router.get("/ledger")
async def get_ledger(request: Request) -> Dict[str, Any]:
    return _ledger(request).snapshot().to_dict()


@router.get("/ledger/summary", response_model=SummaryResponse)
async def get_summary(request: Request) -> SummaryResponse:
    summary = await GetDailySummaryQueryHandler(_ledger(request)).handle(GetDailySummaryQuery())
    return SummaryResponse(report=summary.report)


@router.get("/meal-types", response_model=MealTypesResponse)
async def list_meal_types() -> MealTypesResponse:
    return MealTypesResponse(meal_types=MealType.values())
