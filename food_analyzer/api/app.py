"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from food_analyzer import __version__
from food_analyzer.api.routes import router
from food_analyzer.application.meal.orchestrators import MealAnalysisOrchestrator
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.shared.ports.ledger_store import ILedgerStore
from food_analyzer.infrastructure.config import Settings, configure_logging, load_settings
from food_analyzer.infrastructure.providers import (
    create_ledger_store,
    load_ledger,
    open_orchestrator,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[MealAnalysisOrchestrator] = None,
    ledger: Optional[DailyLedger] = None,
    store: Optional[ILedgerStore] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Runtime configuration (default: from environment)
        orchestrator: Pre-built orchestrator; when omitted the HTTP clients
            are opened for the lifetime of the app
        ledger: Pre-built ledger (default: restored from LEDGER_PATH if set)
        store: Ledger persistence (default: from LEDGER_PATH)
    """
    settings = settings or load_settings()
    if store is None:
        store = create_ledger_store(settings)
    if ledger is None:
        ledger = load_ledger(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if orchestrator is not None:
            yield
            return
        async with open_orchestrator(settings) as built:
            app.state.orchestrator = built
            logger.info("lifespan.ready", extra={"status": "serving"})
            yield
            logger.info("lifespan.shutdown", extra={"status": "cleanup"})

    app = FastAPI(title="Food Photo Analyzer", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.orchestrator = orchestrator
    app.state.ledger = ledger
    app.state.store = store
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
