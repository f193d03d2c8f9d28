"""Unit tests for the HTTP API.

Uses httpx AsyncClient with ASGITransport and fake providers.
"""

from typing import Any, AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from conftest import FakeNutritionProvider, FakeVisionProvider
from food_analyzer.api.app import create_app
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.shared.errors import RecognitionNetworkError
from food_analyzer.infrastructure.config import Settings
from food_analyzer.infrastructure.providers import build_orchestrator


def make_app(vision: Any, records: dict[str, NutrientRecord]) -> Any:
    settings = Settings()
    orchestrator = build_orchestrator(settings, vision, FakeNutritionProvider(records=records))
    return create_app(settings, orchestrator=orchestrator, ledger=DailyLedger())


@pytest_asyncio.fixture
async def client(fried_rice: NutrientRecord) -> AsyncIterator[AsyncClient]:
    app = make_app(FakeVisionProvider("fried rice, egg"), {"fried rice": fried_rice})
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def upload(client: AsyncClient, data: bytes) -> Any:
    return await client.post(
        "/api/v1/analysis", files={"file": ("lunch.jpg", data, "image/jpeg")}
    )


class TestAnalysisEndpoints:
    @pytest.mark.asyncio
    async def test_analyze(self, client: AsyncClient, jpeg_bytes: bytes) -> None:
        response = await upload(client, jpeg_bytes)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["error"] is None
        assert body["result"]["entries"][0]["name"] == "fried rice"
        assert body["result"]["totals"]["calories"] == 200.0
        assert "Merged fried rice components" in body["progress"]

    @pytest.mark.asyncio
    async def test_empty_upload(self, client: AsyncClient) -> None:
        response = await upload(client, b"")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_recognition_error_inline(self, jpeg_bytes: bytes) -> None:
        app = make_app(FakeVisionProvider(error=RecognitionNetworkError("timed out")), {})
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await upload(ac, jpeg_bytes)

        assert response.status_code == 200
        assert response.json()["status"] == "failed"
        assert response.json()["error"] == "Request error: timed out"

    @pytest.mark.asyncio
    async def test_reset_analysis(self, client: AsyncClient, jpeg_bytes: bytes) -> None:
        await upload(client, jpeg_bytes)

        response = await client.delete("/api/v1/analysis")
        assert response.status_code == 200

        commit = await client.post("/api/v1/ledger/commit", json={"meal_type": "Lunch"})
        assert commit.json()["committed"] is False


class TestLedgerEndpoints:
    @pytest.mark.asyncio
    async def test_commit_and_summary(self, client: AsyncClient, jpeg_bytes: bytes) -> None:
        await upload(client, jpeg_bytes)

        commit = await client.post("/api/v1/ledger/commit", json={"meal_type": "lunch"})

        assert commit.status_code == 200
        assert commit.json()["committed"] is True
        assert commit.json()["ledger"]["meals"]["Lunch"][0]["name"] == "fried rice"

        summary = await client.get("/api/v1/ledger/summary")
        assert summary.json()["report"] == (
            "Total Nutrient Intake:\n"
            "  Calories: 200 kcal\n"
            "  Protein: 5.0 g\n"
            "  Fat: 7.0 g\n"
            "  Carbohydrates: 30.0 g\n"
            "  Fiber: 2.0 g\n"
            "\n"
            "Lunch:\n"
            "  - Fried Rice\n"
            "\n"
        )

    @pytest.mark.asyncio
    async def test_commit_unknown_meal(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/ledger/commit", json={"meal_type": "brunch"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_reset_ledger(self, client: AsyncClient, jpeg_bytes: bytes) -> None:
        await upload(client, jpeg_bytes)
        await client.post("/api/v1/ledger/commit", json={"meal_type": "Dinner"})

        response = await client.post("/api/v1/ledger/reset")

        assert response.status_code == 200
        assert response.json()["totals"]["calories"] == 0.0
        ledger = (await client.get("/api/v1/ledger")).json()
        assert all(entries == [] for entries in ledger["meals"].values())
        assert (await client.get("/api/v1/ledger/summary")).json()["report"] == ""

    @pytest.mark.asyncio
    async def test_meal_types(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/meal-types")
        assert response.json()["meal_types"][-1] == "Afternoon Tea"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        assert (await client.get("/health")).json() == {"status": "ok"}
