"""Shared test fixtures.

Fakes implementing the ports so that no test touches the network.
"""

from __future__ import annotations

import asyncio
import io
from typing import Dict, List, Optional

import pytest
from PIL import Image

from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.meal.nutrition.entities.resolution import (
    LookupOutcome,
    LookupStatus,
)
from food_analyzer.domain.meal.recognition.entities.encoded_image import EncodedImage


class FakeVisionProvider:
    """IVisionProvider returning a canned answer (or raising)."""

    def __init__(self, answer: str = "fried rice, egg", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.calls: List[str] = []

    async def describe_foods(self, image: EncodedImage, prompt: str) -> str:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


class FakeNutritionProvider:
    """INutritionProvider backed by a dict; unknown names are NO_MATCH."""

    def __init__(
        self,
        records: Optional[Dict[str, NutrientRecord]] = None,
        failures: Optional[Dict[str, LookupStatus]] = None,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.records = records or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def lookup(self, name: str) -> LookupOutcome:
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(name, 0))
            if name in self.failures:
                return LookupOutcome.failed(self.failures[name], detail="simulated")
            if name in self.records:
                return LookupOutcome.found(self.records[name])
            return LookupOutcome.failed(LookupStatus.NO_MATCH)
        finally:
            self.in_flight -= 1


@pytest.fixture
def fried_rice() -> NutrientRecord:
    return NutrientRecord(calories=200, protein=5, fat=7, carbs=30, fiber=2)


@pytest.fixture
def apple() -> NutrientRecord:
    return NutrientRecord(calories=52, protein=0.3, fat=0.2, carbs=13.8, fiber=2.4)


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small valid JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), (200, 120, 40)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def png_rgba_bytes() -> bytes:
    """PNG with a transparent pixel region."""
    img = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
    img.paste((255, 0, 0, 255), (0, 0, 8, 8))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
