"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nutrition_analysis.config import Settings
from nutrition_analysis.containers import AppContainer
from nutrition_analysis.services.cache import NutritionCache
from nutrition_analysis.services.nutrition import (
    NutritionAnalysisService,
    NutritionEstimator,
)

BANANA_RESPONSE = json.dumps({"calories": 105, "fat": 0.4, "carbs": 27, "protein": 1.3})


@dataclass
class FakeNutritionEstimator(NutritionEstimator):
    """Fake estimator returning a fixed payload and recording prompts."""

    response: str | None = BANANA_RESPONSE
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    now: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        admin_token="admin-token",
    )


@pytest.fixture
def estimator() -> FakeNutritionEstimator:
    return FakeNutritionEstimator()


@pytest.fixture
def nutrition_service(estimator: FakeNutritionEstimator) -> NutritionAnalysisService:
    return NutritionAnalysisService(estimator=estimator, cache=NutritionCache())


@pytest.fixture
def container(
    settings: Settings,
    nutrition_service: NutritionAnalysisService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_analysis_service=nutrition_service,
        close_resources=close_resources,
    )
