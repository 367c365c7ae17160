"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_analysis.adapters.openai_nutrition_client import OpenAINutritionClient
from nutrition_analysis.config import Settings
from nutrition_analysis.services.cache import NutritionCache
from nutrition_analysis.services.nutrition import NutritionAnalysisService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_analysis_service: NutritionAnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAINutritionClient.create(resolved_settings.openai_api_key)
    cache = NutritionCache(
        max_size=resolved_settings.nutrition_cache_max_size,
        ttl_hours=resolved_settings.nutrition_cache_ttl_hours,
    )
    nutrition_analysis_service = NutritionAnalysisService(
        estimator=openai_client,
        cache=cache,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_tokens=resolved_settings.openai_max_tokens,
        timeout_seconds=resolved_settings.estimator_timeout_seconds,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_analysis_service=nutrition_analysis_service,
        close_resources=close_resources,
    )
