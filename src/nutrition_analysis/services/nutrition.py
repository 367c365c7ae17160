"""Nutrition analysis service backed by an LLM estimator and a local cache."""

import asyncio
import json
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from nutrition_analysis.domain.errors import EstimationError
from nutrition_analysis.domain.nutrition import (
    CacheStats,
    NutritionAnalysis,
    NutritionFacts,
    NutritionSource,
)
from nutrition_analysis.services.cache import NutritionCache
from nutrition_analysis.services.validation import (
    normalize_description,
    validate_food_description,
)

_logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a nutrition analysis assistant. "
    "Provide accurate nutritional estimates in JSON format only."
)

_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "calories": ("calories",),
    "fat": ("fat",),
    "carbs": ("carbs", "carbohydrates"),
    "protein": ("protein",),
}

_FIELD_LIMITS: dict[str, float] = {
    "calories": 10000,
    "fat": 1000,
    "carbs": 1000,
    "protein": 1000,
}


class NutritionEstimator(Protocol):
    """Interface for the external nutrition estimate completion."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Return the raw text produced for the prompt."""


class EstimatorResponseError(Exception):
    """Raised when the estimator output cannot be turned into nutrition facts."""


@dataclass
class NutritionAnalysisService:
    """Estimate nutrition for free-text food descriptions, with caching."""

    estimator: NutritionEstimator
    cache: NutritionCache
    model: str = "gpt-4o-mini"
    temperature: float = 0.1
    max_tokens: int = 150
    timeout_seconds: float | None = None

    async def analyze(self, description: str) -> NutritionAnalysis:
        """Analyze a food description and return nutrition estimates.

        Raises ValidationError for unusable input and EstimationError when the
        estimator call or its output is unusable. Cache hits never raise.
        """
        validate_food_description(description)
        cache_key = normalize_description(description)

        cached = self.cache.get(cache_key)
        if cached is not None:
            _logger.debug("Nutrition cache hit: key=%s", cache_key)
            return NutritionAnalysis(
                facts=cached, source=NutritionSource.CACHED, confidence="high"
            )

        _logger.debug("Nutrition cache miss: key=%s", cache_key)
        content: str | None = None
        try:
            content = await self._complete(description)
            if not content:
                raise EstimatorResponseError("Empty response from estimator")
            facts = parse_nutrition_facts(content)
            validate_nutrition_facts(facts)
        except Exception as exc:
            _logger.warning(
                "Nutrition estimate failed: description=%r error=%s raw=%r",
                description,
                exc,
                content,
            )
            raise EstimationError(description) from exc

        self.cache.set(cache_key, facts)
        return NutritionAnalysis(
            facts=facts, source=NutritionSource.AI_GENERATED, confidence="medium"
        )

    def clear_cache(self) -> None:
        """Drop all cached estimates."""
        self.cache.clear()

    def get_cache_stats(self) -> CacheStats:
        """Return cache usage statistics."""
        return self.cache.get_stats()

    async def _complete(self, description: str) -> str | None:
        call = self.estimator.complete(
            model=self.model,
            system_prompt=SYSTEM_PROMPT,
            prompt=build_prompt(description),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if self.timeout_seconds is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout_seconds)


def build_prompt(description: str) -> str:
    """Build the estimator prompt for a food description."""
    return (
        f'Analyze the nutritional content of this food item: "{description}"\n'
        "\n"
        "The description may include quantity "
        '(e.g., "2 slices pizza", "1 cup rice", "3 oz chicken").\n'
        "If no quantity is specified, assume a typical serving size.\n"
        "\n"
        "Provide nutrition estimates in this exact JSON format:\n"
        "{\n"
        '  "calories": <number>,\n'
        '  "fat": <number in grams>,\n'
        '  "carbs": <number in grams>,\n'
        '  "protein": <number in grams>\n'
        "}\n"
        "\n"
        "Return ONLY valid JSON with these four numeric fields. "
        "Do not include explanations."
    )


def parse_nutrition_facts(content: str) -> NutritionFacts:
    """Parse estimator JSON output into nutrition facts.

    Field names are matched case-insensitively and ``carbohydrates`` is
    accepted for ``carbs``. Missing or non-numeric fields become 0.
    """
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise EstimatorResponseError("Invalid JSON from estimator") from exc
    if not isinstance(payload, dict):
        raise EstimatorResponseError("Estimator JSON is not an object")

    lowered = {str(key).lower(): value for key, value in payload.items()}
    values: dict[str, float] = {}
    for name, aliases in _FIELD_ALIASES.items():
        raw = next(
            (lowered[alias] for alias in aliases if lowered.get(alias) is not None),
            None,
        )
        number = _to_number(raw)
        if number is None:
            _logger.warning(
                "Estimator field %s missing or not numeric (value=%r), using 0: %s",
                name,
                raw,
                content,
            )
            number = 0.0
        values[name] = number

    return NutritionFacts(
        calories=values["calories"],
        fat=values["fat"],
        carbs=values["carbs"],
        protein=values["protein"],
    )


def validate_nutrition_facts(facts: NutritionFacts) -> None:
    """Ensure every value is finite and within its plausible range."""
    for name, upper in _FIELD_LIMITS.items():
        value = getattr(facts, name)
        if not math.isfinite(value) or value < 0 or value > upper:
            raise EstimatorResponseError(f"Invalid {name} value: {value}")


def _to_number(raw: object) -> float | None:
    """Coerce a JSON value to float, or None when it is not numeric."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            return None
    return None
