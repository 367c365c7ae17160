"""Nutrition domain models."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class NutritionFacts:
    """Macronutrient estimate for a described food."""

    calories: float
    fat: float
    carbs: float
    protein: float


class NutritionSource(StrEnum):
    """Where a set of nutrition values came from."""

    AI_GENERATED = "AI_GENERATED"
    CACHED = "CACHED"
    USER_ENTERED = "USER_ENTERED"
    USER_MODIFIED = "USER_MODIFIED"


@dataclass(frozen=True)
class NutritionAnalysis:
    """Result of analyzing a food description."""

    facts: NutritionFacts
    source: NutritionSource
    confidence: str | None = None

    @property
    def calories(self) -> float:
        return self.facts.calories

    @property
    def fat(self) -> float:
        return self.facts.fat

    @property
    def carbs(self) -> float:
        return self.facts.carbs

    @property
    def protein(self) -> float:
        return self.facts.protein

    def to_dict(self) -> dict[str, object]:
        """Flatten facts and provenance into a single mapping."""
        return {
            "calories": self.facts.calories,
            "fat": self.facts.fat,
            "carbs": self.facts.carbs,
            "protein": self.facts.protein,
            "source": self.source.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of nutrition cache usage."""

    size: int
    max_size: int
    hit_rate: float

    def to_dict(self) -> dict[str, object]:
        return {
            "size": self.size,
            "maxSize": self.max_size,
            "hitRate": self.hit_rate,
        }
