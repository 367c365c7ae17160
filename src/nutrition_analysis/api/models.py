"""Pydantic models for the nutrition HTTP API."""

from pydantic import BaseModel

from nutrition_analysis.domain.nutrition import NutritionAnalysis, NutritionSource


class AnalyzeNutritionRequest(BaseModel):
    """Request body for nutrition analysis."""

    description: str


class NutritionAnalysisResponse(BaseModel):
    """Nutrition estimate returned to API callers."""

    calories: float
    fat: float
    carbs: float
    protein: float
    source: NutritionSource
    confidence: str | None = None

    @classmethod
    def from_analysis(cls, analysis: NutritionAnalysis) -> "NutritionAnalysisResponse":
        return cls.model_validate(analysis.to_dict())
