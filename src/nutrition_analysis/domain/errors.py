"""Errors raised by nutrition analysis."""


class NutritionAnalysisError(Exception):
    """Base error for nutrition analysis failures."""


class ValidationError(NutritionAnalysisError):
    """Raised when a food description is rejected before analysis."""

    def __init__(self, message: str, field: str = "description") -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class EstimationError(NutritionAnalysisError):
    """Raised when the nutrition estimator fails to produce usable values."""

    def __init__(self, description: str) -> None:
        self.description = description
        self.message = (
            f'Failed to analyze nutrition for "{description}". '
            "Please try manual entry."
        )
        super().__init__(self.message)
