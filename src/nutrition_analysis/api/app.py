"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrition_analysis.api.admin import router as admin_router
from nutrition_analysis.api.models import (
    AnalyzeNutritionRequest,
    NutritionAnalysisResponse,
)
from nutrition_analysis.app_logging import configure_logging
from nutrition_analysis.containers import AppContainer
from nutrition_analysis.domain.errors import EstimationError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(EstimationError)
    async def estimation_error_handler(
        request: Request, exc: EstimationError
    ) -> JSONResponse:
        logger.info("Nutrition estimate unavailable: %s", exc.description)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/nutrition/analyze")
    async def analyze_nutrition(
        body: AnalyzeNutritionRequest, request: Request
    ) -> NutritionAnalysisResponse:
        """Estimate nutrition for a free-text food description."""
        state_container: AppContainer = request.app.state.container
        analysis = await state_container.nutrition_analysis_service.analyze(
            body.description
        )
        return NutritionAnalysisResponse.from_analysis(analysis)

    return app
