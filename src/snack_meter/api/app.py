"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, TypeVar

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ValidationError

from snack_meter.api.models import (
    AnalysisResponse,
    AnalyzeRequest,
    CalculateRequest,
    ExpertRequest,
    ExpertResponse,
    LeaderboardResponse,
)
from snack_meter.api.ui import SNACK_METER_HTML
from snack_meter.app_logging import configure_logging
from snack_meter.containers import AppContainer
from snack_meter.domain.analysis import AnalysisResult
from snack_meter.domain.snacks import SnackType
from snack_meter.services.analysis import (
    INVALID_DIMENSIONS_MESSAGE,
    INVALID_INPUT_MESSAGE,
)
from snack_meter.services.dimensions import to_data_url
from snack_meter.services.expert import UNDETERMINED_REASON

_logger = logging.getLogger(__name__)

_RequestModel = TypeVar("_RequestModel", bound=BaseModel)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        _logger.info(
            "Snack meter starting: store=%s commentary=%s",
            app.state.container.settings.snack_store,
            app.state.container.settings.commentary_backend,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Camera and upload page."""
        return HTMLResponse(SNACK_METER_HTML)

    @app.post("/api/analyze", response_model=AnalysisResponse)
    async def analyze(request: Request) -> AnalysisResponse:
        """Analyse a snack photo sent as a base64 data URL."""
        state_container: AppContainer = request.app.state.container
        payload = await _parse_body(request, AnalyzeRequest)
        if payload is None:
            return _to_response(AnalysisResult.failure(INVALID_INPUT_MESSAGE))
        result = await state_container.analysis_service.analyze(
            payload.image_data, payload.snack_type
        )
        return _to_response(result)

    @app.post("/api/analyze/upload", response_model=AnalysisResponse)
    async def analyze_upload(
        request: Request,
        image: Annotated[UploadFile | None, File()] = None,
        snack_type: Annotated[str | None, Form()] = None,
    ) -> AnalysisResponse:
        """Analyse a snack photo uploaded as a multipart file."""
        state_container: AppContainer = request.app.state.container
        try:
            declared = SnackType(snack_type) if snack_type else None
        except ValueError:
            return _to_response(AnalysisResult.failure(INVALID_INPUT_MESSAGE))
        image_bytes = await image.read() if image is not None else b""
        if not image_bytes:
            return _to_response(AnalysisResult.failure(INVALID_INPUT_MESSAGE))
        result = await state_container.analysis_service.analyze(
            to_data_url(image_bytes), declared
        )
        return _to_response(result)

    @app.post("/api/calculate", response_model=AnalysisResponse)
    async def calculate(request: Request) -> AnalysisResponse:
        """Compute the area of a snack from hand-entered dimensions."""
        state_container: AppContainer = request.app.state.container
        payload = await _parse_body(request, CalculateRequest)
        if payload is None:
            return _to_response(AnalysisResult.failure(INVALID_DIMENSIONS_MESSAGE))
        result = await state_container.analysis_service.calculate(payload)
        return _to_response(result)

    @app.get("/api/leaderboard", response_model=LeaderboardResponse)
    async def leaderboard(request: Request) -> LeaderboardResponse:
        """Return the largest snacks seen so far."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.analysis_service.leaderboard()
        return LeaderboardResponse.model_validate({"leaderboard": entries})

    @app.post("/api/expert", response_model=ExpertResponse)
    async def check_expert(request: Request) -> ExpertResponse:
        """Decide whether a snack area earns the expert badge."""
        state_container: AppContainer = request.app.state.container
        payload = await _parse_body(request, ExpertRequest)
        if payload is None:
            return ExpertResponse(
                is_expert=False,
                reason=f"{UNDETERMINED_REASON} The snack area is missing.",
            )
        badge = await state_container.expert_service.check(payload.snack_area)
        return ExpertResponse.model_validate(badge)

    return app


async def _parse_body(
    request: Request, model: type[_RequestModel]
) -> _RequestModel | None:
    """Validate a JSON body, returning None for anything malformed."""
    try:
        return model.model_validate(await request.json())
    except (ValidationError, ValueError):
        _logger.info("Rejected malformed %s", model.__name__)
        return None


def _to_response(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse.model_validate(result)
