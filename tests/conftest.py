"""Shared test fixtures."""

import pytest

from snack_meter.config import Settings
from snack_meter.containers import AppContainer
from snack_meter.services.analysis import SnackAnalysisService
from snack_meter.services.expert import ExpertBadgeService, ThresholdExpertJudge
from tests.fakes import (
    FixedDimensionProvider,
    FlakySnackRepository,
    RecordingCommentaryGenerator,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        snack_store="memory",
        commentary_backend="template",
        random_seed=7,
    )


@pytest.fixture
def repository() -> FlakySnackRepository:
    return FlakySnackRepository()


@pytest.fixture
def dimension_provider() -> FixedDimensionProvider:
    return FixedDimensionProvider()


@pytest.fixture
def commentary_generator() -> RecordingCommentaryGenerator:
    return RecordingCommentaryGenerator()


@pytest.fixture
def analysis_service(
    dimension_provider: FixedDimensionProvider,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> SnackAnalysisService:
    return SnackAnalysisService(
        dimension_provider=dimension_provider,
        commentary_generator=commentary_generator,
        repository=repository,
    )


@pytest.fixture
def container(
    settings: Settings, analysis_service: SnackAnalysisService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        expert_service=ExpertBadgeService(ThresholdExpertJudge()),
        close_resources=close_resources,
    )
