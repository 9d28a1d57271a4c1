"""Dependency container wiring for the application."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snack_meter.adapters.in_memory_snack_repository import InMemorySnackRepository
from snack_meter.adapters.openai_commentary_generator import (
    OpenAICommentaryGenerator,
)
from snack_meter.adapters.supabase_snack_repository import SupabaseSnackRepository
from snack_meter.config import Settings, require_setting
from snack_meter.services.analysis import SnackAnalysisService
from snack_meter.services.commentary import (
    CommentaryGenerator,
    TemplateCommentaryGenerator,
)
from snack_meter.services.dimensions import RandomDimensionProvider
from snack_meter.services.expert import ExpertBadgeService, ThresholdExpertJudge
from snack_meter.services.snacks import SnackRepository, seed_hall_of_fame


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: SnackAnalysisService
    expert_service: ExpertBadgeService
    close_resources: Callable[[], Awaitable[None]]


def build_repository(settings: Settings) -> SnackRepository:
    """Create the snack store selected by configuration."""
    if settings.snack_store == "supabase":
        client = create_client(
            require_setting(settings.supabase_url, "SUPABASE_URL"),
            require_setting(settings.supabase_service_key, "SUPABASE_SERVICE_KEY"),
        )
        return SupabaseSnackRepository(client, table_name=settings.supabase_table)
    repository = InMemorySnackRepository(
        retain_per_type=max(settings.memory_retain_per_type, settings.leaderboard_size)
    )
    if settings.seed_hall_of_fame:
        seed_hall_of_fame(repository)
    return repository


def build_commentary_generator(settings: Settings) -> CommentaryGenerator:
    """Create the commentary backend selected by configuration."""
    if settings.commentary_backend == "openai":
        return OpenAICommentaryGenerator.create(
            api_key=require_setting(settings.openai_api_key, "OPENAI_API_KEY"),
            model=settings.openai_model,
            store=settings.openai_store,
        )
    return TemplateCommentaryGenerator()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    commentary_generator = build_commentary_generator(resolved_settings)
    analysis_service = SnackAnalysisService(
        dimension_provider=RandomDimensionProvider(
            rng=random.Random(resolved_settings.random_seed)
        ),
        commentary_generator=commentary_generator,
        repository=build_repository(resolved_settings),
        leaderboard_size=resolved_settings.leaderboard_size,
    )
    expert_service = ExpertBadgeService(
        judge=ThresholdExpertJudge(threshold=resolved_settings.expert_area_threshold)
    )

    async def close_resources() -> None:
        if isinstance(commentary_generator, OpenAICommentaryGenerator):
            await commentary_generator.client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        expert_service=expert_service,
        close_resources=close_resources,
    )
