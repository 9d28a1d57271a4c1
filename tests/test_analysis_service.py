"""Tests for the snack analysis pipeline."""

import asyncio

import pytest

from snack_meter.adapters.supabase_snack_repository import SupabaseSnackRepository
from snack_meter.domain.errors import CommentaryUnavailableError, RateLimitedError
from snack_meter.domain.snacks import (
    DimensionEstimate,
    ManualDimensions,
    NewSnack,
    SnackType,
)
from snack_meter.services.analysis import (
    INCOMPLETE_MESSAGE,
    INVALID_INPUT_MESSAGE,
    RATE_LIMITED_MESSAGE,
    SAVE_FAILED_MESSAGE,
    UNIDENTIFIED_MESSAGE,
    SnackAnalysisService,
)
from tests.fakes import (
    PNG_DATA_URL,
    FailingCommentaryGenerator,
    FakeSupabaseClient,
    FixedDimensionProvider,
    FlakySnackRepository,
    RecordingCommentaryGenerator,
)


def test_first_snack_is_a_new_record(
    analysis_service: SnackAnalysisService,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> None:
    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error is None
    assert result.snack_type == SnackType.PARIPPUVADA
    assert result.area == pytest.approx(78.54, abs=0.01)
    assert result.is_new_record is True
    assert result.commentary == "Nice snack!"
    assert result.saved is True
    assert commentary_generator.calls == [
        (SnackType.PARIPPUVADA, pytest.approx(78.54, abs=0.01), 0.0)
    ]
    stored = repository.largest(SnackType.PARIPPUVADA)
    assert stored is not None
    assert stored.name == "Your parippuvada"
    assert stored.image_data == PNG_DATA_URL
    assert [snack.id for snack in result.leaderboard] == [stored.id]


def test_smaller_snack_is_not_a_record(
    analysis_service: SnackAnalysisService,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> None:
    repository.save(NewSnack(type=SnackType.PARIPPUVADA, area=100.0))

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.is_new_record is False
    assert commentary_generator.calls[0][2] == 100.0
    assert [snack.area for snack in result.leaderboard][0] == 100.0


def test_declared_snack_type_is_passed_to_provider(
    analysis_service: SnackAnalysisService,
    dimension_provider: FixedDimensionProvider,
) -> None:
    asyncio.run(analysis_service.analyze(PNG_DATA_URL, SnackType.PARIPPUVADA))

    assert dimension_provider.calls == [
        (b"\x89PNG\r\n\x1a\nrest", SnackType.PARIPPUVADA)
    ]


@pytest.mark.parametrize("image_data", [None, "", "hello", "data:image/png;base64,"])
def test_invalid_image_short_circuits(
    analysis_service: SnackAnalysisService,
    dimension_provider: FixedDimensionProvider,
    repository: FlakySnackRepository,
    image_data: str | None,
) -> None:
    result = asyncio.run(analysis_service.analyze(image_data))

    assert result.error == INVALID_INPUT_MESSAGE
    assert result.snack_type == SnackType.UNKNOWN
    assert result.area is None
    assert dimension_provider.calls == []
    assert len(repository) == 0


def test_provider_error_is_returned_untouched(
    analysis_service: SnackAnalysisService,
    dimension_provider: FixedDimensionProvider,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> None:
    dimension_provider.result = DimensionEstimate.failed("bad image")

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error == "bad image"
    assert result.area is None
    assert result.commentary is None
    assert commentary_generator.calls == []
    assert len(repository) == 0


def test_unknown_snack_without_error_gets_friendly_message(
    analysis_service: SnackAnalysisService,
    dimension_provider: FixedDimensionProvider,
) -> None:
    dimension_provider.result = DimensionEstimate(snack_type=SnackType.UNKNOWN)

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error == UNIDENTIFIED_MESSAGE


def test_missing_measurements_stop_before_commentary(
    analysis_service: SnackAnalysisService,
    dimension_provider: FixedDimensionProvider,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> None:
    dimension_provider.result = DimensionEstimate(
        snack_type=SnackType.VAZHAIKKAPAM, length=12.0
    )

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error == INCOMPLETE_MESSAGE
    assert result.snack_type == SnackType.VAZHAIKKAPAM
    assert result.length == 12.0
    assert result.area is None
    assert commentary_generator.calls == []
    assert len(repository) == 0


def test_rate_limited_commentary_is_rephrased(
    dimension_provider: FixedDimensionProvider,
    repository: FlakySnackRepository,
) -> None:
    service = SnackAnalysisService(
        dimension_provider=dimension_provider,
        commentary_generator=FailingCommentaryGenerator(
            RateLimitedError("Error code: 429 - quota exceeded")
        ),
        repository=repository,
    )

    result = asyncio.run(service.analyze(PNG_DATA_URL))

    assert result.error is None
    assert result.area == pytest.approx(78.54, abs=0.01)
    assert result.commentary is None
    assert result.warnings == [RATE_LIMITED_MESSAGE]
    assert result.saved is True


def test_other_commentary_failures_pass_message_through(
    dimension_provider: FixedDimensionProvider,
    repository: FlakySnackRepository,
) -> None:
    service = SnackAnalysisService(
        dimension_provider=dimension_provider,
        commentary_generator=FailingCommentaryGenerator(
            CommentaryUnavailableError("model overloaded", status_code=503)
        ),
        repository=repository,
    )

    result = asyncio.run(service.analyze(PNG_DATA_URL))

    assert result.commentary is None
    assert result.warnings == ["model overloaded"]


def test_read_failure_degrades_to_no_record(
    analysis_service: SnackAnalysisService,
    commentary_generator: RecordingCommentaryGenerator,
    repository: FlakySnackRepository,
) -> None:
    repository.fail_reads = True

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error is None
    assert result.is_new_record is True
    assert commentary_generator.calls[0][2] == 0.0
    assert result.leaderboard == []


def test_write_failure_keeps_the_result(
    analysis_service: SnackAnalysisService,
    repository: FlakySnackRepository,
) -> None:
    repository.fail_writes = True

    result = asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert result.error is None
    assert result.area == pytest.approx(78.54, abs=0.01)
    assert result.commentary == "Nice snack!"
    assert result.saved is False
    assert result.warnings == [SAVE_FAILED_MESSAGE]


def test_leaderboard_merges_kinds(
    analysis_service: SnackAnalysisService,
    repository: FlakySnackRepository,
) -> None:
    for area in (150.0, 40.0, 90.0, 30.0):
        repository.save(NewSnack(type=SnackType.PARIPPUVADA, area=area))
    for area in (120.0, 60.0, 20.0):
        repository.save(NewSnack(type=SnackType.VAZHAIKKAPAM, area=area))

    board = analysis_service.leaderboard()

    assert [snack.area for snack in board] == [150.0, 120.0, 90.0, 60.0, 40.0]
    assert analysis_service.leaderboard(limit=2) == board[:2]


def test_leaderboard_is_stable_between_calls(
    analysis_service: SnackAnalysisService,
) -> None:
    asyncio.run(analysis_service.analyze(PNG_DATA_URL))

    assert analysis_service.leaderboard() == analysis_service.leaderboard()


def test_manual_calculation_is_not_stored(
    analysis_service: SnackAnalysisService,
    repository: FlakySnackRepository,
) -> None:
    repository.save(NewSnack(type=SnackType.VAZHAIKKAPAM, area=125.6))
    dims = ManualDimensions(snack_type=SnackType.VAZHAIKKAPAM, length=12, width=7)

    result = asyncio.run(analysis_service.calculate(dims))

    assert result.area == pytest.approx(65.97, abs=0.01)
    assert result.is_new_record is False
    assert result.commentary == "Nice snack!"
    assert result.saved is False
    assert result.leaderboard is None
    assert len(repository) == 1


def test_malformed_stored_row_does_not_block_analysis(
    dimension_provider: FixedDimensionProvider,
    commentary_generator: RecordingCommentaryGenerator,
) -> None:
    client = FakeSupabaseClient()
    table = client.table("snacks")
    table.select_rows = [
        {"id": "1", "type": "parippuvada", "area": None, "created_at": None}
    ]
    table.insert_rows = [{"id": "new-1"}]
    service = SnackAnalysisService(
        dimension_provider=dimension_provider,
        commentary_generator=commentary_generator,
        repository=SupabaseSnackRepository(client),
    )

    result = asyncio.run(service.analyze(PNG_DATA_URL))

    assert result.error is None
    assert result.is_new_record is True
    assert result.saved is True
    assert commentary_generator.calls[0][2] == 0.0
    assert table.last_payload["type"] == "parippuvada"
