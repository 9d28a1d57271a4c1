"""Snack analysis pipeline and leaderboard."""

import logging
from dataclasses import dataclass, replace

from snack_meter.domain.analysis import AnalysisResult
from snack_meter.domain.errors import (
    CommentaryUnavailableError,
    InvalidInputError,
    RateLimitedError,
    StorageUnavailableError,
)
from snack_meter.domain.snacks import (
    KNOWN_SNACK_TYPES,
    DimensionEstimate,
    ManualDimensions,
    NewSnack,
    Snack,
    SnackType,
    default_snack_name,
)
from snack_meter.services.area import calculate_area, calculate_perimeter
from snack_meter.services.commentary import CommentaryGenerator
from snack_meter.services.dimensions import DimensionProvider, decode_data_url
from snack_meter.services.snacks import SnackRepository

_logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input provided."
INVALID_DIMENSIONS_MESSAGE = (
    "Invalid dimensions: every measurement must be between 1 and 100 cm."
)
UNIDENTIFIED_MESSAGE = "Could not identify the snack."
INCOMPLETE_MESSAGE = "Could not calculate area due to missing or invalid dimensions."
RATE_LIMITED_MESSAGE = (
    "The snack commentator is out of breath (quota exceeded). "
    "Please try again in a little while."
)
SAVE_FAILED_MESSAGE = "Could not save snack to the leaderboard."


@dataclass
class SnackAnalysisService:
    """Measures snacks, comments on them and keeps the leaderboard.

    Reading the current record and saving the new snack are separate store
    calls, so two concurrent analyses can both report a new record.
    """

    dimension_provider: DimensionProvider
    commentary_generator: CommentaryGenerator
    repository: SnackRepository
    leaderboard_size: int = 5

    async def analyze(
        self, image_data: str | None, snack_type: SnackType | None = None
    ) -> AnalysisResult:
        """Run the full analysis for an uploaded image data URL."""
        try:
            image = decode_data_url(image_data or "")
        except InvalidInputError as exc:
            _logger.info("Rejected snack image: %s", exc)
            return AnalysisResult.failure(INVALID_INPUT_MESSAGE)

        estimate = await self.dimension_provider.estimate(image, snack_type)
        if estimate.error or estimate.snack_type == SnackType.UNKNOWN:
            return AnalysisResult.failure(
                estimate.error or UNIDENTIFIED_MESSAGE, estimate
            )

        area = calculate_area(estimate)
        if area is None:
            return AnalysisResult.failure(INCOMPLETE_MESSAGE, estimate)

        result = await self._compare(estimate, area)
        try:
            self.repository.save(
                NewSnack(
                    type=estimate.snack_type,
                    area=area,
                    name=default_snack_name(estimate.snack_type),
                    image_data=image_data,
                )
            )
        except StorageUnavailableError:
            _logger.exception(
                "Failed to save analysed snack",
                extra={"snack_type": estimate.snack_type.value},
            )
            result = result.with_warning(SAVE_FAILED_MESSAGE)
        else:
            result = replace(result, saved=True)
        _logger.info(
            "Analysed %s: area=%.2f new_record=%s",
            estimate.snack_type.value,
            area,
            result.is_new_record,
        )
        return replace(result, leaderboard=self.leaderboard())

    async def calculate(self, dimensions: ManualDimensions) -> AnalysisResult:
        """Compute area and commentary for hand-entered dimensions.

        Manual entries are compared with the leaderboard but never stored.
        """
        estimate = dimensions.to_estimate()
        area = calculate_area(estimate)
        if area is None:
            return AnalysisResult.failure(INCOMPLETE_MESSAGE, estimate)
        return await self._compare(estimate, area)

    def leaderboard(self, limit: int | None = None) -> list[Snack]:
        """Return the largest snacks across all kinds, largest first."""
        size = self.leaderboard_size if limit is None else limit
        if size <= 0:
            return []
        entries: list[Snack] = []
        for snack_type in KNOWN_SNACK_TYPES:
            try:
                entries.extend(self.repository.top(snack_type, size))
            except StorageUnavailableError:
                _logger.exception(
                    "Failed to read leaderboard",
                    extra={"snack_type": snack_type.value},
                )
        entries.sort(key=lambda snack: snack.area, reverse=True)
        return entries[:size]

    async def _compare(
        self, estimate: DimensionEstimate, area: float
    ) -> AnalysisResult:
        try:
            largest = self.repository.largest(estimate.snack_type)
        except StorageUnavailableError:
            _logger.exception("Failed to read the current record")
            largest = None
        largest_area = largest.area if largest else 0.0
        result = AnalysisResult(
            snack_type=estimate.snack_type,
            diameter=estimate.diameter,
            length=estimate.length,
            width=estimate.width,
            area=area,
            perimeter=calculate_perimeter(estimate),
            is_new_record=largest is None or area > largest.area,
        )
        try:
            commentary = await self.commentary_generator.comment(
                estimate.snack_type, area, largest_area
            )
        except RateLimitedError:
            _logger.warning("Commentary rate limited")
            return result.with_warning(RATE_LIMITED_MESSAGE)
        except CommentaryUnavailableError as exc:
            _logger.warning("Commentary unavailable: %s", exc)
            return result.with_warning(str(exc))
        except Exception as exc:
            _logger.exception("Commentary generation failed")
            return result.with_warning(str(exc))
        return replace(result, commentary=commentary)
