"""Result models for snack analysis."""

from dataclasses import dataclass, field, replace

from snack_meter.domain.snacks import DimensionEstimate, Snack, SnackType


@dataclass(frozen=True)
class AnalysisResult:
    """Consolidated outcome of analysing one snack."""

    snack_type: SnackType
    diameter: float | None = None
    length: float | None = None
    width: float | None = None
    area: float | None = None
    perimeter: float | None = None
    commentary: str | None = None
    error: str | None = None
    is_new_record: bool | None = None
    leaderboard: list[Snack] | None = None
    saved: bool = False
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls, error: str, estimate: DimensionEstimate | None = None
    ) -> "AnalysisResult":
        """Build a short-circuit result that keeps whatever was measured."""
        if estimate is None:
            return cls(snack_type=SnackType.UNKNOWN, error=error)
        return cls(
            snack_type=estimate.snack_type,
            diameter=estimate.diameter,
            length=estimate.length,
            width=estimate.width,
            error=error,
        )

    def with_warning(self, message: str) -> "AnalysisResult":
        """Return a copy with an extra non-fatal warning."""
        return replace(self, warnings=[*self.warnings, message])
