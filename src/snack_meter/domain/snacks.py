"""Domain models for snacks and their measurements."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class SnackType(StrEnum):
    """Known snack kinds."""

    PARIPPUVADA = "parippuvada"
    VAZHAIKKAPAM = "vazhaikkapam"
    UNKNOWN = "unknown"


KNOWN_SNACK_TYPES: tuple[SnackType, ...] = (
    SnackType.PARIPPUVADA,
    SnackType.VAZHAIKKAPAM,
)


def default_snack_name(snack_type: SnackType) -> str:
    """Return the display label used when a snack has no name."""
    return f"Your {snack_type.value}"


@dataclass(frozen=True)
class NewSnack:
    """A snack about to be persisted."""

    type: SnackType
    area: float
    name: str = ""
    image_data: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if self.type == SnackType.UNKNOWN:
            raise ValueError("Unknown snacks cannot be stored")
        if not self.area > 0:
            raise ValueError("Snack area must be positive")
        if not self.name:
            object.__setattr__(self, "name", default_snack_name(self.type))


@dataclass(frozen=True)
class Snack:
    """A persisted snack record."""

    id: str
    type: SnackType
    area: float
    name: str
    created_at: datetime
    image_data: str | None = None


class DimensionEstimate(BaseModel):
    """Classification plus the measurements relevant to it, in centimetres."""

    snack_type: SnackType
    diameter: float | None = None
    length: float | None = None
    width: float | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_measurements(self) -> "DimensionEstimate":
        if self.snack_type == SnackType.UNKNOWN:
            if any(v is not None for v in (self.diameter, self.length, self.width)):
                raise ValueError("unknown snacks carry no measurements")
        elif self.snack_type == SnackType.PARIPPUVADA:
            if self.length is not None or self.width is not None:
                raise ValueError("parippuvada is measured by diameter only")
        elif self.diameter is not None:
            raise ValueError("vazhaikkapam is measured by length and width only")
        return self

    @classmethod
    def failed(cls, error: str) -> "DimensionEstimate":
        """Return an unknown estimate carrying an error message."""
        return cls(snack_type=SnackType.UNKNOWN, error=error)


class ManualDimensions(BaseModel):
    """Dimensions typed in by hand for the calculator."""

    snack_type: SnackType
    diameter: float | None = Field(default=None, ge=1, le=100)
    length: float | None = Field(default=None, ge=1, le=100)
    width: float | None = Field(default=None, ge=1, le=100)

    @model_validator(mode="after")
    def check_required(self) -> "ManualDimensions":
        if self.snack_type == SnackType.UNKNOWN:
            raise ValueError("snack_type must be a known snack")
        if self.snack_type == SnackType.PARIPPUVADA and self.diameter is None:
            raise ValueError("diameter is required for parippuvada")
        if self.snack_type == SnackType.VAZHAIKKAPAM and (
            self.length is None or self.width is None
        ):
            raise ValueError("length and width are required for vazhaikkapam")
        return self

    def to_estimate(self) -> DimensionEstimate:
        """Convert to an estimate, dropping fields irrelevant to the kind."""
        if self.snack_type == SnackType.PARIPPUVADA:
            return DimensionEstimate(
                snack_type=self.snack_type, diameter=self.diameter
            )
        return DimensionEstimate(
            snack_type=self.snack_type, length=self.length, width=self.width
        )


@dataclass(frozen=True)
class ExpertBadge:
    """Outcome of an expert badge check."""

    is_expert: bool
    reason: str
