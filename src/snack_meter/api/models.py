"""Pydantic models for the public HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from snack_meter.domain.snacks import ManualDimensions, SnackType


class ApiModel(BaseModel):
    """Base model using camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AnalyzeRequest(ApiModel):
    """Payload for analysing a snack photo."""

    image_data: str = Field(min_length=1)
    snack_type: SnackType | None = None


class CalculateRequest(ManualDimensions):
    """Payload for the manual dimension calculator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExpertRequest(ApiModel):
    """Payload for the expert badge check."""

    snack_area: float


class SnackResponse(ApiModel):
    """Leaderboard entry."""

    id: str
    type: SnackType
    name: str
    area: float
    created_at: datetime
    image_data: str | None = None


class AnalysisResponse(ApiModel):
    """Consolidated analysis result."""

    snack_type: SnackType
    diameter: float | None = None
    length: float | None = None
    width: float | None = None
    area: float | None = None
    perimeter: float | None = None
    commentary: str | None = None
    error: str | None = None
    is_new_record: bool | None = None
    leaderboard: list[SnackResponse] | None = None
    saved: bool = False
    warnings: list[str] = Field(default_factory=list)


class LeaderboardResponse(ApiModel):
    """Top snacks across all kinds."""

    leaderboard: list[SnackResponse]


class ExpertResponse(ApiModel):
    """Expert badge decision."""

    is_expert: bool
    reason: str
