"""Surface area geometry for snacks."""

import math

from snack_meter.domain.snacks import DimensionEstimate, SnackType


def calculate_area(estimate: DimensionEstimate) -> float | None:
    """Return the surface area in cm², or None when it can't be computed.

    Parippuvada is treated as a circle, vazhaikkapam as an ellipse.
    """
    area: float | None = None
    if estimate.snack_type == SnackType.PARIPPUVADA:
        if _positive(estimate.diameter):
            area = math.pi * (estimate.diameter / 2) ** 2
    elif estimate.snack_type == SnackType.VAZHAIKKAPAM:
        if _positive(estimate.length) and _positive(estimate.width):
            area = math.pi * (estimate.length / 2) * (estimate.width / 2)
    if area is None or area <= 0:
        return None
    return area


def calculate_perimeter(estimate: DimensionEstimate) -> float | None:
    """Return the circumference of a parippuvada, None for other kinds."""
    if estimate.snack_type == SnackType.PARIPPUVADA and _positive(estimate.diameter):
        return math.pi * estimate.diameter
    return None


def _positive(value: float | None) -> bool:
    return value is not None and value > 0
