"""Snack classification and measurement."""

import base64
import binascii
import random
from dataclasses import dataclass, field
from typing import Protocol

from snack_meter.domain.errors import InvalidInputError
from snack_meter.domain.snacks import KNOWN_SNACK_TYPES, DimensionEstimate, SnackType

PARIPPUVADA_DIAMETER_CM = (8.0, 13.0)
VAZHAIKKAPAM_LENGTH_CM = (10.0, 16.0)
VAZHAIKKAPAM_WIDTH_CM = (5.0, 9.0)


class DimensionProvider(Protocol):
    """Interface for estimating snack dimensions from an image."""

    async def estimate(
        self, image: bytes, snack_type: SnackType | None = None
    ) -> DimensionEstimate:
        """Classify the snack and return its measurements.

        Implementations report failure through ``DimensionEstimate.error``
        instead of raising.
        """


@dataclass
class RandomDimensionProvider(DimensionProvider):
    """Stand-in for a vision model that draws plausible random dimensions.

    The image content is ignored. When no snack type is declared one of the
    known kinds is picked uniformly at random.
    """

    rng: random.Random = field(default_factory=random.Random)

    async def estimate(
        self, image: bytes, snack_type: SnackType | None = None
    ) -> DimensionEstimate:
        """Return a mocked estimate for the image."""
        if not image:
            return DimensionEstimate.failed("No image data was provided.")
        if snack_type == SnackType.UNKNOWN:
            return DimensionEstimate.failed("Could not identify the snack.")
        resolved = snack_type or self.rng.choice(KNOWN_SNACK_TYPES)
        if resolved == SnackType.PARIPPUVADA:
            return DimensionEstimate(
                snack_type=resolved,
                diameter=self.rng.uniform(*PARIPPUVADA_DIAMETER_CM),
            )
        return DimensionEstimate(
            snack_type=resolved,
            length=self.rng.uniform(*VAZHAIKKAPAM_LENGTH_CM),
            width=self.rng.uniform(*VAZHAIKKAPAM_WIDTH_CM),
        )


def decode_data_url(data_url: str) -> bytes:
    """Decode a ``data:<mime>;base64,<data>`` string into raw bytes."""
    if not data_url or not data_url.startswith("data:"):
        raise InvalidInputError("Image must be a data URL")
    header, sep, payload = data_url.partition(",")
    if not sep or not header.endswith(";base64"):
        raise InvalidInputError("Image data URL must be base64 encoded")
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Image data is not valid base64") from exc
    if not decoded:
        raise InvalidInputError("Image data is empty")
    return decoded


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for storage and display."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
