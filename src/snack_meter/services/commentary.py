"""Playful commentary comparing a new snack to the record-holder."""

from dataclasses import dataclass
from typing import Protocol

from snack_meter.domain.snacks import SnackType

WIDE_MARGIN = 0.25
CLOSE_MARGIN = 0.10

COMMENTARY_PROMPT = (
    "You are a cheeky Kerala tea-stall commentator. "
    "A {snack_type} was just measured at {new_area:.1f} cm². "
    "The largest {snack_type} on record so far is {largest_area:.1f} cm² "
    "(0 means this is the first one). "
    "Reply with one short, playful sentence comparing the two."
)

_TEMPLATES: dict[str, str] = {
    "first": (
        "The very first {snack} on the board at {new:.1f} cm². "
        "Someone has to set the bar, and you just did!"
    ),
    "crushed": (
        "Ente ammo! This {snack} is {new:.1f} cm², a whopping {pct:.0f}% bigger "
        "than the old record of {old:.1f} cm². Call the newspapers!"
    ),
    "record": (
        "New record! At {new:.1f} cm² this {snack} edges past "
        "the previous best of {old:.1f} cm²."
    ),
    "close": (
        "So close! {new:.1f} cm² is just {pct:.0f}% short of the "
        "{old:.1f} cm² champion {snack}. One more chaya and try again."
    ),
    "short": (
        "A modest {snack} at {new:.1f} cm². The champion at {old:.1f} cm² "
        "is not losing any sleep tonight."
    ),
}


class CommentaryGenerator(Protocol):
    """Interface for producing a remark about a freshly measured snack."""

    async def comment(
        self, snack_type: SnackType, new_area: float, largest_area: float
    ) -> str:
        """Return a short remark; may raise CommentaryUnavailableError."""


@dataclass
class TemplateCommentaryGenerator(CommentaryGenerator):
    """Deterministic commentary picked from fixed templates."""

    async def comment(
        self, snack_type: SnackType, new_area: float, largest_area: float
    ) -> str:
        """Return a templated remark keyed on how the new snack compares."""
        key, pct = _classify(new_area, largest_area)
        return _TEMPLATES[key].format(
            snack=snack_type.value, new=new_area, old=largest_area, pct=pct
        )


def build_commentary_prompt(
    snack_type: SnackType, new_area: float, largest_area: float
) -> str:
    """Render the prompt used by model-backed generators."""
    return COMMENTARY_PROMPT.format(
        snack_type=snack_type.value, new_area=new_area, largest_area=largest_area
    )


def _classify(new_area: float, largest_area: float) -> tuple[str, float]:
    if largest_area <= 0:
        return "first", 0.0
    ratio = (new_area - largest_area) / largest_area
    if ratio >= WIDE_MARGIN:
        return "crushed", ratio * 100
    if ratio > 0:
        return "record", ratio * 100
    if -ratio <= CLOSE_MARGIN:
        return "close", -ratio * 100
    return "short", -ratio * 100
