"""Tests for templated commentary."""

import asyncio

from snack_meter.domain.snacks import SnackType
from snack_meter.services.commentary import (
    TemplateCommentaryGenerator,
    build_commentary_prompt,
)


def _comment(new_area: float, largest_area: float) -> str:
    generator = TemplateCommentaryGenerator()
    return asyncio.run(
        generator.comment(SnackType.PARIPPUVADA, new_area, largest_area)
    )


def test_first_snack_sets_the_bar() -> None:
    text = _comment(78.54, 0.0)

    assert "first parippuvada" in text
    assert "78.5" in text


def test_wide_margin_record() -> None:
    assert "bigger than the old record" in _comment(150.0, 100.0)


def test_narrow_record() -> None:
    assert "New record!" in _comment(105.0, 100.0)


def test_close_runner_up() -> None:
    assert "So close!" in _comment(95.0, 100.0)


def test_well_short() -> None:
    assert "not losing any sleep" in _comment(50.0, 100.0)


def test_commentary_is_deterministic() -> None:
    assert _comment(80.0, 100.0) == _comment(80.0, 100.0)


def test_prompt_mentions_both_areas() -> None:
    prompt = build_commentary_prompt(SnackType.VAZHAIKKAPAM, 60.25, 125.6)

    assert "vazhaikkapam" in prompt
    assert "60.2" in prompt or "60.3" in prompt
    assert "125.6" in prompt