"""Snack persistence interface."""

from typing import Protocol

from snack_meter.domain.snacks import NewSnack, Snack, SnackType

HALL_OF_FAME: tuple[tuple[str, SnackType, float], ...] = (
    ("Amma's Special Parippuvada", SnackType.PARIPPUVADA, 153.9),
    ("The Colossal Vazhaikkapam", SnackType.VAZHAIKKAPAM, 125.6),
    ("Chettan's Crispy Parippuvada", SnackType.PARIPPUVADA, 95.0),
    ("Standard Tea-Stall Vada", SnackType.PARIPPUVADA, 78.5),
    ("Afternoon Delight Vazhaikkapam", SnackType.VAZHAIKKAPAM, 65.3),
)


class SnackRepository(Protocol):
    """Persistence interface for snack records."""

    def save(self, snack: NewSnack) -> str:
        """Store a snack and return its id; raise StorageUnavailableError."""

    def largest(self, snack_type: SnackType) -> Snack | None:
        """Return the snack of this type with the largest area."""

    def top(self, snack_type: SnackType, limit: int) -> list[Snack]:
        """Return up to ``limit`` snacks of this type, largest first."""


def seed_hall_of_fame(repository: SnackRepository) -> list[str]:
    """Store the sample leaderboard entries and return their ids."""
    return [
        repository.save(NewSnack(type=snack_type, area=area, name=name))
        for name, snack_type, area in HALL_OF_FAME
    ]
