"""Process-local snack repository."""

import threading
from dataclasses import dataclass, field
from uuid import uuid4

from snack_meter.domain.snacks import NewSnack, Snack, SnackType
from snack_meter.services.snacks import SnackRepository


@dataclass
class InMemorySnackRepository(SnackRepository):
    """Volatile snack store; contents are lost when the process exits.

    Only the ``retain_per_type`` largest snacks of each kind are kept.
    """

    retain_per_type: int = 50
    _snacks: list[Snack] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.retain_per_type < 1:
            raise ValueError("retain_per_type must be at least 1")

    def save(self, snack: NewSnack) -> str:
        """Append a snack record, drop overflow and return its id."""
        record = Snack(
            id=uuid4().hex,
            type=snack.type,
            area=snack.area,
            name=snack.name,
            created_at=snack.created_at,
            image_data=snack.image_data,
        )
        with self._lock:
            self._snacks.append(record)
            self._truncate(record.type)
        return record.id

    def largest(self, snack_type: SnackType) -> Snack | None:
        """Return the largest snack of a type."""
        top = self.top(snack_type, 1)
        return top[0] if top else None

    def top(self, snack_type: SnackType, limit: int) -> list[Snack]:
        """Return the largest snacks of a type in descending order."""
        if limit <= 0:
            return []
        with self._lock:
            matching = [snack for snack in self._snacks if snack.type == snack_type]
        matching.sort(key=lambda snack: snack.area, reverse=True)
        return matching[:limit]

    def _truncate(self, snack_type: SnackType) -> None:
        matching = [snack for snack in self._snacks if snack.type == snack_type]
        if len(matching) <= self.retain_per_type:
            return
        matching.sort(key=lambda snack: snack.area, reverse=True)
        dropped = {snack.id for snack in matching[self.retain_per_type :]}
        self._snacks = [snack for snack in self._snacks if snack.id not in dropped]

    def __len__(self) -> int:
        with self._lock:
            return len(self._snacks)
