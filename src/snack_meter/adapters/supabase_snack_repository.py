"""Supabase-backed snack repository."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from snack_meter.domain.errors import StorageUnavailableError
from snack_meter.domain.snacks import (
    NewSnack,
    Snack,
    SnackType,
    default_snack_name,
)
from snack_meter.services.snacks import SnackRepository

_logger = logging.getLogger(__name__)

_COLUMNS = "id, type, area, name, image_data, created_at"
_SAVE_FAILED = "Could not save snack to the database."


@dataclass
class SupabaseSnackRepository(SnackRepository):
    """Supabase implementation for snack persistence.

    Reads degrade to empty results when the database is unreachable so a
    leaderboard miss never blocks an analysis; writes raise.
    """

    client: Client
    table_name: str = "snacks"

    def save(self, snack: NewSnack) -> str:
        """Insert a snack row and return its id."""
        try:
            response = (
                self.client.table(self.table_name)
                .insert(
                    {
                        "type": snack.type.value,
                        "area": snack.area,
                        "name": snack.name,
                        "image_data": snack.image_data,
                        "created_at": snack.created_at.isoformat(),
                    }
                )
                .execute()
            )
        except Exception as exc:
            _logger.exception(
                "Failed to save snack", extra={"snack_type": snack.type.value}
            )
            raise StorageUnavailableError(_SAVE_FAILED) from exc
        if not response.data:
            raise StorageUnavailableError(_SAVE_FAILED)
        return str(response.data[0]["id"])

    def largest(self, snack_type: SnackType) -> Snack | None:
        """Return the largest snack of a type, or None if unavailable."""
        snacks = _parse_rows(self._select_top(snack_type, 1))
        return snacks[0] if snacks else None

    def top(self, snack_type: SnackType, limit: int) -> list[Snack]:
        """Return the largest snacks of a type, or [] if unavailable."""
        if limit <= 0:
            return []
        return _parse_rows(self._select_top(snack_type, limit))

    def _select_top(
        self, snack_type: SnackType, limit: int
    ) -> list[dict[str, object]]:
        try:
            response = (
                self.client.table(self.table_name)
                .select(_COLUMNS)
                .eq("type", snack_type.value)
                .order("area", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception:
            _logger.exception(
                "Failed to read snacks", extra={"snack_type": snack_type.value}
            )
            return []
        return response.data or []


def _parse_rows(rows: list[dict[str, object]]) -> list[Snack]:
    snacks = []
    for row in rows:
        try:
            snacks.append(_parse_row(row))
        except (KeyError, TypeError, ValueError):
            _logger.warning(
                "Skipping malformed snack row", extra={"row_id": row.get("id")}
            )
    return snacks


def _parse_row(row: dict[str, object]) -> Snack:
    area = float(row["area"])
    if not area > 0:
        raise ValueError("Snack area must be positive")
    created_at_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_at_raw)
        if isinstance(created_at_raw, str) and created_at_raw
        else datetime.now(tz=UTC)
    )
    snack_type = SnackType(str(row["type"]))
    name = row.get("name")
    image_data = row.get("image_data")
    return Snack(
        id=str(row["id"]),
        type=snack_type,
        area=area,
        name=str(name) if name else default_snack_name(snack_type),
        created_at=created_at,
        image_data=str(image_data) if image_data else None,
    )
