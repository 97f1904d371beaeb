"""Normalize stored draw rows into canonical `DrawResult` records.

Stored rows come from several storage layouts, so field names and the
encoding of the drawn numbers vary. Field resolution is driven by an ordered
alias table: the first alias holding a non-empty value wins.

The drawn numbers are not validated (count, distinctness, range); whatever
the store holds is passed through.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

DEFAULT_DRAW_NUMBER = "N/A"
DEFAULT_DATE = "Unknown"

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@dataclass(frozen=True)
class FieldAliases:
    canonical: str
    aliases: tuple[str, ...]


PRIMARY_ALIASES: tuple[FieldAliases, ...] = (
    FieldAliases("drawNumber", ("drawNumber", "draw_number", "draw")),
    FieldAliases("date", ("date", "draw_date")),
    FieldAliases("numbers", ("numbers", "winning_numbers")),
)

# Used for rows coming from the fallback `SELECT *` query.
EXTENDED_ALIASES: tuple[FieldAliases, ...] = (
    FieldAliases("drawNumber", ("drawNumber", "draw_number", "draw", "id")),
    FieldAliases("date", ("date", "draw_date", "created_at")),
    FieldAliases("numbers", ("numbers", "winning_numbers", "nums")),
)


@dataclass(frozen=True)
class DrawResult:
    """Canonical result of one draw."""

    draw_number: str
    date: str
    numbers: list[int] = field(default_factory=list)


def resolve_field(row: Mapping[str, Any], aliases: Sequence[str]) -> Any | None:
    """Return the first non-empty value among `aliases`, in order."""

    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return None


def parse_numbers(value: Any) -> list[Any]:
    """Decode drawn numbers stored as a list, JSON text or comma-separated text.

    Only text that is not JSON is split on commas. Tokens without a leading
    integer are dropped; order is preserved.
    """

    if not value:
        return []

    if isinstance(value, (list, tuple)):
        return list(value)

    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return _split_numbers(value)
        if isinstance(parsed, list):
            return parsed

    return []


def _split_numbers(value: str) -> list[int]:
    """Comma-separated text; each token contributes its leading integer, if any."""

    out: list[int] = []
    for token in value.split(","):
        match = _LEADING_INT.match(token)
        if match:
            out.append(int(match.group()))
    return out


def _as_text(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_row(
    row: Mapping[str, Any],
    aliases: Sequence[FieldAliases] = EXTENDED_ALIASES,
) -> DrawResult:
    """Build a `DrawResult` from one raw row using the given alias table."""

    resolved = {entry.canonical: resolve_field(row, entry.aliases) for entry in aliases}

    draw_number = resolved.get("drawNumber")
    draw_date = resolved.get("date")

    return DrawResult(
        draw_number=_as_text(draw_number) if draw_number else DEFAULT_DRAW_NUMBER,
        date=_as_text(draw_date) if draw_date else DEFAULT_DATE,
        numbers=parse_numbers(resolved.get("numbers")),
    )


def normalize_rows(
    rows: Sequence[Mapping[str, Any]],
    aliases: Sequence[FieldAliases] = EXTENDED_ALIASES,
) -> list[DrawResult]:
    return [normalize_row(row, aliases) for row in rows]


def draw_sort_key(result: DrawResult) -> tuple[int, float]:
    """Sort key for newest-first ordering; non-numeric draw numbers go last."""

    try:
        number = float(result.draw_number)
    except ValueError:
        return (1, 0.0)
    if not math.isfinite(number):
        return (1, 0.0)
    return (0, -number)
