# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable coercion helpers for persistence-layer records.

Storage columns are nullable. These helpers make every default explicit so
that a missing number becomes 0.0 and a missing date becomes None through a
named branch rather than truthiness:
- Nullable numbers (None -> 0.0, anything else handed to pydantic)
- Nullable flags (None -> False)
- Date-only values (date, datetime or ISO string -> date; other types raise
  ValueError so pydantic reports them as ValidationError)
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional


def coerce_nullable_number(value: Any) -> Any:
    """
    Map a missing number to zero.

    Non-null values are returned untouched so pydantic still rejects
    structurally invalid input such as ``"abc"`` or a list.
    """
    if value is None:
        return 0.0
    return value


def coerce_nullable_flag(value: Any) -> Any:
    """Map a missing boolean to False."""
    if value is None:
        return False
    return value


def parse_date_only(value: Any) -> Optional[date]:
    """
    Parse a calendar date, ignoring any time-of-day component.

    Accepts ``date``, ``datetime`` (the date part is kept, no timezone shift)
    and strings such as ``"2025-01-10"`` or ``"2025-01-10T00:00:00Z"``.
    A missing or zero month or day defaults to 1. A month or day past its
    range rolls forward, so ``"2025-13-05"`` is 2026-01-05 and
    ``"2025-02-30"`` is 2025-03-02. Returns None for empty values or an
    unparseable year.

    Raises:
        ValueError: If the value is not a date, datetime, string or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a date or ISO date string, got {type(value).__name__}")

    text = value.strip()
    if not text:
        return None

    parts = text.split("T", 1)[0].split(" ", 1)[0].split("-")
    year = _int_or_none(parts[0])
    if year is None or not 1 <= year <= 9999:
        return None

    month = _int_or_none(parts[1]) if len(parts) > 1 else None
    if month is None or month < 1:
        month = 1
    day = _int_or_none(parts[2]) if len(parts) > 2 else None
    if day is None or day < 1:
        day = 1

    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    if year > 9999:
        return None
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except OverflowError:
        return None


def _int_or_none(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None
