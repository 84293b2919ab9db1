# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Windowed appreciation from monthly market-value snapshots.

Measures the change between the earliest and latest positive snapshot inside
a date window (lease term, or purchase to date). A snapshot is dated to the
first of its month. The window ends at the earlier of its end date and the
as-of date.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.primitives import Model
from ..core.records import MonthlyPerformanceRow, PropertyRecord
from .roi import ROICalculator


class Appreciation(Model):
    value: float = 0.0
    pct: float = 0.0


def calculate_window_appreciation(
    rows: Sequence[MonthlyPerformanceRow],
    start: Optional[date],
    end: Optional[date],
    as_of: date,
    start_fallback: float,
    end_fallback: float,
) -> Appreciation:
    """
    Appreciation between the first and last snapshot in ``[start, min(end, as_of)]``.

    Without snapshots in the window the fallbacks stand in for both ends.
    Without a start date the result is zero. ``pct`` is relative to the start
    value and is 0.0 when that value is not positive.
    """
    if start is None:
        return Appreciation()

    effective_end = end if end is not None and end < as_of else as_of
    in_window = sorted(
        (
            row
            for row in rows
            if row.has_market_snapshot
            and start <= date(row.year, row.month, 1) <= effective_end
        ),
        key=lambda row: row.key,
    )

    start_value = in_window[0].property_market_estimate if in_window else start_fallback
    end_value = in_window[-1].property_market_estimate if in_window else end_fallback

    value = end_value - start_value
    return Appreciation(value=value, pct=ROICalculator.percent_of(value, start_value))


def lease_appreciation(
    property: PropertyRecord,
    rows: Sequence[MonthlyPerformanceRow],
    as_of: date,
    cost_basis: float,
) -> Appreciation:
    """Appreciation during the lease term; falls back to cost basis and the stored estimate."""
    return calculate_window_appreciation(
        rows,
        property.lease_start,
        property.lease_end,
        as_of,
        start_fallback=cost_basis,
        end_fallback=property.current_market_estimate,
    )


def purchase_appreciation(
    property: PropertyRecord,
    rows: Sequence[MonthlyPerformanceRow],
    as_of: date,
    cost_basis: float,
) -> Appreciation:
    """Appreciation from the purchase date to ``as_of``."""
    return calculate_window_appreciation(
        rows,
        property.purchase_date,
        None,
        as_of,
        start_fallback=cost_basis,
        end_fallback=property.current_market_estimate,
    )
