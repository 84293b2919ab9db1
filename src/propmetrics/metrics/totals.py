# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period Totals - Monthly Aggregation

Sums monthly performance rows into period totals. Expense and net income are
derived per row before summing, so property tax stays out of
``total_expenses`` month by month and not just in aggregate.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Collection, Iterable, Optional, Sequence

import pandas as pd

from ..core.primitives import Model, MonthKey, months_elapsed_in_year
from ..core.records import MonthlyPerformanceRow

logger = logging.getLogger(__name__)

AMOUNT_COLUMNS = (
    "rent_income",
    "maintenance",
    "pool",
    "garden",
    "hoa_payments",
    "management_fee",
    "property_tax",
)
EXPENSE_COLUMNS = ("maintenance", "pool", "garden", "hoa_payments", "management_fee")
TOTALS_COLUMNS = AMOUNT_COLUMNS + ("total_expenses", "net_income")


class YTDTotals(Model):
    """
    Period sums of monthly performance.

    Derived and never persisted. ``total_expenses`` excludes property tax and
    ``net_income`` equals ``rent_income - total_expenses``.
    """

    rent_income: float = 0.0
    maintenance: float = 0.0
    pool: float = 0.0
    garden: float = 0.0
    hoa_payments: float = 0.0
    management_fee: float = 0.0
    property_tax: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0

    @classmethod
    def zero(cls) -> "YTDTotals":
        return cls()

    @property
    def hoa_pool_garden(self) -> float:
        return self.hoa_payments + self.pool + self.garden

    def with_rent_bonus(self, amount: float) -> "YTDTotals":
        """Copy with ``amount`` added to rent income and net income."""
        return self.model_copy(
            update={
                "rent_income": self.rent_income + amount,
                "net_income": self.net_income + amount,
            }
        )


def performance_frame(rows: Iterable[MonthlyPerformanceRow]) -> pd.DataFrame:
    """
    Tabulate rows with per-row ``total_expenses`` and ``net_income`` columns.

    Row order is preserved and duplicate (year, month) keys are kept.
    """
    records = [
        {"year": row.year, "month": row.month, **{c: getattr(row, c) for c in AMOUNT_COLUMNS}}
        for row in rows
    ]
    frame = pd.DataFrame.from_records(records, columns=["year", "month", *AMOUNT_COLUMNS])
    frame = frame.astype({"year": "int64", "month": "int64", **{c: "float64" for c in AMOUNT_COLUMNS}})
    frame["total_expenses"] = frame[list(EXPENSE_COLUMNS)].sum(axis=1)
    frame["net_income"] = frame["rent_income"] - frame["total_expenses"]
    return frame


def _sum_frame(frame: pd.DataFrame) -> YTDTotals:
    if frame.empty:
        return YTDTotals.zero()
    sums = frame[list(TOTALS_COLUMNS)].sum()
    return YTDTotals(**{column: float(sums[column]) for column in TOTALS_COLUMNS})


def _warn_on_duplicates(frame: pd.DataFrame) -> None:
    duplicated = frame.duplicated(subset=["year", "month"], keep=False)
    if duplicated.any():
        keys = sorted(set(zip(frame.loc[duplicated, "year"], frame.loc[duplicated, "month"])))
        logger.warning(
            f"Duplicate monthly rows for {keys}; all copies are summed as given"
        )


def aggregate_period_totals(
    rows: Sequence[MonthlyPerformanceRow],
    year: int,
    as_of: date,
    months_filter: Optional[Collection[int]] = None,
) -> YTDTotals:
    """
    Sum the rows of ``year`` that have elapsed as of ``as_of``.

    Args:
        rows: Monthly rows, any order, duplicates allowed
        year: Target year
        as_of: Cutoff date; months after the as-of month are excluded
        months_filter: Optional month numbers to keep (lease-term views).
            Empty or None means no extra filter.

    Returns:
        Period totals; all zero when nothing has elapsed or nothing matches.
        Negative amounts are summed as given.
    """
    months_elapsed = months_elapsed_in_year(year, as_of)
    if months_elapsed <= 0:
        logger.debug(f"No months elapsed in {year} as of {as_of}; totals are zero")
        return YTDTotals.zero()

    max_month = min(12, months_elapsed)
    frame = performance_frame(rows)
    scoped = frame[
        (frame["year"] == year) & (frame["month"] >= 1) & (frame["month"] <= max_month)
    ]
    if months_filter:
        scoped = scoped[scoped["month"].isin(set(months_filter))]

    _warn_on_duplicates(scoped)
    logger.debug(f"Aggregating {len(scoped)} of {len(frame)} rows for {year} through month {max_month}")
    return _sum_frame(scoped)


def aggregate_window_totals(
    rows: Sequence[MonthlyPerformanceRow], keys: Collection[MonthKey]
) -> YTDTotals:
    """Sum the rows whose (year, month) is in ``keys``; windows may span years."""
    frame = performance_frame(rows)
    wanted = set(keys)
    mask = [(y, m) in wanted for y, m in zip(frame["year"], frame["month"])]
    scoped = frame[pd.Series(mask, index=frame.index, dtype=bool)]
    _warn_on_duplicates(scoped)
    return _sum_frame(scoped)
