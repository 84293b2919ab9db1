# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period Views - Year-to-Date, Lease Term, All Time

Resolves a reporting mode into concrete (year, month) pairs and computes the
canonical metrics over them. Lease-term and all-time windows may span several
years; their rows are aggregated across every year of the window and then run
through the same bonus, valuation and ROI assembly as the single-year entry
point.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import Field

from ..core.primitives import (
    DateWindow,
    Model,
    MonthKey,
    PeriodTypeEnum,
    format_month_year,
)
from ..core.records import MonthlyPerformanceRow, PropertyRecord
from .canonical import (
    CanonicalMetrics,
    MetricsOptions,
    PropertyInput,
    RowsInput,
    assemble_metrics,
    coerce_options,
    coerce_property,
    coerce_rows,
)
from .totals import aggregate_window_totals

logger = logging.getLogger(__name__)


class PeriodWindow(Model):
    """
    A reporting mode bound to one property's dates.

    A lease-term request without a lease start falls back to year-to-date.
    An open-ended lease runs through the as-of month. All-time starts at the
    purchase date, else the lease start, else January of the as-of year.
    """

    period_type: PeriodTypeEnum
    as_of: date
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    purchase_date: Optional[date] = None

    @classmethod
    def for_property(
        cls, property: PropertyRecord, period_type: PeriodTypeEnum, as_of: date
    ) -> "PeriodWindow":
        return cls(
            period_type=period_type,
            as_of=as_of,
            lease_start=property.lease_start,
            lease_end=property.lease_end,
            purchase_date=property.purchase_date,
        )

    @property
    def effective_type(self) -> PeriodTypeEnum:
        if self.period_type == PeriodTypeEnum.LEASE_TERM and self.lease_start is None:
            return PeriodTypeEnum.YTD
        return self.period_type

    @property
    def window(self) -> DateWindow:
        period_type = self.effective_type
        if period_type == PeriodTypeEnum.YTD:
            return DateWindow.year_to_date(self.as_of)
        if period_type == PeriodTypeEnum.LEASE_TERM:
            return DateWindow.lease_term(self.lease_start, self.lease_end, self.as_of)
        start = self.purchase_date or self.lease_start or date(self.as_of.year, 1, 1)
        return DateWindow.from_dates(start, self.as_of)

    @property
    def month_keys(self) -> List[MonthKey]:
        return self.window.month_keys

    def months_filter_for_year(self, year: int) -> Tuple[int, ...]:
        """Month numbers of the window inside ``year``, for single-year calls."""
        return tuple(self.window.months_for_year(year))

    @property
    def label(self) -> str:
        period_type = self.effective_type
        if period_type == PeriodTypeEnum.YTD:
            suffix = ""
            if self.period_type == PeriodTypeEnum.LEASE_TERM:
                suffix = " (No lease dates)"
            return f"Year-to-Date {self.as_of.year}{suffix}"
        if period_type == PeriodTypeEnum.ALL_TIME:
            return "All Time"
        window = self.window
        end_label = format_month_year(self.lease_end) if self.lease_end else "Present"
        return (
            f"Lease Term ({format_month_year(self.lease_start)} - {end_label})"
            f" - {len(window.month_keys)} months"
        )


class PeriodMetrics(Model):
    """Canonical metrics for a period view, with the months and rows it covers."""

    period_type: PeriodTypeEnum
    label: str
    month_keys: List[MonthKey] = Field(default_factory=list)
    rows: List[MonthlyPerformanceRow] = Field(default_factory=list)
    metrics: CanonicalMetrics


def select_period_rows(
    rows: Sequence[MonthlyPerformanceRow], window: DateWindow
) -> List[MonthlyPerformanceRow]:
    """Rows inside ``window``, sorted by (year, month); stable for duplicates."""
    return sorted((row for row in rows if window.contains(row.key)), key=lambda row: row.key)


def trim_trailing_unpaid(
    window: DateWindow, rows: Sequence[MonthlyPerformanceRow]
) -> DateWindow:
    """
    End the window at the last month with positive rent income.

    Months after the last paid month are dropped rather than shown as unpaid.
    Without any paid month the window is returned unchanged.
    """
    paid = [row.key for row in rows if window.contains(row.key) and row.rent_income > 0]
    if not paid:
        return window
    return window.truncate(max(paid))


def calculate_period_metrics(
    property: PropertyInput,
    rows: RowsInput,
    period_type: Union[PeriodTypeEnum, str],
    options: Optional[Union[MetricsOptions, Mapping[str, Any]]] = None,
) -> PeriodMetrics:
    """
    Canonical metrics over a year-to-date, lease-term or all-time window.

    Args:
        property: Property record (model or mapping)
        rows: All monthly rows of the property
        period_type: ``"ytd"``, ``"lease_term"`` or ``"all_time"``
        options: Reference date, tax estimates and settings. ``year`` and
            ``months_filter`` are ignored; the window defines the months.

    Returns:
        PeriodMetrics with the resolved months, the rows in the window and the
        metrics computed over them

    Raises:
        ValueError: If ``period_type`` is not a known mode
        ValidationError: If inputs are structurally invalid
    """
    period_type = PeriodTypeEnum(period_type)
    property = coerce_property(property)
    rows = coerce_rows(rows)
    options = coerce_options(options)

    period = PeriodWindow.for_property(property, period_type, options.as_of)
    window = period.window
    if period.effective_type == PeriodTypeEnum.ALL_TIME:
        window = trim_trailing_unpaid(window, rows)

    month_keys = window.month_keys
    period_rows = select_period_rows(rows, window)
    totals = aggregate_window_totals(period_rows, month_keys)
    metrics_year = month_keys[-1][0] if month_keys else options.as_of.year
    logger.debug(
        f"{period.label}: {len(month_keys)} months, {len(period_rows)} rows, metrics year {metrics_year}"
    )

    metrics = assemble_metrics(property, rows, totals, metrics_year, options)
    return PeriodMetrics(
        period_type=period.effective_type,
        label=period.label,
        month_keys=month_keys,
        rows=period_rows,
        metrics=metrics,
    )
