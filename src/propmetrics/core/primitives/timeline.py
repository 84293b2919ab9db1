# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional, Union

import pandas as pd
from pydantic import field_validator, model_validator

from .model import Model
from .types import MonthKey
from .validation import parse_date_only


def to_month_period(value: Union[date, pd.Period, MonthKey]) -> pd.Period:
    """Normalize a date, monthly Period or (year, month) pair to a monthly Period."""
    if isinstance(value, pd.Period):
        return value if value.freqstr == "M" else value.asfreq("M")
    if isinstance(value, tuple):
        year, month = value
        return pd.Period(year=year, month=month, freq="M")
    return pd.Period(value, freq="M")


def month_key(value: Union[date, pd.Period]) -> MonthKey:
    """Return the (year, month) key of a date or monthly Period."""
    period = to_month_period(value)
    return (period.year, period.month)


def days_in_month(year: int, month: int) -> int:
    return pd.Period(year=year, month=month, freq="M").days_in_month


def months_elapsed_in_year(year: int, as_of: date) -> int:
    """
    Number of months of ``year`` that have elapsed as of ``as_of``.

    Past years count all 12 months, future years none, and the as-of year
    counts through the as-of month inclusive.
    """
    if year < as_of.year:
        return 12
    if year > as_of.year:
        return 0
    return as_of.month


def first_month_proration(lease_start: Optional[date], year: int) -> float:
    """
    Fraction of the first lease month that is billable in ``year``.

    Only applies when the lease starts inside ``year`` on a day other than
    the 1st: ``(days_in_month - start_day + 1) / days_in_month``. Every other
    case returns 1.0.

    Example:
        >>> first_month_proration(date(2025, 1, 10), 2025)
        0.7096774193548387
    """
    if lease_start is None or lease_start.year != year:
        return 1.0
    if lease_start.day == 1:
        return 1.0
    total_days = days_in_month(lease_start.year, lease_start.month)
    return (total_days - lease_start.day + 1) / total_days


class DateWindow(Model):
    """
    An inclusive run of calendar months.

    Resolves lease and reporting periods to concrete (year, month) pairs and
    handles windows that cross year boundaries. A window whose end precedes
    its start is valid and empty, mirroring how an inverted lease renders
    no months.

    Attributes:
        start: First month of the window (monthly Period)
        end: Last month of the window (monthly Period), inclusive

    Examples:
        >>> window = DateWindow.from_dates(date(2024, 8, 1), date(2025, 7, 31))
        >>> len(window.month_keys)
        12
        >>> window.months_for_year(2024)
        [8, 9, 10, 11, 12]
    """

    start: pd.Period
    end: pd.Period

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_period(cls, v: Any) -> pd.Period:
        """Ensure bounds are monthly pd.Period values."""
        if isinstance(v, str):
            parsed = parse_date_only(v)
            if parsed is None:
                raise ValueError(f"Cannot parse window bound {v!r}")
            v = parsed
        if isinstance(v, (date, pd.Period, tuple)):
            return to_month_period(v)
        raise ValueError(f"Unsupported window bound {v!r}")

    @model_validator(mode="after")
    def check_frequency(self) -> "DateWindow":
        if self.start.freqstr != "M" or self.end.freqstr != "M":
            raise ValueError("DateWindow bounds must have monthly frequency")
        return self

    @classmethod
    def from_dates(
        cls,
        start_date: Union[date, pd.Period, MonthKey],
        end_date: Union[date, pd.Period, MonthKey],
    ) -> "DateWindow":
        return cls(start=start_date, end=end_date)

    @classmethod
    def year_to_date(cls, as_of: date) -> "DateWindow":
        """January through the as-of month of the as-of year."""
        return cls(start=(as_of.year, 1), end=(as_of.year, as_of.month))

    @classmethod
    def lease_term(
        cls, lease_start: date, lease_end: Optional[date], as_of: date
    ) -> "DateWindow":
        """Lease start month through lease end month, or the as-of month when open-ended."""
        return cls(start=lease_start, end=lease_end if lease_end is not None else as_of)

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def period_index(self) -> pd.PeriodIndex:
        """Monthly PeriodIndex covering the window (empty if inverted)."""
        return pd.period_range(start=self.start, end=self.end, freq="M")

    @property
    def month_keys(self) -> List[MonthKey]:
        return [(p.year, p.month) for p in self.period_index]

    @property
    def years(self) -> List[int]:
        return sorted({year for year, _ in self.month_keys})

    def months_for_year(self, year: int) -> List[int]:
        """Month numbers of the window that fall in ``year``, ascending."""
        return [month for y, month in self.month_keys if y == year]

    def contains(self, key: MonthKey) -> bool:
        if self.is_empty:
            return False
        return self.start <= to_month_period(key) <= self.end

    def truncate(self, end: Union[date, pd.Period, MonthKey]) -> "DateWindow":
        """Return a copy ending at ``end`` if that is earlier than the current end."""
        new_end = to_month_period(end)
        if new_end >= self.end:
            return self
        return DateWindow(start=self.start, end=new_end)


def lease_term_months(
    lease_start: Optional[date], lease_end: Optional[date], as_of: date
) -> List[MonthKey]:
    """Every (year, month) pair of the lease, inclusive; empty without a start."""
    if lease_start is None:
        return []
    return DateWindow.lease_term(lease_start, lease_end, as_of).month_keys


def format_month_year(value: Union[date, pd.Period, MonthKey]) -> str:
    """Short month label, e.g. ``"Aug 2024"``."""
    return to_month_period(value).strftime("%b %Y")
