# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
DateWindow and month arithmetic tests.

Covers months elapsed, cross-year lease windows, inverted windows and
first-month proration.
"""

from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from propmetrics.core.primitives import (
    DateWindow,
    days_in_month,
    first_month_proration,
    format_month_year,
    lease_term_months,
    month_key,
    months_elapsed_in_year,
)


class TestMonthsElapsed:
    def test_past_year_counts_all_months(self):
        assert months_elapsed_in_year(2024, date(2025, 3, 15)) == 12

    def test_future_year_counts_nothing(self):
        assert months_elapsed_in_year(2026, date(2025, 3, 15)) == 0

    def test_current_year_counts_through_as_of_month(self):
        assert months_elapsed_in_year(2025, date(2025, 3, 1)) == 3
        assert months_elapsed_in_year(2025, date(2025, 12, 31)) == 12


class TestDateWindow:
    def test_lease_spanning_two_years(self):
        """Aug 2024 - Jul 2025 covers 12 months: 5 in 2024 and 7 in 2025."""
        window = DateWindow.from_dates(date(2024, 8, 1), date(2025, 7, 31))

        keys = window.month_keys
        assert len(keys) == 12
        assert keys[0] == (2024, 8)
        assert keys[-1] == (2025, 7)
        assert window.months_for_year(2024) == [8, 9, 10, 11, 12]
        assert window.months_for_year(2025) == [1, 2, 3, 4, 5, 6, 7]
        assert window.years == [2024, 2025]

    def test_mid_month_dates_use_whole_months(self):
        window = DateWindow.from_dates(date(2025, 1, 10), date(2025, 3, 2))
        assert window.month_keys == [(2025, 1), (2025, 2), (2025, 3)]

    def test_inverted_window_is_empty(self):
        window = DateWindow.from_dates(date(2025, 5, 1), date(2025, 2, 1))
        assert window.is_empty
        assert window.month_keys == []
        assert not window.contains((2025, 3))

    def test_accepts_keys_periods_and_strings(self):
        window = DateWindow(start=(2025, 1), end=pd.Period("2025-02", freq="M"))
        assert window.month_keys == [(2025, 1), (2025, 2)]

        from_strings = DateWindow(start="2025-01-10", end="2025-02-28T00:00:00Z")
        assert from_strings == window

    def test_rejects_unparseable_bound(self):
        with pytest.raises(ValueError):
            DateWindow(start="not-a-date", end=(2025, 1))

    def test_year_to_date(self):
        window = DateWindow.year_to_date(date(2025, 6, 30))
        assert window.month_keys == [(2025, m) for m in range(1, 7)]

    def test_open_ended_lease_runs_to_as_of(self):
        window = DateWindow.lease_term(date(2025, 10, 15), None, date(2026, 2, 3))
        assert window.month_keys == [(2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2)]

    def test_contains(self):
        window = DateWindow.from_dates(date(2024, 11, 1), date(2025, 2, 1))
        assert window.contains((2024, 12))
        assert window.contains((2025, 2))
        assert not window.contains((2025, 3))
        assert not window.contains((2024, 10))

    def test_truncate_only_shortens(self):
        window = DateWindow.from_dates(date(2025, 1, 1), date(2025, 12, 1))
        assert window.truncate((2025, 6)).month_keys[-1] == (2025, 6)
        assert window.truncate((2026, 6)) is window

    def test_window_is_immutable(self):
        window = DateWindow.year_to_date(date(2025, 6, 30))
        with pytest.raises(ValidationError):
            window.start = pd.Period("2024-01", freq="M")


class TestLeaseTermMonths:
    def test_without_start_is_empty(self):
        assert lease_term_months(None, date(2025, 7, 31), date(2025, 12, 31)) == []

    def test_with_start_and_end(self):
        keys = lease_term_months(date(2024, 8, 1), date(2025, 7, 31), date(2025, 12, 31))
        assert len([k for k in keys if k[0] == 2024]) == 5
        assert len([k for k in keys if k[0] == 2025]) == 7


class TestFirstMonthProration:
    def test_mid_month_start_is_prorated(self):
        # January has 31 days; starting on the 10th leaves 22 billable days.
        assert first_month_proration(date(2025, 1, 10), 2025) == pytest.approx(22 / 31)

    def test_first_of_month_is_not_prorated(self):
        assert first_month_proration(date(2025, 3, 1), 2025) == 1.0

    def test_start_in_other_year_is_not_prorated(self):
        assert first_month_proration(date(2024, 8, 20), 2025) == 1.0

    def test_missing_start_is_not_prorated(self):
        assert first_month_proration(None, 2025) == 1.0

    def test_leap_february(self):
        assert first_month_proration(date(2024, 2, 15), 2024) == pytest.approx(15 / 29)


def test_days_in_month():
    assert days_in_month(2025, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 12) == 31


def test_month_key_and_label():
    assert month_key(date(2025, 4, 18)) == (2025, 4)
    assert format_month_year((2024, 8)) == "Aug 2024"
    assert format_month_year(date(2025, 1, 10)) == "Jan 2025"
