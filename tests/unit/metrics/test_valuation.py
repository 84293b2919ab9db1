# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from datetime import date

from propmetrics.core.primitives import MarketValueSourceEnum
from propmetrics.metrics import (
    calculate_months_owned,
    latest_market_snapshot,
    resolve_cost_basis,
    resolve_market_value,
    resolve_market_value_with_source,
)
from tests.factories import make_property, make_row


def test_cost_basis_includes_closing_costs_and_ignores_total_cost():
    prop = make_property(home_cost=775000, home_repair_cost=30800, closing_costs=12000, total_cost=1)
    assert resolve_cost_basis(prop) == 817800


class TestMarketValue:
    def test_latest_snapshot_wins(self, workbook_rows, workbook_property):
        value, source = resolve_market_value_with_source(workbook_rows, workbook_property, 805800)
        assert value == 928000
        assert source is MarketValueSourceEnum.MONTHLY_SNAPSHOT

    def test_latest_is_by_calendar_not_row_order(self):
        rows = [
            make_row(2025, 6, property_market_estimate=900000),
            make_row(2024, 12, property_market_estimate=850000),
            make_row(2025, 2, property_market_estimate=870000),
        ]
        assert latest_market_snapshot(rows).key == (2025, 6)

    def test_non_positive_snapshots_are_skipped(self):
        rows = [make_row(2025, 1, property_market_estimate=0)]
        assert latest_market_snapshot(rows) is None

    def test_property_estimate_fallback(self):
        prop = make_property(current_market_estimate=910000)
        value, source = resolve_market_value_with_source([make_row(2025, 1)], prop, 800000)
        assert value == 910000
        assert source is MarketValueSourceEnum.PROPERTY_ESTIMATE

    def test_cost_basis_fallback(self):
        prop = make_property(home_cost=500000, total_cost=1)
        assert resolve_market_value([], prop, 500000) == 500000


class TestMonthsOwned:
    def test_workbook_holding_period(self):
        assert calculate_months_owned(date(2024, 12, 19), date(2025, 12, 31)) == 12

    def test_never_below_one(self):
        assert calculate_months_owned(date(2025, 12, 1), date(2025, 12, 31)) == 1
        assert calculate_months_owned(date(2026, 3, 1), date(2025, 12, 31)) == 1

    def test_missing_purchase_date(self):
        assert calculate_months_owned(None, date(2025, 12, 31)) == 1
