# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical metrics engine tests.

The reference workbook is reproduced exactly; the remaining tests pin the
behavior every dashboard relies on: tax never in expenses, closing costs in
cost basis, a single last-month bonus, finite output and no-throw defaults.
"""

import json
from datetime import date

import pytest
from pydantic import ValidationError

from propmetrics.core.primitives import (
    MarketValueSourceEnum,
    MetricsSettings,
    PerformanceStatusEnum,
)
from propmetrics.metrics import (
    CanonicalMetrics,
    MetricsOptions,
    calculate_canonical_metrics,
    get_performance_status,
)
from tests.factories import make_property, make_row


class TestWorkbookReproduction:
    @pytest.fixture
    def metrics(self, workbook_property, workbook_rows, workbook_as_of) -> CanonicalMetrics:
        return calculate_canonical_metrics(
            workbook_property, workbook_rows, MetricsOptions(as_of=workbook_as_of)
        )

    def test_totals(self, metrics):
        assert metrics.metrics_year == 2025
        assert metrics.ytd.rent_income == 55775
        assert metrics.ytd.total_expenses == 8098
        assert metrics.ytd.net_income == 47677
        assert metrics.ytd.property_tax == 10819

    def test_valuation(self, metrics):
        assert metrics.cost_basis == 805800
        assert metrics.current_market_value == 928000
        assert metrics.market_value_source is MarketValueSourceEnum.MONTHLY_SNAPSHOT
        assert metrics.appreciation_value == 122200
        assert metrics.months_owned == 12

    def test_roi(self, metrics):
        assert metrics.tax_figure == 10819
        assert metrics.roi_pre_tax == pytest.approx(47677 / 805800 * 100)
        assert metrics.roi_pre_tax == pytest.approx(5.9167, abs=1e-4)
        assert metrics.roi_post_tax == pytest.approx(36858 / 805800 * 100)
        assert metrics.roi_post_tax == pytest.approx(4.5741, abs=1e-4)
        assert metrics.roi_with_appreciation == pytest.approx((47677 + 122200) / 805800 * 100)
        assert metrics.roi_if_sold_today == pytest.approx((36858 + 122200) / 805800 * 100)

    def test_maintenance_and_status(self, metrics):
        assert metrics.maintenance_pct == pytest.approx(1683 / 55775 * 100)
        assert metrics.status is PerformanceStatusEnum.YELLOW

    def test_bonus_month_reconstructs_april_rent(
        self, workbook_property, workbook_rows, workbook_as_of
    ):
        """April's row holds a partial month; the prepaid final month is added once."""
        prop = workbook_property.model_copy(
            update={
                "lease_start": date(2025, 1, 10),
                "target_monthly_rent": 5750,
                "last_month_rent_collected": True,
            }
        )
        rows = [
            row.model_copy(update={"rent_income": 4025}) if row.month == 4 else row
            for row in workbook_rows
        ]
        metrics = calculate_canonical_metrics(prop, rows, {"as_of": workbook_as_of})
        assert metrics.ytd.rent_income == 55775
        assert metrics.ytd.net_income == 47677


class TestEngineRules:
    def test_half_year_example(self):
        prop = make_property(home_cost=240000)
        rows = [make_row(2025, m, rent_income=2000, maintenance=100) for m in range(1, 7)]

        metrics = calculate_canonical_metrics(prop, rows, {"as_of": date(2025, 6, 30)})

        assert metrics.ytd.rent_income == 12000
        assert metrics.ytd.maintenance == 600
        assert metrics.maintenance_pct == pytest.approx(5.0)

    def test_annual_tax_estimate_when_no_tax_recorded(self):
        prop = make_property(home_cost=805800)
        rows = [make_row(2025, 1, rent_income=40000)]

        metrics = calculate_canonical_metrics(
            prop,
            rows,
            MetricsOptions(as_of=date(2025, 12, 31), estimated_annual_property_tax=5000),
        )

        assert metrics.tax_figure == 5000
        assert metrics.roi_pre_tax == pytest.approx(4.964, abs=1e-3)
        assert metrics.roi_post_tax == pytest.approx(4.3435, abs=1e-4)

    def test_ytd_estimate_preferred_over_annual(self):
        rows = [make_row(2025, 1, rent_income=1000)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000),
            rows,
            {
                "as_of": date(2025, 12, 31),
                "estimated_annual_property_tax": 5000,
                "estimated_ytd_property_tax": 1200,
            },
        )
        assert metrics.tax_figure == 1200

    def test_property_tax_never_in_expenses(self):
        rows = [make_row(2025, 3, rent_income=3000, maintenance=100, property_tax=2500)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000), rows, {"as_of": date(2025, 12, 31)}
        )
        assert metrics.ytd.total_expenses == 100
        assert metrics.ytd.net_income == 2900
        assert metrics.roi_post_tax == pytest.approx((2900 - 2500) / 100000 * 100)

    def test_closing_costs_in_cost_basis(self):
        prop = make_property(home_cost=400000, home_repair_cost=10000, closing_costs=8000, total_cost=410000)
        metrics = calculate_canonical_metrics(prop, [], {"as_of": date(2025, 12, 31)})
        assert metrics.cost_basis == 418000

    def test_bonus_is_added_exactly_once(self):
        prop = make_property(
            home_cost=500000,
            target_monthly_rent=3000,
            lease_start=date(2025, 2, 1),
            last_month_rent_collected=True,
        )
        rows = [make_row(2025, m, rent_income=3000) for m in range(2, 13)]
        options = MetricsOptions(as_of=date(2025, 12, 31))

        first = calculate_canonical_metrics(prop, rows, options)
        second = calculate_canonical_metrics(prop, rows, options)

        assert first.ytd.rent_income == 3000 * 12
        assert first == second

    def test_months_filter_limits_aggregation(self):
        rows = [make_row(2025, m, rent_income=1000) for m in range(1, 13)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000),
            rows,
            MetricsOptions(as_of=date(2025, 12, 31), months_filter=tuple(range(5, 13))),
        )
        assert metrics.ytd.rent_income == 8000

    def test_year_defaults_to_first_row(self):
        rows = [make_row(2024, 6, rent_income=1000), make_row(2025, 1, rent_income=7)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000), rows, {"as_of": date(2025, 12, 31)}
        )
        assert metrics.metrics_year == 2024
        assert metrics.ytd.rent_income == 1000

    def test_year_defaults_to_as_of_without_rows(self):
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000), [], {"as_of": date(2025, 12, 31)}
        )
        assert metrics.metrics_year == 2025

    def test_explicit_year(self):
        rows = [make_row(2024, 6, rent_income=1000), make_row(2025, 1, rent_income=7)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=100000), rows, {"as_of": date(2025, 12, 31), "year": 2025}
        )
        assert metrics.ytd.rent_income == 7

    def test_market_value_uses_snapshots_outside_the_year(self):
        rows = [make_row(2024, 11, property_market_estimate=610000), make_row(2025, 1, rent_income=1)]
        metrics = calculate_canonical_metrics(
            make_property(home_cost=600000), rows, {"as_of": date(2025, 12, 31), "year": 2025}
        )
        assert metrics.current_market_value == 610000


class TestDefaultsAndValidation:
    def test_empty_inputs_produce_zeros(self):
        metrics = calculate_canonical_metrics({}, [], {"as_of": date(2025, 12, 31)})

        assert metrics.cost_basis == 0
        assert metrics.roi_pre_tax == 0.0
        assert metrics.roi_post_tax == 0.0
        assert metrics.maintenance_pct == 0.0
        assert metrics.appreciation_pct == 0.0
        assert metrics.market_value_source is MarketValueSourceEnum.COST_BASIS
        assert metrics.months_owned == 1
        assert metrics.status is PerformanceStatusEnum.RED

    def test_storage_rows_with_nulls(self):
        rows = [
            {"year": 2025, "month": 1, "rent_income": 1000, "maintenance": None, "pm_fee": None, "id": 9},
        ]
        metrics = calculate_canonical_metrics(
            {"home_cost": 100000, "closing_costs": None}, rows, {"as_of": "2025-12-31"}
        )
        assert metrics.ytd.net_income == 1000

    def test_malformed_rows_raise(self):
        with pytest.raises(ValidationError):
            calculate_canonical_metrics({}, [{"year": 2025, "month": 14}], {"as_of": date(2025, 12, 31)})
        with pytest.raises(ValidationError):
            calculate_canonical_metrics({}, [{"month": 1}], {"as_of": date(2025, 12, 31)})
        with pytest.raises(ValidationError):
            calculate_canonical_metrics({}, [{"year": 2025, "month": 1, "rent_income": "lots"}])

    def test_options_as_of_defaults_to_today(self):
        assert MetricsOptions().as_of == date.today()
        assert MetricsOptions(as_of=None).as_of == date.today()

    def test_wrongly_typed_dates_raise_validation_error(self):
        with pytest.raises(ValidationError, match="as_of"):
            calculate_canonical_metrics({}, [], {"as_of": 20250101})
        with pytest.raises(ValidationError, match="purchase_date"):
            calculate_canonical_metrics(
                {"purchase_date": 20250101}, [], {"as_of": date(2025, 12, 31)}
            )

    def test_output_is_json_serializable(self, workbook_property, workbook_rows, workbook_as_of):
        metrics = calculate_canonical_metrics(
            workbook_property, workbook_rows, {"as_of": workbook_as_of}
        )
        payload = json.loads(json.dumps(metrics.model_dump(mode="json")))
        assert payload["status"] == "yellow"
        assert payload["ytd"]["rent_income"] == 55775

    def test_non_finite_values_are_rejected(self, workbook_property, workbook_rows, workbook_as_of):
        metrics = calculate_canonical_metrics(
            workbook_property, workbook_rows, {"as_of": workbook_as_of}
        )
        data = metrics.model_dump()
        data["roi_pre_tax"] = float("nan")
        with pytest.raises(ValidationError, match="not finite"):
            CanonicalMetrics.model_validate(data)


def test_status_under_alternate_settings(workbook_property, workbook_rows, workbook_as_of):
    metrics = calculate_canonical_metrics(
        workbook_property, workbook_rows, {"as_of": workbook_as_of}
    )
    assert get_performance_status(metrics) is PerformanceStatusEnum.YELLOW

    lenient = MetricsSettings(green_min_roi=4.5, yellow_min_roi=3.0)
    assert get_performance_status(metrics, lenient) is PerformanceStatusEnum.GREEN
