# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Propmetrics Metrics

The canonical financial-metrics engine and the calculations built on it.

Key Entry Points:
- calculate_canonical_metrics() - single-year metrics for one property
- calculate_period_metrics() - year-to-date, lease-term or all-time view
- calculate_projection() - planned rent, expenses and expected ROI
- get_performance_status() - green / yellow / red classification
"""

from .appreciation import (
    Appreciation,
    calculate_window_appreciation,
    lease_appreciation,
    purchase_appreciation,
)
from .bonus import (
    apply_last_month_rent_bonus,
    last_month_rent_bonus_amount,
    resolve_bonus_year,
)
from .canonical import (
    CanonicalMetrics,
    MetricsOptions,
    calculate_canonical_metrics,
    get_performance_status,
)
from .periods import PeriodMetrics, PeriodWindow, calculate_period_metrics
from .projection import (
    ExpectedROI,
    Projection,
    ProjectionInputs,
    calculate_projection,
    delta_to_actual,
    expected_roi,
    planned_annual_rent,
    planned_period_totals,
)
from .roi import ROIBreakdown, ROICalculator
from .status import classify_performance
from .totals import (
    YTDTotals,
    aggregate_period_totals,
    aggregate_window_totals,
    performance_frame,
)
from .valuation import (
    calculate_months_owned,
    latest_market_snapshot,
    resolve_cost_basis,
    resolve_market_value,
    resolve_market_value_with_source,
)

__all__ = [
    # Engine
    "CanonicalMetrics",
    "MetricsOptions",
    "calculate_canonical_metrics",
    "get_performance_status",
    # Periods
    "PeriodMetrics",
    "PeriodWindow",
    "calculate_period_metrics",
    # Components
    "YTDTotals",
    "aggregate_period_totals",
    "aggregate_window_totals",
    "performance_frame",
    "apply_last_month_rent_bonus",
    "last_month_rent_bonus_amount",
    "resolve_bonus_year",
    "latest_market_snapshot",
    "resolve_cost_basis",
    "resolve_market_value",
    "resolve_market_value_with_source",
    "calculate_months_owned",
    "ROIBreakdown",
    "ROICalculator",
    "classify_performance",
    # Projection
    "ExpectedROI",
    "Projection",
    "ProjectionInputs",
    "calculate_projection",
    "delta_to_actual",
    "expected_roi",
    "planned_annual_rent",
    "planned_period_totals",
    # Appreciation
    "Appreciation",
    "calculate_window_appreciation",
    "lease_appreciation",
    "purchase_appreciation",
]
