# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Propmetrics Reporting

Owner dashboard, portfolio tables and display formatting, all built from
canonical metrics results.
"""

from .formatting import format_currency, format_month_year, format_percentage
from .owner import (
    AssetPerformanceNarrative,
    HomePerformance,
    InvestmentPerformance,
    OperatingSummary,
    OperatingSummaryMetrics,
    OwnerDashboardMetrics,
    calculate_owner_metrics,
    generate_asset_performance_narrative,
)
from .portfolio import (
    PortfolioSummary,
    calculate_portfolio_metrics,
    portfolio_frame,
    summarize_portfolio,
)

__all__ = [
    "AssetPerformanceNarrative",
    "HomePerformance",
    "InvestmentPerformance",
    "OperatingSummary",
    "OperatingSummaryMetrics",
    "OwnerDashboardMetrics",
    "PortfolioSummary",
    "calculate_owner_metrics",
    "calculate_portfolio_metrics",
    "format_currency",
    "format_month_year",
    "format_percentage",
    "generate_asset_performance_narrative",
    "portfolio_frame",
    "summarize_portfolio",
]
