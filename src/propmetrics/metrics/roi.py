# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
ROI calculation functions.

Contains static methods for the return metrics reported on every dashboard.
These functions are pure (math-only) and independent of data access; other
modules delegate to these so each formula exists exactly once. All results
are percentages (5.0 means 5%) and every division guards its denominator,
returning 0.0 instead of raising.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.primitives import Model


class ROIBreakdown(Model):
    """The four ROI variants, in percent of cost basis."""

    roi_pre_tax: float = 0.0
    roi_post_tax: float = 0.0
    roi_with_appreciation: float = 0.0
    roi_if_sold_today: float = 0.0


class ROICalculator:
    """
    Pure mathematical functions for ROI, appreciation and expense ratios.

    Formulas (cost basis as denominator throughout):
    - pre-tax = net income / cost basis
    - post-tax = (net income - tax) / cost basis
    - with appreciation = (net income + appreciation) / cost basis
    - if sold today = (net income - tax - closing costs + appreciation) / cost basis
    """

    @staticmethod
    def percent_of(numerator: float, denominator: float) -> float:
        """``numerator / denominator * 100``, or 0.0 when the denominator is not positive."""
        if denominator <= 0:
            return 0.0
        return (numerator / denominator) * 100

    @staticmethod
    def resolve_tax_figure(
        ytd_property_tax: float,
        estimated_ytd_property_tax: Optional[float] = None,
        estimated_annual_property_tax: Optional[float] = None,
    ) -> float:
        """
        Property tax charged against post-tax returns.

        Actual period tax wins when positive. Otherwise a supplied period
        estimate is used, then the annual estimate in full.

        NOTE: the annual estimate is not pro-rated to the elapsed months,
        unlike every other figure in the period. Kept as-is pending product
        clarification.
        """
        if ytd_property_tax > 0:
            return ytd_property_tax
        if estimated_ytd_property_tax is not None:
            return estimated_ytd_property_tax
        if estimated_annual_property_tax is not None:
            return estimated_annual_property_tax
        return 0.0

    @staticmethod
    def calculate_appreciation(
        current_market_value: float, cost_basis: float
    ) -> Tuple[float, float]:
        """
        Appreciation over cost basis.

        Returns:
            (appreciation_value, appreciation_pct); pct is 0.0 when cost
            basis is not positive
        """
        appreciation_value = current_market_value - cost_basis
        return appreciation_value, ROICalculator.percent_of(appreciation_value, cost_basis)

    @staticmethod
    def calculate_roi(
        net_income: float,
        tax_figure: float,
        closing_costs: float,
        appreciation_value: float,
        cost_basis: float,
    ) -> ROIBreakdown:
        """
        Calculate all four ROI variants.

        Example:
            ```python
            roi = ROICalculator.calculate_roi(
                net_income=40000, tax_figure=5000, closing_costs=0,
                appreciation_value=0, cost_basis=805800,
            )
            print(f"{roi.roi_post_tax:.2f}%")  # 4.34%
            ```
        """
        if cost_basis <= 0:
            return ROIBreakdown()

        percent_of = ROICalculator.percent_of
        return ROIBreakdown(
            roi_pre_tax=percent_of(net_income, cost_basis),
            roi_post_tax=percent_of(net_income - tax_figure, cost_basis),
            roi_with_appreciation=percent_of(net_income + appreciation_value, cost_basis),
            roi_if_sold_today=percent_of(
                net_income - tax_figure - closing_costs + appreciation_value, cost_basis
            ),
        )

    @staticmethod
    def maintenance_pct(maintenance: float, rent_income: float) -> float:
        """Maintenance as percent of rent income; 0.0 without positive rent."""
        return ROICalculator.percent_of(maintenance, rent_income)
