# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Owner Dashboard Metrics

Operating summary, home performance, investment performance and the
narrative shown to owners. Every figure is taken from a CanonicalMetrics
result (cost basis, market value, ROI variants, status) so the owner view
always agrees with the admin and per-property views; plan and year-end target
figures come from the stored annual targets.
"""

from __future__ import annotations

from typing import Optional

from ..core.primitives import Model, PerformanceStatusEnum
from ..core.records import AnnualTarget, PropertyRecord
from ..metrics.canonical import CanonicalMetrics
from ..metrics.roi import ROICalculator
from ..metrics.totals import YTDTotals
from .formatting import format_currency, format_percentage


class OperatingSummaryMetrics(Model):
    gross_income: float = 0.0
    maintenance: float = 0.0
    maintenance_pct_of_income: float = 0.0
    hoa_pool_garden: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    property_tax: float = 0.0
    property_tax_pct_of_income: float = 0.0


class DeltaToPlan(Model):
    """Percent difference of actual from plan; the maintenance ratio is a point difference."""

    gross_income: float = 0.0
    maintenance: float = 0.0
    maintenance_pct_of_income: float = 0.0
    hoa_pool_garden: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0


class OperatingSummary(Model):
    actual: OperatingSummaryMetrics
    plan: OperatingSummaryMetrics
    ye_target: OperatingSummaryMetrics
    delta_to_plan: DeltaToPlan


class HomePerformance(Model):
    cost_basis: float
    current_value: float
    appreciation: float
    appreciation_percentage: float
    months_owned: int
    monthly_gain: float
    annualized_gain_percentage: float


class InvestmentPerformance(Model):
    roi_pre_tax: float
    roi_post_tax: float
    roi_with_appreciation: float
    roi_if_sold_today: float


class OwnerDashboardMetrics(Model):
    property: PropertyRecord
    metrics: CanonicalMetrics
    operating_summary: OperatingSummary
    home_performance: HomePerformance
    investment_performance: InvestmentPerformance

    @property
    def status(self) -> PerformanceStatusEnum:
        return self.metrics.status


class AssetPerformanceNarrative(Model):
    status: PerformanceStatusEnum
    investment_performance_text: str
    operating_income_text: str
    property_taxes_text: str
    home_value_text: str


def totals_to_operating_metrics(totals: YTDTotals) -> OperatingSummaryMetrics:
    percent_of = ROICalculator.percent_of
    return OperatingSummaryMetrics(
        gross_income=totals.rent_income,
        maintenance=totals.maintenance,
        maintenance_pct_of_income=percent_of(totals.maintenance, totals.rent_income),
        hoa_pool_garden=totals.hoa_pool_garden,
        total_expenses=totals.total_expenses,
        net_income=totals.net_income,
        property_tax=totals.property_tax,
        property_tax_pct_of_income=percent_of(totals.property_tax, totals.rent_income),
    )


def target_to_operating_metrics(target: Optional[AnnualTarget]) -> OperatingSummaryMetrics:
    if target is None:
        return OperatingSummaryMetrics()
    percent_of = ROICalculator.percent_of
    return OperatingSummaryMetrics(
        gross_income=target.rent_income,
        maintenance=target.maintenance,
        maintenance_pct_of_income=percent_of(target.maintenance, target.rent_income),
        hoa_pool_garden=target.hoa_pool_garden,
        total_expenses=target.total_expenses,
        net_income=target.net_income,
        property_tax=target.property_tax,
        property_tax_pct_of_income=percent_of(target.property_tax, target.rent_income),
    )


def _pct_change(actual: float, plan: float) -> float:
    return ROICalculator.percent_of(actual - plan, plan)


def calculate_delta_to_plan(
    actual: OperatingSummaryMetrics, plan: OperatingSummaryMetrics
) -> DeltaToPlan:
    """Percent change versus plan per line; 0.0 where the plan is not positive."""
    return DeltaToPlan(
        gross_income=_pct_change(actual.gross_income, plan.gross_income),
        maintenance=_pct_change(actual.maintenance, plan.maintenance),
        maintenance_pct_of_income=actual.maintenance_pct_of_income
        - plan.maintenance_pct_of_income,
        hoa_pool_garden=_pct_change(actual.hoa_pool_garden, plan.hoa_pool_garden),
        total_expenses=_pct_change(actual.total_expenses, plan.total_expenses),
        net_income=_pct_change(actual.net_income, plan.net_income),
    )


def calculate_home_performance(metrics: CanonicalMetrics) -> HomePerformance:
    """Appreciation over the holding period, with monthly and annualized rates."""
    months_owned = metrics.months_owned
    return HomePerformance(
        cost_basis=metrics.cost_basis,
        current_value=metrics.current_market_value,
        appreciation=metrics.appreciation_value,
        appreciation_percentage=metrics.appreciation_pct,
        months_owned=months_owned,
        monthly_gain=metrics.appreciation_value / months_owned,
        annualized_gain_percentage=(metrics.appreciation_pct * 12) / months_owned,
    )


def calculate_owner_metrics(
    property: PropertyRecord,
    metrics: CanonicalMetrics,
    plan_target: Optional[AnnualTarget] = None,
    ye_target: Optional[AnnualTarget] = None,
) -> OwnerDashboardMetrics:
    """
    Owner dashboard figures for one property.

    Args:
        property: The property the metrics were calculated for
        metrics: Canonical metrics result; actuals are taken from it as-is
        plan_target: Plan target for the metrics year, if any
        ye_target: Year-end target for the metrics year, if any
    """
    actual = totals_to_operating_metrics(metrics.ytd)
    plan = target_to_operating_metrics(plan_target)

    return OwnerDashboardMetrics(
        property=property,
        metrics=metrics,
        operating_summary=OperatingSummary(
            actual=actual,
            plan=plan,
            ye_target=target_to_operating_metrics(ye_target),
            delta_to_plan=calculate_delta_to_plan(actual, plan),
        ),
        home_performance=calculate_home_performance(metrics),
        investment_performance=InvestmentPerformance(
            roi_pre_tax=metrics.roi_pre_tax,
            roi_post_tax=metrics.roi_post_tax,
            roi_with_appreciation=metrics.roi_with_appreciation,
            roi_if_sold_today=metrics.roi_if_sold_today,
        ),
    )


def generate_asset_performance_narrative(
    dashboard: OwnerDashboardMetrics,
    plan_target: Optional[AnnualTarget] = None,
    ye_target: Optional[AnnualTarget] = None,
) -> AssetPerformanceNarrative:
    """Plain-language summary paragraphs for the owner dashboard."""
    status = dashboard.status
    actual = dashboard.operating_summary.actual
    home = dashboard.home_performance
    investment = dashboard.investment_performance
    property = dashboard.property
    cost_basis = dashboard.metrics.cost_basis

    investment_text = (
        f"Investment performance is {status.value} ({status.label}) based on income, "
        f"maintenance, expenses, and asset appreciation."
    )

    ye_text = ""
    if ye_target is not None:
        ye_roi = ROICalculator.percent_of(ye_target.net_income, cost_basis)
        ye_text = f" The home is expected to yield {format_percentage(ye_roi)} annually."

    maintenance_target = plan_target.maintenance_percentage_target if plan_target else 5.0
    relation = "below" if actual.maintenance_pct_of_income <= maintenance_target else "above"
    operating_text = (
        f"Income is {format_currency(actual.gross_income)}, "
        f"maintenance is {format_currency(actual.maintenance)}, "
        f"and HOA, pool, and other fees are {format_currency(actual.hoa_pool_garden)}, "
        f"creating a net income of {format_currency(actual.net_income)}. "
        f"ROI is {format_percentage(investment.roi_pre_tax)}.{ye_text} "
        f"Maintenance costs are {format_percentage(actual.maintenance_pct_of_income)} of income "
        f"({relation} the target of <{format_percentage(maintenance_target, 0)})."
    )

    if actual.property_tax > 0:
        taxes_text = (
            f"After property taxes of {format_currency(actual.property_tax)}, "
            f"net income is {format_currency(actual.net_income - actual.property_tax)} "
            f"({format_percentage(investment.roi_post_tax)} ROI)."
        )
    else:
        taxes_text = "No property taxes have been recorded for this period."

    if property.closing_costs > 0:
        sale_text = (
            f", expected closing costs of {format_currency(property.closing_costs)} would yield a "
            f"{format_percentage(investment.roi_if_sold_today)} return after property taxes "
            f"and appreciation for the year."
        )
    else:
        sale_text = (
            f" and would yield a {format_percentage(investment.roi_if_sold_today)} return "
            f"after property taxes and appreciation."
        )

    direction = "down" if home.appreciation < 0 else "up"
    home_text = (
        f"The home was purchased for {format_currency(property.home_cost)} "
        f"plus {format_currency(property.home_repair_cost)} in repairs "
        f"and {format_currency(property.closing_costs)} in closing costs "
        f"(total {format_currency(home.cost_basis)}). "
        f"It is now valued at {format_currency(home.current_value)}, "
        f"{direction} {format_currency(abs(home.appreciation))} "
        f"({format_percentage(abs(home.appreciation_percentage))}) "
        f"over {home.months_owned} months. "
        f"If sold today for {format_currency(home.current_value)}{sale_text}"
    )

    return AssetPerformanceNarrative(
        status=status,
        investment_performance_text=investment_text,
        operating_income_text=operating_text,
        property_taxes_text=taxes_text,
        home_value_text=home_text,
    )
