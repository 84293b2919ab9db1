# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection - Planned and Expected Figures

Forward-looking rent, expenses and ROI built from the property's planning
inputs and annual targets only; no monthly actuals are read. Planned totals
use the same shape and the same expense rule as actual period totals
(property tax tracked, never inside ``total_expenses``), so plan-versus-actual
deltas compare like with like.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from pydantic import Field

from ..core.primitives import MetricsSettings, Model, first_month_proration
from ..core.records import AnnualTarget, PropertyRecord
from .roi import ROICalculator
from .totals import TOTALS_COLUMNS, YTDTotals


class ProjectionInputs(Model):
    """
    Planning inputs for one property and performance year.

    Attributes:
        target_monthly_rent: Planned monthly rent
        lease_start: Lease start; a mid-month start in ``year`` prorates the first month
        deposit: Deposit collected; a positive deposit plans one extra month of rent
        last_month_rent_collected: Also plans one extra month of rent
        planned_pool_monthly / planned_garden_monthly: Monthly budgets
        planned_hoa_annual / planned_property_tax_annual: Annual budgets
    """

    year: int
    target_monthly_rent: float = 0.0
    lease_start: Optional[date] = None
    deposit: float = 0.0
    last_month_rent_collected: bool = False
    planned_pool_monthly: float = 0.0
    planned_garden_monthly: float = 0.0
    planned_hoa_annual: float = 0.0
    planned_property_tax_annual: float = 0.0

    @classmethod
    def from_property(
        cls,
        property: PropertyRecord,
        year: int,
        planned_property_tax_annual: float = 0.0,
    ) -> "ProjectionInputs":
        return cls(
            year=year,
            target_monthly_rent=property.target_monthly_rent,
            lease_start=property.lease_start,
            deposit=property.deposit,
            last_month_rent_collected=property.last_month_rent_collected,
            planned_pool_monthly=property.planned_pool_cost,
            planned_garden_monthly=property.planned_garden_cost,
            planned_hoa_annual=property.planned_hoa_cost,
            planned_property_tax_annual=planned_property_tax_annual,
        )

    @property
    def plans_bonus_month(self) -> bool:
        return self.deposit > 0 or self.last_month_rent_collected

    @property
    def proration(self) -> float:
        return first_month_proration(self.lease_start, self.year)


class ExpectedROI(Model):
    """Expected ROI from a year-end target, in percent of cost basis."""

    roi_pre_tax: float = 0.0
    roi_post_tax: float = 0.0


class Projection(Model):
    """Planned rent for the full year, planned period totals and expected ROI."""

    year: int
    months_elapsed: int
    planned_annual_rent: float
    planned: YTDTotals
    expected: ExpectedROI = Field(default_factory=ExpectedROI)


def planned_annual_rent(inputs: ProjectionInputs) -> float:
    """
    Planned rent for the whole year.

    Twelve months of target rent; when the lease starts mid-month in the year,
    eleven full months plus the prorated first month. One extra month is
    planned when a deposit or last-month rent was collected.
    """
    rent = inputs.target_monthly_rent
    if rent == 0:
        return 0.0

    proration = inputs.proration
    total = rent * 12
    if proration < 1:
        total = rent * 11 + rent * proration
    if inputs.plans_bonus_month:
        total += rent
    return total


def planned_period_totals(
    inputs: ProjectionInputs,
    months_elapsed: float,
    settings: Optional[MetricsSettings] = None,
) -> YTDTotals:
    """
    Planned totals for the first ``months_elapsed`` months of the year.

    Rent: prorated first month plus full months, plus the planned bonus month.
    Maintenance is the planned rate of rent. Pool and garden accrue monthly;
    HOA and property tax accrue one twelfth of the annual budget per month.
    Elapsed months are floored and clamped to 0..12.
    """
    settings = settings or MetricsSettings()
    months = max(0, min(12, math.floor(months_elapsed)))
    if months == 0:
        return YTDTotals.zero()

    rent = inputs.target_monthly_rent
    rent_income = rent * inputs.proration + rent * max(0, months - 1)
    if inputs.plans_bonus_month:
        rent_income += rent

    maintenance = rent_income * settings.planned_maintenance_rate
    pool = inputs.planned_pool_monthly * months
    garden = inputs.planned_garden_monthly * months
    hoa_payments = (inputs.planned_hoa_annual / 12) * months
    property_tax = (inputs.planned_property_tax_annual / 12) * months
    total_expenses = maintenance + pool + garden + hoa_payments

    return YTDTotals(
        rent_income=rent_income,
        maintenance=maintenance,
        pool=pool,
        garden=garden,
        hoa_payments=hoa_payments,
        property_tax=property_tax,
        total_expenses=total_expenses,
        net_income=rent_income - total_expenses,
    )


def expected_roi(target: Optional[AnnualTarget], cost_basis: float) -> ExpectedROI:
    """
    Expected ROI from a year-end target.

    Post-tax subtracts the target's property tax, matching the canonical
    post-tax formula.
    """
    if target is None:
        return ExpectedROI()
    return ExpectedROI(
        roi_pre_tax=ROICalculator.percent_of(target.net_income, cost_basis),
        roi_post_tax=ROICalculator.percent_of(
            target.net_income - target.property_tax, cost_basis
        ),
    )


def delta_to_actual(actual: YTDTotals, planned: YTDTotals) -> YTDTotals:
    """Field-wise ``actual - planned``."""
    return YTDTotals(
        **{
            column: getattr(actual, column) - getattr(planned, column)
            for column in TOTALS_COLUMNS
        }
    )


def calculate_projection(
    property: PropertyRecord,
    year: int,
    months_elapsed: float,
    cost_basis: float,
    ye_target: Optional[AnnualTarget] = None,
    planned_property_tax_annual: Optional[float] = None,
    settings: Optional[MetricsSettings] = None,
) -> Projection:
    """
    Build the projection shown beside actuals on the financial detail view.

    The annual property-tax budget defaults to the year-end target's tax.
    """
    if planned_property_tax_annual is None:
        planned_property_tax_annual = ye_target.property_tax if ye_target else 0.0

    inputs = ProjectionInputs.from_property(property, year, planned_property_tax_annual)
    planned = planned_period_totals(inputs, months_elapsed, settings)
    return Projection(
        year=year,
        months_elapsed=max(0, min(12, math.floor(months_elapsed))),
        planned_annual_rent=planned_annual_rent(inputs),
        planned=planned,
        expected=expected_roi(ye_target, cost_basis),
    )
