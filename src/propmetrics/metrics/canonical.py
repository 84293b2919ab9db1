# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical Property Metrics - Single Source of Truth

Turns a property record and its monthly performance rows into the investment
metrics shown on the admin dashboard, the owner dashboard and the per-property
financial detail. Every view calls into this module rather than re-deriving
formulas, so the views cannot disagree.

Formulas reproduce the reference spreadsheet model:
- total_expenses = maintenance + pool + garden + HOA + management fee (no property tax)
- net_income = rent_income - total_expenses
- cost_basis = home cost + repair cost + closing costs
- roi_pre_tax = net_income / cost_basis x 100
- roi_post_tax = (net_income - tax) / cost_basis x 100
- maintenance_pct = maintenance / rent_income x 100

Pipeline: MonthlyAggregator -> RentBonusRule -> CostBasis / MarketValue ->
ROICalculator -> PerformanceClassifier. The engine is stateless; every output
field is a pure function of (property, rows, options).
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from ..core.primitives import (
    MarketValueSourceEnum,
    MetricsSettings,
    Model,
    MonthNumber,
    PerformanceStatusEnum,
    parse_date_only,
)
from ..core.records import MonthlyPerformanceRow, PropertyRecord
from .bonus import apply_last_month_rent_bonus
from .roi import ROICalculator
from .status import classify_performance
from .totals import YTDTotals, aggregate_period_totals
from .valuation import (
    calculate_months_owned,
    resolve_cost_basis,
    resolve_market_value_with_source,
)

logger = logging.getLogger(__name__)

PropertyInput = Union[PropertyRecord, Mapping[str, Any]]
RowsInput = Sequence[Union[MonthlyPerformanceRow, Mapping[str, Any]]]

_ROWS_ADAPTER = TypeAdapter(List[MonthlyPerformanceRow])


class MetricsOptions(Model):
    """
    Per-call options for the metrics engine.

    Attributes:
        as_of: Reference date; the only clock the engine reads. Defaults to
            today, resolved once when the options are built.
        year: Target year. Defaults to the first row's year, then as_of's year.
        months_filter: Month numbers to keep, e.g. (5, ..., 12) for a May-Dec
            lease term. Empty or None keeps every elapsed month.
        estimated_annual_property_tax: Annual tax estimate used in full when
            no actual tax is recorded in the period.
        estimated_ytd_property_tax: Period tax estimate; preferred over the
            annual estimate when supplied.
        settings: Status thresholds and planning rates.
    """

    as_of: date = Field(default_factory=date.today)
    year: Optional[int] = None
    months_filter: Optional[Tuple[MonthNumber, ...]] = None
    estimated_annual_property_tax: Optional[float] = None
    estimated_ytd_property_tax: Optional[float] = None
    settings: MetricsSettings = Field(default_factory=MetricsSettings)

    @field_validator("as_of", mode="before")
    @classmethod
    def normalize_as_of(cls, v: Any) -> date:
        parsed = parse_date_only(v)
        return parsed if parsed is not None else date.today()


class CanonicalMetrics(Model):
    """
    Complete metrics for one property and period.

    JSON-serializable via ``model_dump(mode="json")``; every float is finite.
    """

    ytd: YTDTotals
    metrics_year: int
    cost_basis: float
    current_market_value: float
    market_value_source: MarketValueSourceEnum
    appreciation_value: float
    appreciation_pct: float
    roi_pre_tax: float
    roi_post_tax: float
    roi_with_appreciation: float
    roi_if_sold_today: float
    tax_figure: float
    maintenance_pct: float
    months_owned: int
    status: PerformanceStatusEnum

    @model_validator(mode="after")
    def check_finite(self) -> "CanonicalMetrics":
        """Reject NaN or infinite values anywhere in the result."""
        values = {**self.ytd.model_dump(), **self.model_dump(exclude={"ytd"})}
        for name, value in values.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"Metric '{name}' is not finite: {value}")
        return self


def coerce_property(property: PropertyInput) -> PropertyRecord:
    if isinstance(property, PropertyRecord):
        return property
    return PropertyRecord.model_validate(property)


def coerce_rows(rows: RowsInput) -> List[MonthlyPerformanceRow]:
    """Validate rows; raises ValidationError for non-sequence or malformed rows."""
    return _ROWS_ADAPTER.validate_python(rows)


def coerce_options(
    options: Optional[Union[MetricsOptions, Mapping[str, Any]]],
) -> MetricsOptions:
    if options is None:
        return MetricsOptions()
    if isinstance(options, MetricsOptions):
        return options
    return MetricsOptions.model_validate(options)


def resolve_metrics_year(
    rows: Sequence[MonthlyPerformanceRow], options: MetricsOptions
) -> int:
    """Explicit year, else the first row's year, else the as-of year."""
    if options.year is not None:
        return options.year
    if rows:
        return rows[0].year
    return options.as_of.year


def assemble_metrics(
    property: PropertyRecord,
    rows: Sequence[MonthlyPerformanceRow],
    totals: YTDTotals,
    metrics_year: int,
    options: MetricsOptions,
) -> CanonicalMetrics:
    """
    Derive every metric from already-aggregated period totals.

    Shared by the single-year entry point and the multi-year period views so
    that the bonus, valuation and ROI rules exist in one place.
    """
    ytd = apply_last_month_rent_bonus(totals, property, metrics_year)

    cost_basis = resolve_cost_basis(property)
    current_market_value, source = resolve_market_value_with_source(
        rows, property, cost_basis
    )
    appreciation_value, appreciation_pct = ROICalculator.calculate_appreciation(
        current_market_value, cost_basis
    )

    tax_figure = ROICalculator.resolve_tax_figure(
        ytd.property_tax,
        options.estimated_ytd_property_tax,
        options.estimated_annual_property_tax,
    )
    roi = ROICalculator.calculate_roi(
        net_income=ytd.net_income,
        tax_figure=tax_figure,
        closing_costs=property.closing_costs,
        appreciation_value=appreciation_value,
        cost_basis=cost_basis,
    )
    maintenance_pct = ROICalculator.maintenance_pct(ytd.maintenance, ytd.rent_income)
    status = classify_performance(roi.roi_post_tax, maintenance_pct, options.settings)

    logger.debug(
        f"Metrics for {property.id or 'property'} ({metrics_year}): "
        f"cost basis {cost_basis:,.2f}, market value {current_market_value:,.2f} "
        f"({source.value}), post-tax ROI {roi.roi_post_tax:.2f}%, status {status.value}"
    )

    return CanonicalMetrics(
        ytd=ytd,
        metrics_year=metrics_year,
        cost_basis=cost_basis,
        current_market_value=current_market_value,
        market_value_source=source,
        appreciation_value=appreciation_value,
        appreciation_pct=appreciation_pct,
        tax_figure=tax_figure,
        maintenance_pct=maintenance_pct,
        months_owned=calculate_months_owned(property.purchase_date, options.as_of),
        status=status,
        **roi.model_dump(),
    )


def calculate_canonical_metrics(
    property: PropertyInput,
    rows: RowsInput,
    options: Optional[Union[MetricsOptions, Mapping[str, Any]]] = None,
) -> CanonicalMetrics:
    """
    Calculate the canonical metrics for one property.

    Args:
        property: Property record (model or mapping from storage)
        rows: Monthly performance rows, any order
        options: Reference date, target year, month filter and tax estimates

    Returns:
        CanonicalMetrics for the target year through the as-of month

    Raises:
        ValidationError: If the property, rows or options are structurally
            invalid. Missing or zero business values never raise.

    Example:
        ```python
        metrics = calculate_canonical_metrics(
            {"home_cost": 775000, "home_repair_cost": 30800},
            rows,
            MetricsOptions(as_of=date(2025, 12, 31)),
        )
        print(f"Post-tax ROI: {metrics.roi_post_tax:.2f}%")
        ```
    """
    property = coerce_property(property)
    rows = coerce_rows(rows)
    options = coerce_options(options)

    metrics_year = resolve_metrics_year(rows, options)
    totals = aggregate_period_totals(rows, metrics_year, options.as_of, options.months_filter)
    return assemble_metrics(property, rows, totals, metrics_year, options)


def get_performance_status(
    metrics: CanonicalMetrics, settings: Optional[MetricsSettings] = None
) -> PerformanceStatusEnum:
    """Classify a metrics result, optionally under different thresholds."""
    return classify_performance(metrics.roi_post_tax, metrics.maintenance_pct, settings)
