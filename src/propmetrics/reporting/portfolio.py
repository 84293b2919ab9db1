# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Portfolio View - Admin Dashboard

Runs the canonical engine once per property and tabulates the results with
pandas. Calls are independent; nothing is shared between properties other
than the options.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import pandas as pd
from pydantic import Field

from ..core.primitives import Model
from ..metrics.canonical import (
    CanonicalMetrics,
    MetricsOptions,
    PropertyInput,
    RowsInput,
    calculate_canonical_metrics,
    coerce_options,
)
from ..metrics.roi import ROICalculator

logger = logging.getLogger(__name__)

PORTFOLIO_COLUMNS = [
    "rent_income",
    "total_expenses",
    "net_income",
    "property_tax",
    "cost_basis",
    "current_market_value",
    "appreciation_value",
    "appreciation_pct",
    "roi_pre_tax",
    "roi_post_tax",
    "roi_with_appreciation",
    "roi_if_sold_today",
    "maintenance_pct",
    "months_owned",
    "status",
]


class PortfolioSummary(Model):
    """
    Portfolio totals.

    Portfolio ROI figures are cost-basis weighted: summed income over summed
    cost basis, so larger properties weigh more.
    """

    property_count: int = 0
    rent_income: float = 0.0
    net_income: float = 0.0
    cost_basis: float = 0.0
    current_market_value: float = 0.0
    appreciation_value: float = 0.0
    roi_pre_tax: float = 0.0
    appreciation_pct: float = 0.0
    status_counts: Dict[str, int] = Field(default_factory=dict)


def calculate_portfolio_metrics(
    portfolio: Mapping[str, Tuple[PropertyInput, RowsInput]],
    options: Optional[Union[MetricsOptions, Mapping[str, Any]]] = None,
) -> Dict[str, CanonicalMetrics]:
    """
    Canonical metrics for every property of a portfolio.

    Args:
        portfolio: Property id -> (property record, monthly rows)
        options: Shared options; ``as_of`` is resolved once for all properties

    Returns:
        Property id -> CanonicalMetrics, in input order
    """
    options = coerce_options(options)
    results = {
        property_id: calculate_canonical_metrics(property, rows, options)
        for property_id, (property, rows) in portfolio.items()
    }
    logger.debug(f"Calculated metrics for {len(results)} properties as of {options.as_of}")
    return results


def portfolio_frame(metrics_by_property: Mapping[str, CanonicalMetrics]) -> pd.DataFrame:
    """One row per property, indexed by property id."""
    records = []
    for property_id, metrics in metrics_by_property.items():
        record = {
            "property_id": property_id,
            "rent_income": metrics.ytd.rent_income,
            "total_expenses": metrics.ytd.total_expenses,
            "net_income": metrics.ytd.net_income,
            "property_tax": metrics.ytd.property_tax,
        }
        record.update(
            metrics.model_dump(
                include=set(PORTFOLIO_COLUMNS) - set(record), mode="json"
            )
        )
        records.append(record)

    frame = pd.DataFrame.from_records(records, columns=["property_id", *PORTFOLIO_COLUMNS])
    return frame.set_index("property_id")


def summarize_portfolio(frame: pd.DataFrame) -> PortfolioSummary:
    """Totals and cost-basis weighted ROI of a ``portfolio_frame``."""
    if frame.empty:
        return PortfolioSummary()

    cost_basis = float(frame["cost_basis"].sum())
    net_income = float(frame["net_income"].sum())
    appreciation_value = float(frame["appreciation_value"].sum())
    return PortfolioSummary(
        property_count=len(frame),
        rent_income=float(frame["rent_income"].sum()),
        net_income=net_income,
        cost_basis=cost_basis,
        current_market_value=float(frame["current_market_value"].sum()),
        appreciation_value=appreciation_value,
        roi_pre_tax=ROICalculator.percent_of(net_income, cost_basis),
        appreciation_pct=ROICalculator.percent_of(appreciation_value, cost_basis),
        status_counts={str(k): int(v) for k, v in frame["status"].value_counts().items()},
    )
