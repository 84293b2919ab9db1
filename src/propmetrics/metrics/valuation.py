# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Cost basis, current market value and holding period.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from ..core.primitives import MarketValueSourceEnum
from ..core.records import MonthlyPerformanceRow, PropertyRecord

logger = logging.getLogger(__name__)


def resolve_cost_basis(property: PropertyRecord) -> float:
    """
    Acquisition cost basis: home cost + repair cost + closing costs.

    The stored ``total_cost`` column leaves out closing costs and is not read.
    """
    return property.home_cost + property.home_repair_cost + property.closing_costs


def latest_market_snapshot(
    rows: Iterable[MonthlyPerformanceRow],
) -> Optional[MonthlyPerformanceRow]:
    """Most recent row (by year, then month) carrying a positive market value."""
    candidates = [row for row in rows if row.has_market_snapshot]
    if not candidates:
        return None
    return max(candidates, key=lambda row: row.key)


def resolve_market_value_with_source(
    rows: Sequence[MonthlyPerformanceRow],
    property: PropertyRecord,
    cost_basis: float,
) -> Tuple[float, MarketValueSourceEnum]:
    """
    Current market value via the fallback chain, with the link that produced it.

    1. Latest positive monthly snapshot across all rows
    2. The property's stored estimate, if positive
    3. The cost basis, so appreciation is exactly zero without value data
    """
    snapshot = latest_market_snapshot(rows)
    if snapshot is not None:
        return snapshot.property_market_estimate, MarketValueSourceEnum.MONTHLY_SNAPSHOT
    if property.current_market_estimate > 0:
        return property.current_market_estimate, MarketValueSourceEnum.PROPERTY_ESTIMATE
    return cost_basis, MarketValueSourceEnum.COST_BASIS


def resolve_market_value(
    rows: Sequence[MonthlyPerformanceRow],
    property: PropertyRecord,
    cost_basis: float,
) -> float:
    value, source = resolve_market_value_with_source(rows, property, cost_basis)
    logger.debug(f"Current market value {value:,.2f} from {source.value}")
    return value


def calculate_months_owned(purchase_date: Optional[date], as_of: date) -> int:
    """
    Whole calendar months between purchase and ``as_of``, never below 1.

    Returns 1 without a purchase date so the result is always safe to divide by.
    """
    if purchase_date is None:
        return 1
    months = (as_of.year - purchase_date.year) * 12 + (as_of.month - purchase_date.month)
    return max(1, months)
