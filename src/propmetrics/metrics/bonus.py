# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Last-month rent bonus.

When a tenant pays the final month's rent at lease signing there is no
monthly row for that cash, so the reference workbook adds one month of rent to
the period's rent income and net income. The bonus is added once per
calculation and never per month.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.records import PropertyRecord
from .totals import YTDTotals

logger = logging.getLogger(__name__)


def resolve_bonus_year(property: PropertyRecord, metrics_year: int) -> Optional[int]:
    """
    Year whose totals receive the last-month rent bonus.

    Returns None when no rent was collected upfront. Otherwise the lease start
    year anchors the bonus when the period is in or after it, then the lease
    end year under the same condition (only when there is no lease start),
    and finally the period's own year. Periods before the lease still get the
    bonus through that final fallback.
    """
    if not property.last_month_rent_collected:
        return None

    if property.lease_start is not None and metrics_year >= property.lease_start.year:
        return property.lease_start.year

    if (
        property.lease_start is None
        and property.lease_end is not None
        and metrics_year >= property.lease_end.year
    ):
        return property.lease_end.year

    return metrics_year


def last_month_rent_bonus_amount(property: PropertyRecord) -> float:
    """Target monthly rent if positive, else the deposit if positive, else 0."""
    if property.target_monthly_rent > 0:
        return property.target_monthly_rent
    # Older records keep the prepaid last month in the deposit column.
    if property.deposit > 0:
        return property.deposit
    return 0.0


def apply_last_month_rent_bonus(
    totals: YTDTotals, property: PropertyRecord, metrics_year: int
) -> YTDTotals:
    """
    Return ``totals`` with the bonus added to rent and net income, if it applies.

    Pure: the input totals are not modified, so repeated calls with the same
    inputs give the same single bonus.
    """
    anchor_year = resolve_bonus_year(property, metrics_year)
    if anchor_year is None:
        return totals

    amount = last_month_rent_bonus_amount(property)
    if amount <= 0:
        logger.debug("Last-month rent collected but no rent or deposit amount to add")
        return totals

    logger.debug(f"Adding last-month rent bonus {amount:,.2f} (anchored to {anchor_year})")
    return totals.with_rent_bonus(amount)
