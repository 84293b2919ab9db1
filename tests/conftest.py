# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for propmetrics testing.

Provides the reference workbook data set (a single-family rental tracked for
calendar 2025) that the canonical engine must reproduce cell for cell.
"""

from __future__ import annotations

from datetime import date
from typing import List

import pytest

from propmetrics.core.records import MonthlyPerformanceRow, PropertyRecord

from tests.factories import make_property, make_row

# (month, rent, maintenance, pool, garden, hoa, property_tax, market estimate)
WORKBOOK_2025 = [
    (1, 0, 0, 0, 0, 205, 0, None),
    (2, 0, 0, 0, 0, 205, 0, None),
    (3, 0, 0, 0, 0, 1005, 0, None),
    (4, 9775, 370, 70, 150, 205, 0, 815000),
    (5, 5750, 298, 70, 150, 205, 0, None),
    (6, 5750, 0, 70, 150, 1005, 0, None),
    (7, 5750, 596, 70, 150, 205, 0, None),
    (8, 5750, 0, 70, 150, 205, 0, None),
    (9, 5750, 77, 70, 150, 1005, 0, None),
    (10, 5750, 117, 70, 150, 205, 0, None),
    (11, 5750, 225, 70, 150, 205, 10819, None),
    (12, 5750, 0, 0, 0, 0, 0, 928000),
]


@pytest.fixture
def workbook_as_of() -> date:
    return date(2025, 12, 31)


@pytest.fixture
def workbook_property() -> PropertyRecord:
    """Acquisition data of the reference workbook; stored total_cost omits closing costs."""
    return make_property(
        id="buena-ventura",
        home_cost=775000,
        home_repair_cost=30800,
        closing_costs=0,
        total_cost=805800,
        current_market_estimate=928000,
        purchase_date=date(2024, 12, 19),
    )


@pytest.fixture
def workbook_rows() -> List[MonthlyPerformanceRow]:
    return [
        make_row(
            2025,
            month,
            rent_income=rent,
            maintenance=maintenance,
            pool=pool,
            garden=garden,
            hoa_payments=hoa,
            property_tax=tax,
            property_market_estimate=estimate,
        )
        for month, rent, maintenance, pool, garden, hoa, tax, estimate in WORKBOOK_2025
    ]
