# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class PeriodTypeEnum(str, Enum):
    """
    Reporting period modes shared by every metrics view.

    - YTD: January through the as-of month of the as-of year
    - LEASE_TERM: lease start month through lease end (or as-of) month, across years
    - ALL_TIME: purchase (or lease start) month through the last month with rent
    """

    YTD = "ytd"
    LEASE_TERM = "lease_term"
    ALL_TIME = "all_time"


class PerformanceStatusEnum(str, Enum):
    """Three-level traffic-light status of a property's metrics."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    PerformanceStatusEnum.GREEN: "Good",
    PerformanceStatusEnum.YELLOW: "Fair",
    PerformanceStatusEnum.RED: "Needs Attention",
}


class TargetTypeEnum(str, Enum):
    """Kind of annual target stored per property and year."""

    PLAN = "plan"  # Budget set at the start of the year
    YE_TARGET = "ye_target"  # Expected year-end outcome


class MarketValueSourceEnum(str, Enum):
    """Which link of the market-value fallback chain produced the value."""

    MONTHLY_SNAPSHOT = "monthly_snapshot"
    PROPERTY_ESTIMATE = "property_estimate"
    COST_BASIS = "cost_basis"
