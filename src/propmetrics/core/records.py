# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Input records consumed from the persistence layer.

Each record is an immutable snapshot for one calculation call. Every numeric
column is nullable in storage and defaults to 0.0 here; every date column is
nullable and stays None. Derived columns that storage may carry (total cost,
per-month totals) are never trusted by the engine.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator

from .primitives.enums import TargetTypeEnum
from .primitives.model import RecordModel
from .primitives.types import MonthKey, MonthNumber
from .primitives.validation import (
    coerce_nullable_flag,
    coerce_nullable_number,
    parse_date_only,
)


class PropertyRecord(RecordModel):
    """
    Acquisition, lease and planning data for one property.

    Attributes:
        home_cost: Purchase price
        home_repair_cost: Repairs made at acquisition
        closing_costs: Closing costs paid at acquisition
        total_cost: Stored display total. It omits closing costs and is
            never used as cost basis.
        current_market_estimate: Latest stored market estimate
        target_monthly_rent: Planned monthly rent
        deposit: Deposit collected at lease signing
        last_month_rent_collected: Final month's rent was paid upfront
        planned_pool_cost / planned_garden_cost: Monthly budgets
        planned_hoa_cost: Annual HOA budget
    """

    id: Optional[str] = None
    address: Optional[str] = None

    home_cost: float = 0.0
    home_repair_cost: float = 0.0
    closing_costs: float = 0.0
    total_cost: float = 0.0
    current_market_estimate: float = 0.0
    target_monthly_rent: float = 0.0
    deposit: float = 0.0

    planned_pool_cost: float = 0.0
    planned_garden_cost: float = 0.0
    planned_hoa_cost: float = 0.0

    purchase_date: Optional[date] = None
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    last_month_rent_collected: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        return None if v is None else str(v)

    @field_validator(
        "home_cost",
        "home_repair_cost",
        "closing_costs",
        "total_cost",
        "current_market_estimate",
        "target_monthly_rent",
        "deposit",
        "planned_pool_cost",
        "planned_garden_cost",
        "planned_hoa_cost",
        mode="before",
    )
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return coerce_nullable_number(v)

    @field_validator("purchase_date", "lease_start", "lease_end", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Optional[date]:
        return parse_date_only(v)

    @field_validator("last_month_rent_collected", mode="before")
    @classmethod
    def default_missing_flag(cls, v: Any) -> Any:
        return coerce_nullable_flag(v)


class MonthlyPerformanceRow(RecordModel):
    """
    Actual income and expenses of one property for one calendar month.

    ``total_expenses`` and ``net_income`` are derived here per row; any stored
    values for them are ignored. Property tax is tracked but is never part of
    ``total_expenses``.
    """

    year: int
    month: MonthNumber
    rent_income: float = 0.0
    maintenance: float = 0.0
    pool: float = 0.0
    garden: float = 0.0
    hoa_payments: float = 0.0
    management_fee: float = Field(
        default=0.0,
        validation_alias=AliasChoices("management_fee", "pm_fee"),
        description="Property-management fee; stored as pm_fee.",
    )
    property_tax: float = 0.0
    property_market_estimate: Optional[float] = Field(
        default=None, description="Market value snapshot taken this month, if any."
    )

    @field_validator(
        "rent_income",
        "maintenance",
        "pool",
        "garden",
        "hoa_payments",
        "management_fee",
        "property_tax",
        mode="before",
    )
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return coerce_nullable_number(v)

    @property
    def key(self) -> MonthKey:
        return (self.year, self.month)

    @property
    def total_expenses(self) -> float:
        """Maintenance + pool + garden + HOA + management fee. Excludes property tax."""
        return (
            self.maintenance
            + self.pool
            + self.garden
            + self.hoa_payments
            + self.management_fee
        )

    @property
    def net_income(self) -> float:
        return self.rent_income - self.total_expenses

    @property
    def has_market_snapshot(self) -> bool:
        return (
            self.property_market_estimate is not None
            and self.property_market_estimate > 0
        )


class AnnualTarget(RecordModel):
    """
    Planned or expected year-end figures for one property and year.

    Used for projection and plan comparison only, never for actual ROI.
    """

    target_type: TargetTypeEnum
    year: Optional[int] = None
    rent_income: float = 0.0
    maintenance: float = 0.0
    pool: float = 0.0
    garden: float = 0.0
    hoa: float = 0.0
    property_tax: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    maintenance_percentage_target: float = 5.0

    @field_validator(
        "rent_income",
        "maintenance",
        "pool",
        "garden",
        "hoa",
        "property_tax",
        "total_expenses",
        "net_income",
        mode="before",
    )
    @classmethod
    def default_missing_amounts(cls, v: Any) -> Any:
        return coerce_nullable_number(v)

    @field_validator("maintenance_percentage_target", mode="before")
    @classmethod
    def default_maintenance_target(cls, v: Any) -> Any:
        return 5.0 if v is None else v

    @property
    def hoa_pool_garden(self) -> float:
        return self.hoa + self.pool + self.garden
