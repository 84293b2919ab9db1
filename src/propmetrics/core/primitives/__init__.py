# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Propmetrics Core Primitives

Building blocks shared by every metrics calculation: the immutable model base,
month/date-window arithmetic, enums, constrained types, settings, and input
coercion helpers.
"""

from .enums import (
    MarketValueSourceEnum,
    PerformanceStatusEnum,
    PeriodTypeEnum,
    TargetTypeEnum,
)
from .model import Model, RecordModel
from .settings import MetricsSettings
from .timeline import (
    DateWindow,
    days_in_month,
    first_month_proration,
    format_month_year,
    lease_term_months,
    month_key,
    months_elapsed_in_year,
    to_month_period,
)
from .types import FloatBetween0And1, MonthKey, MonthNumber
from .validation import (
    coerce_nullable_flag,
    coerce_nullable_number,
    parse_date_only,
)

__all__ = [
    # Core models
    "Model",
    "RecordModel",
    "DateWindow",
    # Settings
    "MetricsSettings",
    # Enums
    "MarketValueSourceEnum",
    "PerformanceStatusEnum",
    "PeriodTypeEnum",
    "TargetTypeEnum",
    # Types
    "FloatBetween0And1",
    "MonthKey",
    "MonthNumber",
    # Month arithmetic
    "days_in_month",
    "first_month_proration",
    "format_month_year",
    "lease_term_months",
    "month_key",
    "months_elapsed_in_year",
    "to_month_period",
    # Validation
    "coerce_nullable_flag",
    "coerce_nullable_number",
    "parse_date_only",
]
