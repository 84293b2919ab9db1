# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.primitives import format_month_year

CURRENCY_FORMAT = "${:,.0f}"
PERCENTAGE_FORMAT = "{:.{decimals}f}%"


def format_currency(value: float) -> str:
    """Whole-dollar currency, half away from zero: ``-1234.5 -> "-$1,235"``."""
    rounded = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return CURRENCY_FORMAT.format(0)
    if rounded < 0:
        return "-" + CURRENCY_FORMAT.format(-rounded)
    return CURRENCY_FORMAT.format(rounded)


def format_percentage(value: float, decimals: int = 2) -> str:
    """Percentage points with a fixed number of decimals: ``4.3435 -> "4.34%"``."""
    return PERCENTAGE_FORMAT.format(value, decimals=decimals)


__all__ = ["format_currency", "format_month_year", "format_percentage"]
