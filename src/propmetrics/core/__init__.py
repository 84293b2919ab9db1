# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Propmetrics Core

Primitives and the persistence-layer input records.
"""

from .records import AnnualTarget, MonthlyPerformanceRow, PropertyRecord

__all__ = [
    "AnnualTarget",
    "MonthlyPerformanceRow",
    "PropertyRecord",
]
