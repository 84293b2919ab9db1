# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Optional

from ..core.primitives import MetricsSettings, PerformanceStatusEnum


def classify_performance(
    roi_post_tax: float,
    maintenance_pct: float,
    settings: Optional[MetricsSettings] = None,
) -> PerformanceStatusEnum:
    """
    Bucket post-tax ROI and maintenance ratio into green / yellow / red.

    With default settings: green needs ROI >= 5 and maintenance < 5,
    yellow needs ROI >= 3 and maintenance < 7, anything else is red.
    """
    settings = settings or MetricsSettings()

    if (
        roi_post_tax >= settings.green_min_roi
        and maintenance_pct < settings.green_max_maintenance_pct
    ):
        return PerformanceStatusEnum.GREEN
    if (
        roi_post_tax >= settings.yellow_min_roi
        and maintenance_pct < settings.yellow_max_maintenance_pct
    ):
        return PerformanceStatusEnum.YELLOW
    return PerformanceStatusEnum.RED
