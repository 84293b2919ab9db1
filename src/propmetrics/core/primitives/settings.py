# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import Field, model_validator

from .model import Model
from .types import FloatBetween0And1


class MetricsSettings(Model):
    """
    Tunable thresholds for status classification and projections.

    Defaults reproduce the reference workbook: green at >= 5% post-tax ROI with
    maintenance under 5% of rent, yellow at >= 3% ROI with maintenance under 7%,
    and planned maintenance budgeted at 5% of planned rent.

    Usage Examples:
        # Workbook defaults
        settings = MetricsSettings()

        # Stricter portfolio policy
        settings = MetricsSettings(green_min_roi=6.0, yellow_min_roi=4.0)
    """

    green_min_roi: float = Field(
        default=5.0, description="Minimum post-tax ROI (percent) for green status."
    )
    green_max_maintenance_pct: float = Field(
        default=5.0,
        description="Maintenance as percent of rent must stay below this for green.",
    )
    yellow_min_roi: float = Field(
        default=3.0, description="Minimum post-tax ROI (percent) for yellow status."
    )
    yellow_max_maintenance_pct: float = Field(
        default=7.0,
        description="Maintenance as percent of rent must stay below this for yellow.",
    )
    planned_maintenance_rate: FloatBetween0And1 = Field(
        default=0.05,
        description="Planned maintenance as a fraction of planned rent.",
    )

    @model_validator(mode="after")
    def check_threshold_ordering(self) -> "MetricsSettings":
        """Green must be at least as demanding as yellow."""
        if self.green_min_roi < self.yellow_min_roi:
            raise ValueError("green_min_roi must be >= yellow_min_roi")
        if self.green_max_maintenance_pct > self.yellow_max_maintenance_pct:
            raise ValueError(
                "green_max_maintenance_pct must be <= yellow_max_maintenance_pct"
            )
        return self
