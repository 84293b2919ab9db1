# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Propmetrics - Canonical Property Investment Metrics

One calculation library for every view of a rental portfolio: the admin
dashboard, the owner dashboard and the per-property financial detail all
call the same engine, so their numbers cannot disagree.

Key Entry Points:
- propmetrics.metrics.calculate_canonical_metrics() - metrics for one property
- propmetrics.metrics.calculate_period_metrics() - YTD / lease term / all time
- propmetrics.metrics.calculate_projection() - planned and expected figures
- propmetrics.reporting.* - owner dashboard, portfolio tables, formatting

Example Usage:
    ```python
    from datetime import date
    from propmetrics.metrics import MetricsOptions, calculate_canonical_metrics

    metrics = calculate_canonical_metrics(
        property_row,       # mapping or PropertyRecord
        monthly_rows,       # mappings or MonthlyPerformanceRow
        MetricsOptions(as_of=date(2025, 12, 31), estimated_annual_property_tax=5000),
    )
    print(f"Post-tax ROI: {metrics.roi_post_tax:.2f}% ({metrics.status.value})")
    ```
"""

import importlib
import logging

# Libraries leave handler configuration to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "core",
    "metrics",
    "reporting",
]


_LAZY_MODULES = {
    "core": "propmetrics.core",
    "metrics": "propmetrics.metrics",
    "reporting": "propmetrics.reporting",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'propmetrics' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
