# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import pytest

from propmetrics.reporting import format_currency, format_month_year, format_percentage


@pytest.mark.parametrize(
    "value,expected",
    [
        (55775, "$55,775"),
        (1234.5, "$1,235"),
        (2.5, "$3"),
        (-1234.5, "-$1,235"),
        (0, "$0"),
        (-0.4, "$0"),
        (928000.0, "$928,000"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_percentage():
    assert format_percentage(4.3435) == "4.34%"
    assert format_percentage(5.0, 0) == "5%"
    assert format_percentage(-1.005, 1) == "-1.0%"


def test_format_month_year():
    assert format_month_year((2025, 7)) == "Jul 2025"
