# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Tuple

from pydantic import Field
from typing_extensions import Annotated

MonthNumber = Annotated[int, Field(ge=1, le=12)]
FloatBetween0And1 = Annotated[float, Field(ge=0, le=1)]

# (year, month) pair; month is 1-based
MonthKey = Tuple[int, int]
