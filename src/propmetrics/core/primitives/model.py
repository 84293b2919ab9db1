# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models for every engine input and output. A metrics call builds
    fresh instances and never mutates them; derived figures are new models.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable models; results are rebuilt, never patched
        extra="forbid",  # Catches typos and missing field definitions immediately
    )


class RecordModel(Model):
    """Base for records read from the persistence layer.

    Storage rows carry columns the engine does not use (ids, timestamps,
    stale derived totals), so unknown keys are dropped instead of rejected.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
