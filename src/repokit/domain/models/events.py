"""Lifecycle event passed to repository observers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .enums import LifecyclePhase


class LifecycleEvent(BaseModel):
    """Built once per notification and discarded afterwards; never persisted."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phase: LifecyclePhase
    entity: Any
