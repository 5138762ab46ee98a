# salesdesk/api/v1/schemas/print_config.py
"""Schemas for print configuration endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PrintConfigUpdate(BaseModel):
    """Toggles to change; keys not sent keep their current value."""

    options: dict[str, bool] = Field(default_factory=dict)
