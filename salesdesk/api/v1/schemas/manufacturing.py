# salesdesk/api/v1/schemas/manufacturing.py
"""Request and response schemas for manufacturing job endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

Priority = Literal["low", "medium", "high", "urgent"]


class JobUpdate(BaseModel):
    job_number: str | None = Field(default=None, max_length=50)
    product_name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    department: str = Field(default="Production", max_length=50)
    priority: Priority = "medium"
    quantity: int = Field(default=1, gt=0)
    start_date: date | None = None
    expected_completion: date | None = None
    due_date: date | None = None
    notes: str | None = None
    materials: str | None = None
    instructions: str | None = None


class JobCreate(JobUpdate):
    """Create a job. Leave ``job_number`` empty to have one generated."""


class JobFromOrder(BaseModel):
    """Overrides for a job raised from an order; empty fields come from the order."""

    product_name: str | None = Field(default=None, max_length=200)
    description: str | None = None
    department: str | None = Field(default=None, max_length=50)
    priority: Priority | None = None
    quantity: int | None = Field(default=None, gt=0)
    start_date: date | None = None
    expected_completion: date | None = None
    due_date: date | None = None
    notes: str | None = None
    materials: str | None = None
    instructions: str | None = None


class JobDetail(BaseModel):
    id: str
    job_number: str
    order_id: str | None
    product_name: str
    description: str | None
    department: str
    priority: str
    quantity: int
    start_date: date | None
    expected_completion: date | None
    due_date: date | None
    status: str
    badge: dict
    allowed_transitions: list[str]
    notes: str | None
    materials: str | None
    instructions: str | None
    created_by: str | None
    created_at: datetime | None
    updated_at: datetime | None
