"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a hosted session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    arena_width: int = Field(default=20, ge=4, le=200)
    arena_height: int = Field(default=20, ge=4, le=200)
    bounds: Literal["exclusive", "inclusive"] = "exclusive"
    tick_interval_ms: int = Field(default=125, ge=20, le=2000)
    food_interval_ms: int = Field(default=1000, ge=50, le=60000)
    max_food: int = Field(default=5, ge=1)
    growth_per_food: int = Field(default=1, ge=0, le=10)
    frame_rate: int = Field(default=60, ge=1, le=240)
    seed: int | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    frame_rate: int
    tick_interval_ms: int
    score: int
