"""
callshape — Common Primitives

Shared base models and small utilities used by the meta and rules packages.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, Field
from ulid import ULID


def new_id() -> str:
    """Generate a new ULID string. Time-sortable, globally unique."""
    return str(ULID())


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


# ─── Enums ────────────────────────────────────────────────────────


class ValidationStatus(str, enum.Enum):
    PASS = "pass"
    FAIL = "fail"


# ─── Base Models ──────────────────────────────────────────────────


class CallshapeBaseModel(BaseModel):
    """Base model for all callshape primitives."""

    model_config = {"populate_by_name": True, "from_attributes": True}


class Timestamped(CallshapeBaseModel):
    """Mixin for models with creation timestamps."""

    created_at: datetime = Field(default_factory=utc_now)


class Identified(CallshapeBaseModel):
    """Mixin for models with ULID IDs."""

    id: str = Field(default_factory=new_id)
