"""
callshape — Primitives

Base models shared across the package.
"""

from callshape.primitives.common import (
    CallshapeBaseModel,
    Identified,
    Timestamped,
    ValidationStatus,
    new_id,
    utc_now,
)

__all__ = [
    "CallshapeBaseModel",
    "Identified",
    "Timestamped",
    "ValidationStatus",
    "new_id",
    "utc_now",
]
