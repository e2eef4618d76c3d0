"""
callshape — Meta Builder

Builds metas from live values and moves them to and from their stored
dict form. The stored form is ``{"type": <meta type>, ...fields}``.

``deserialize_meta`` accepts every raw shape a control can carry:
  None                         → NullMeta (the "no value" representation)
  an already-built meta        → returned as is
  a mapping with a known type  → validated serialised meta
  anything else                → treated as a live value and snapshotted
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from callshape.errors import MetaDeserializationError
from callshape.meta.types import (
    META_TYPES,
    ArrayMeta,
    BaseMeta,
    BoolMeta,
    FloatMeta,
    IntMeta,
    Meta,
    NullMeta,
    ObjectMeta,
    StringMeta,
)
from callshape.primitives.keys import normalize_mapping

logger = structlog.get_logger()

_META_ADAPTER: TypeAdapter[Meta] = TypeAdapter(Meta)


def build_meta(value: Any) -> Meta:
    """Snapshot the shape of a live value."""
    if value is None:
        return NullMeta()
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BoolMeta(value=value)
    if isinstance(value, int):
        return IntMeta(value=value)
    if isinstance(value, float):
        return FloatMeta(value=value)
    if isinstance(value, str):
        return StringMeta(length=len(value))
    if isinstance(value, (list, tuple)):
        numeric = [
            v for v in value
            if isinstance(v, (int, float)) and not isinstance(v, bool)
        ]
        numbers = [v for v in numeric if not (isinstance(v, float) and math.isnan(v))]
        return ArrayMeta(
            length=len(value),
            min=min(numbers) if numbers else None,
            max=max(numbers) if numbers else None,
            nan=len(numbers) < len(numeric),
        )
    return ObjectMeta(class_name=type(value).__qualname__)


def serialize_meta(meta: BaseMeta) -> dict[str, Any]:
    """Dump a meta to its plain stored form."""
    return meta.model_dump()


def deserialize_meta(raw: Any) -> Meta:
    """Rebuild a meta from whatever a control stored for one value."""
    if raw is None:
        return NullMeta()
    if isinstance(raw, BaseMeta):
        return raw  # type: ignore[return-value]
    if isinstance(raw, Mapping):
        fields = normalize_mapping(raw)
        meta_type = fields.get("type")
        if isinstance(meta_type, str) and meta_type in META_TYPES:
            try:
                return _META_ADAPTER.validate_python(fields)
            except ValidationError as exc:
                logger.warning("meta_deserialization_failed", meta_type=meta_type)
                raise MetaDeserializationError(
                    f"Malformed {meta_type!r} meta: {fields!r}"
                ) from exc
    return build_meta(raw)
