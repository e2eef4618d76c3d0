"""
callshape — Meta

Value-shape snapshots consumed by rule training.

Public interface:
  build_meta        — snapshot a live value
  serialize_meta    — meta → stored dict
  deserialize_meta  — stored raw data → meta
"""

from callshape.meta.builder import build_meta, deserialize_meta, serialize_meta
from callshape.meta.types import (
    META_TYPES,
    ArrayMeta,
    BaseMeta,
    BoolMeta,
    FloatMeta,
    IntMeta,
    Meta,
    MetaType,
    NullMeta,
    ObjectMeta,
    StringMeta,
)

__all__ = [
    "ArrayMeta",
    "BaseMeta",
    "BoolMeta",
    "FloatMeta",
    "IntMeta",
    "META_TYPES",
    "Meta",
    "MetaType",
    "NullMeta",
    "ObjectMeta",
    "StringMeta",
    "build_meta",
    "deserialize_meta",
    "serialize_meta",
]
