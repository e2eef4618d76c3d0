"""
callshape — Identifier Normalisation

Stored records reach us with keys in several forms: plain strings, strings
carrying a leading ":" from symbol-keyed stores, enum members, or bytes.
Everything is folded to a bare ``str`` before lookup.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any


def normalize_key(key: Any) -> str:
    """Fold a mapping key into its canonical string form."""
    if isinstance(key, enum.Enum):
        key = key.value
    if isinstance(key, bytes):
        key = key.decode("utf-8")
    text = str(key).strip()
    if text.startswith(":"):
        text = text[1:]
    return text


def normalize_mapping(raw: Mapping[Any, Any]) -> dict[str, Any]:
    """Shallow copy of ``raw`` with every key normalised. Later keys win."""
    return {normalize_key(k): v for k, v in raw.items()}


def identifier_name(value: Any) -> str:
    """
    Resolve a class or method identifier to a string.

    Types and callables are named by their ``__name__`` so that callers can
    pass ``Foo`` or ``Foo.bar`` directly instead of spelling them out.
    """
    if isinstance(value, type):
        return value.__name__
    if callable(value) and hasattr(value, "__name__"):
        return str(value.__name__)
    return normalize_key(value)
