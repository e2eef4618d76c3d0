"""
callshape — Rule Types

The closed set of rule type tags, the optional checks each rule can enforce,
and the read-only configuration map that decides which checks are active per
tag. Also home to ``value_to_rule_type``, the runtime classifier shared by
RuleSet and RuleSetAggregator.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from callshape.meta.types import MetaType


class RuleType(str, enum.Enum):
    """Rule type tag for a value. UNSUPPORTED is the explicit "no mapping" variant."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    FLOAT = "float"
    INTEGER = "integer"
    NULL = "null"
    STRING = "string"
    UNSUPPORTED = "unsupported"


class RuleCheck(str, enum.Enum):
    """Optional narrowing checks. With none enabled a rule is a pure type check."""

    RANGE = "range"      # numeric value (or numeric array items) within learned min/max
    LENGTH = "length"    # string or array length within learned min/max
    VALUES = "values"    # boolean value was observed during training


TRAINABLE_RULE_TYPES: tuple[RuleType, ...] = tuple(
    t for t in RuleType if t is not RuleType.UNSUPPORTED
)

META_TO_RULE_TYPE: Mapping[str, RuleType] = MappingProxyType({
    MetaType.ARRAY.value: RuleType.ARRAY,
    MetaType.BOOL.value: RuleType.BOOLEAN,
    MetaType.FLOAT.value: RuleType.FLOAT,
    MetaType.INT.value: RuleType.INTEGER,
    MetaType.NULL.value: RuleType.NULL,
    MetaType.STRING.value: RuleType.STRING,
    MetaType.OBJECT.value: RuleType.UNSUPPORTED,
})

# RuleType → enabled checks. Shared by every RuleSet an aggregator creates.
RuleConfigMap = Mapping[RuleType, frozenset[RuleCheck]]


def build_config_map(
    checks: Mapping[RuleType | str, Iterable[RuleCheck | str]] | None = None,
) -> RuleConfigMap:
    """
    Build a read-only configuration map. Tags left out get no checks.
    Raises ValueError on an unknown tag or check name.
    """
    resolved: dict[RuleType, frozenset[RuleCheck]] = {
        t: frozenset() for t in TRAINABLE_RULE_TYPES
    }
    for tag, enabled in (checks or {}).items():
        rule_type = RuleType(tag)
        if rule_type is RuleType.UNSUPPORTED:
            raise ValueError("Checks cannot be configured for unsupported values")
        resolved[rule_type] = frozenset(RuleCheck(c) for c in enabled)
    return MappingProxyType(resolved)


DEFAULT_RULE_CONFIG_MAP: RuleConfigMap = build_config_map()


def value_to_rule_type(value: Any) -> RuleType:
    """
    Classify a runtime value into its rule type tag.

    Only plain scalars, None and list/tuple sequences have a tag. Other
    objects (dicts, sets, instances of user classes) have no canonical shape
    to compare against and map to UNSUPPORTED.
    """
    if value is None:
        return RuleType.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return RuleType.BOOLEAN
    if isinstance(value, int):
        return RuleType.INTEGER
    if isinstance(value, float):
        return RuleType.FLOAT
    if isinstance(value, str):
        return RuleType.STRING
    if isinstance(value, (list, tuple)):
        return RuleType.ARRAY
    return RuleType.UNSUPPORTED
