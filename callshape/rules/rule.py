"""
callshape — Rules

One rule per rule type tag. A rule widens its learned envelope every time it
is trained and never narrows it. Which parts of the envelope are enforced at
test time is decided by the checks enabled for its tag; with no checks
enabled a rule accepts any value of its type.

  ArrayRule    — length range, numeric item range
  BooleanRule  — observed values
  FloatRule    — numeric range
  IntegerRule  — numeric range
  NullRule     — None only
  StringRule   — length range
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar

from callshape.meta.types import (
    ArrayMeta,
    BaseMeta,
    BoolMeta,
    FloatMeta,
    IntMeta,
    StringMeta,
)
from callshape.rules.types import RuleCheck, RuleType, value_to_rule_type

# int stays int so ranges over huge integers compare exactly
Number = int | float


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _expect(meta: BaseMeta, *meta_classes: type[BaseMeta]) -> None:
    if not isinstance(meta, meta_classes):
        names = ", ".join(c.__name__ for c in meta_classes)
        raise TypeError(f"Expected {names}, got {type(meta).__name__}")


def _widen(
    low: Number | None, high: Number | None, value: Number,
) -> tuple[Number, Number]:
    if low is None or high is None:
        return value, value
    return min(low, value), max(high, value)


def _within(value: Number, low: Number | None, high: Number | None) -> bool:
    if low is None or high is None:
        return False
    return low <= value <= high


# ─── Abstract Base ────────────────────────────────────────────────────────────


class Rule(ABC):
    """
    Base class for a learned constraint on one rule type tag.

    ``test`` first checks the value's tag; a value of another type never
    conforms, whatever checks are enabled.
    """

    rule_type: ClassVar[RuleType]
    supported_checks: ClassVar[frozenset[RuleCheck]] = frozenset()

    def __init__(self, checks: Iterable[RuleCheck] = ()) -> None:
        self._checks = frozenset(checks) & self.supported_checks
        self.trained: int = 0

    @property
    def checks(self) -> frozenset[RuleCheck]:
        return self._checks

    def train(self, meta: BaseMeta) -> None:
        self._learn(meta)
        self.trained += 1

    def test(self, value: Any) -> bool:
        if value_to_rule_type(value) is not self.rule_type:
            return False
        return self._conforms(value)

    @abstractmethod
    def _learn(self, meta: BaseMeta) -> None:
        ...

    @abstractmethod
    def _conforms(self, value: Any) -> bool:
        ...

    def __repr__(self) -> str:
        checks = sorted(c.value for c in self._checks)
        return f"{type(self).__name__}(trained={self.trained}, checks={checks})"


# ─── Numeric ──────────────────────────────────────────────────────────────────


class _RangeRule(Rule):
    """
    NaN never enters the learned range: it would poison every later min/max.
    A trained NaN is remembered instead, and only then does NaN conform.
    """

    supported_checks = frozenset({RuleCheck.RANGE})

    def __init__(self, checks: Iterable[RuleCheck] = ()) -> None:
        super().__init__(checks)
        self.min: Number | None = None
        self.max: Number | None = None
        self.accepts_nan: bool = False

    def _learn(self, meta: BaseMeta) -> None:
        _expect(meta, IntMeta, FloatMeta)
        value = meta.value  # type: ignore[attr-defined]
        if _is_nan(value):
            self.accepts_nan = True
        else:
            self.min, self.max = _widen(self.min, self.max, value)

    def _conforms(self, value: Any) -> bool:
        if RuleCheck.RANGE not in self._checks:
            return True
        if _is_nan(value):
            return self.accepts_nan
        return _within(value, self.min, self.max)


class IntegerRule(_RangeRule):
    rule_type = RuleType.INTEGER


class FloatRule(_RangeRule):
    rule_type = RuleType.FLOAT


# ─── Boolean ──────────────────────────────────────────────────────────────────


class BooleanRule(Rule):
    rule_type = RuleType.BOOLEAN
    supported_checks = frozenset({RuleCheck.VALUES})

    def __init__(self, checks: Iterable[RuleCheck] = ()) -> None:
        super().__init__(checks)
        self.values: set[bool] = set()

    def _learn(self, meta: BaseMeta) -> None:
        _expect(meta, BoolMeta)
        self.values.add(meta.value)  # type: ignore[attr-defined]

    def _conforms(self, value: Any) -> bool:
        if RuleCheck.VALUES in self._checks:
            return value in self.values
        return True


# ─── Null ─────────────────────────────────────────────────────────────────────


class NullRule(Rule):
    rule_type = RuleType.NULL

    def _learn(self, meta: BaseMeta) -> None:
        pass

    def _conforms(self, value: Any) -> bool:
        return value is None


# ─── String ───────────────────────────────────────────────────────────────────


class StringRule(Rule):
    rule_type = RuleType.STRING
    supported_checks = frozenset({RuleCheck.LENGTH})

    def __init__(self, checks: Iterable[RuleCheck] = ()) -> None:
        super().__init__(checks)
        self.min_length: int | None = None
        self.max_length: int | None = None

    def _learn(self, meta: BaseMeta) -> None:
        _expect(meta, StringMeta)
        length = meta.length  # type: ignore[attr-defined]
        self.min_length, self.max_length = _widen(self.min_length, self.max_length, length)

    def _conforms(self, value: Any) -> bool:
        if RuleCheck.LENGTH in self._checks:
            return _within(len(value), self.min_length, self.max_length)
        return True


# ─── Array ────────────────────────────────────────────────────────────────────


class ArrayRule(Rule):
    """
    Learns the length range of arrays and the numeric range of their items.
    Non-numeric items are ignored by the range check; NaN items conform only
    once an array holding NaN was trained.
    """

    rule_type = RuleType.ARRAY
    supported_checks = frozenset({RuleCheck.LENGTH, RuleCheck.RANGE})

    def __init__(self, checks: Iterable[RuleCheck] = ()) -> None:
        super().__init__(checks)
        self.min_length: int | None = None
        self.max_length: int | None = None
        self.min: Number | None = None
        self.max: Number | None = None
        self.accepts_nan: bool = False

    def _learn(self, meta: BaseMeta) -> None:
        if not isinstance(meta, ArrayMeta):
            raise TypeError(f"Expected ArrayMeta, got {type(meta).__name__}")
        self.min_length, self.max_length = _widen(
            self.min_length, self.max_length, meta.length
        )
        if meta.min is not None and meta.max is not None:
            self.min = meta.min if self.min is None else min(self.min, meta.min)
            self.max = meta.max if self.max is None else max(self.max, meta.max)
        if meta.nan:
            self.accepts_nan = True

    def _conforms(self, value: Any) -> bool:
        if RuleCheck.LENGTH in self._checks:
            if not _within(len(value), self.min_length, self.max_length):
                return False
        if RuleCheck.RANGE in self._checks:
            for item in value:
                if isinstance(item, bool) or not isinstance(item, (int, float)):
                    continue
                if _is_nan(item):
                    if not self.accepts_nan:
                        return False
                elif not _within(item, self.min, self.max):
                    return False
        return True


RULE_CLASSES: dict[RuleType, type[Rule]] = {
    RuleType.ARRAY: ArrayRule,
    RuleType.BOOLEAN: BooleanRule,
    RuleType.FLOAT: FloatRule,
    RuleType.INTEGER: IntegerRule,
    RuleType.NULL: NullRule,
    RuleType.STRING: StringRule,
}
