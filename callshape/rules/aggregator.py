"""
callshape — RuleSet Aggregator

Aggregates control metadata into rule sets and validates reflections
against what was aggregated.

The registry is one flat map keyed by (class, method, slot), where the slot
is either an argument position or OUTPUT. RuleSets are created on first
sight of a key and only ever widened afterwards.

Permissive defaults:
  - train(None) is a no-op
  - a position or output that was never trained passes validation
  - a value with no rule type tag is never testable

Concurrency: get-or-insert and training of a RuleSet run under one lock, so
concurrent first-time training of a key cannot discard state. Validation is
read-only and takes no lock; do not interleave it with a live training pass.
"""

from __future__ import annotations

import enum
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple

import structlog
from pydantic import Field

from callshape.meta.builder import deserialize_meta
from callshape.primitives.common import Identified, Timestamped, ValidationStatus
from callshape.primitives.keys import identifier_name
from callshape.rules.control import Control
from callshape.rules.rule_set import RuleSet
from callshape.rules.types import (
    DEFAULT_RULE_CONFIG_MAP,
    RuleConfigMap,
    RuleType,
    value_to_rule_type,
)

if TYPE_CHECKING:
    from callshape.config import RulesConfig

logger = structlog.get_logger()


class OutputSlot(str, enum.Enum):
    OUTPUT = "output"


OUTPUT = OutputSlot.OUTPUT


class SignatureKey(NamedTuple):
    class_name: str
    method: str
    slot: int | OutputSlot


class ValidationReport(Identified, Timestamped):
    """Outcome of checking one reflection against its signature's rule sets."""

    class_name: str
    method: str
    input_results: list[bool] = Field(default_factory=list)
    output_result: bool = True

    @property
    def passed(self) -> bool:
        return self.output_result and all(self.input_results)

    @property
    def status(self) -> ValidationStatus:
        return ValidationStatus.PASS if self.passed else ValidationStatus.FAIL


class RuleSetAggregator:
    """
    Per-process registry of RuleSets for every observed (class, method).

    The configuration map is shared, read-only, by every RuleSet created here.
    """

    def __init__(self, config_map: RuleConfigMap | None = None) -> None:
        self._config_map = config_map if config_map is not None else DEFAULT_RULE_CONFIG_MAP
        self._rule_sets: dict[SignatureKey, RuleSet] = {}
        # (class, method) → number of input positions seen
        self._arity: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()
        self._logger = logger.bind(system="rules.aggregator")

    @classmethod
    def from_config(cls, config: RulesConfig) -> RuleSetAggregator:
        return cls(config.to_config_map())

    # ─── Training ─────────────────────────────────────────────────────────────

    def train(self, controls: Iterable[Control | Mapping[Any, Any]] | None) -> None:
        """
        Create or widen rule sets from control records.

        A control with no inputs field trains position 0 with a null meta, so
        zero-argument calls still leave a trained slot. The output is always
        trained, absent or not: returning nothing is a shape too.
        """
        # On first use there are no previously recorded controls
        if controls is None:
            return

        count = 0
        for record in controls:
            control = Control.from_record(record)

            if control.inputs is None:
                self.train_input(control.class_name, control.method, None, 0)
            else:
                for position, meta in enumerate(control.inputs):
                    self.train_input(control.class_name, control.method, meta, position)

            self.train_output(control.class_name, control.method, control.output)
            count += 1

        self._logger.info(
            "controls_trained",
            controls=count,
            signatures=len(self._arity),
            rule_sets=len(self._rule_sets),
        )

    def train_input(self, klass: Any, method: Any, meta: Any, position: int) -> None:
        """Train the rule set for one argument position on one stored meta."""
        key = SignatureKey(identifier_name(klass), identifier_name(method), position)
        self._train(key, meta)

    def train_output(self, klass: Any, method: Any, meta: Any) -> None:
        """Train the output rule set on one stored meta."""
        key = SignatureKey(identifier_name(klass), identifier_name(method), OUTPUT)
        self._train(key, meta)

    def _train(self, key: SignatureKey, raw_meta: Any) -> None:
        meta = deserialize_meta(raw_meta)
        with self._lock:
            self._fetch_or_create(key).train(meta)

    def _fetch_or_create(self, key: SignatureKey) -> RuleSet:
        """Caller holds the lock."""
        rule_set = self._rule_sets.get(key)
        if rule_set is not None:
            return rule_set

        rule_set = RuleSet(self._config_map)
        self._rule_sets[key] = rule_set

        signature = (key.class_name, key.method)
        arity = self._arity.get(signature, 0)
        if isinstance(key.slot, int):
            arity = max(arity, key.slot + 1)
        self._arity[signature] = arity

        self._logger.debug(
            "rule_set_created",
            class_name=key.class_name,
            method=key.method,
            slot=key.slot if isinstance(key.slot, int) else key.slot.value,
        )
        return rule_set

    # ─── Validation ───────────────────────────────────────────────────────────

    def check_inputs(
        self,
        inputs: Sequence[Any],
        input_rule_sets: Sequence[RuleSet | None] | None,
    ) -> list[bool]:
        """
        Per-position outcome for an argument list. Every position is
        evaluated; positions with no rule set pass.
        """
        rule_sets = input_rule_sets or []
        results: list[bool] = []
        for position, value in enumerate(inputs):
            rule_set = rule_sets[position] if position < len(rule_sets) else None
            results.append(True if rule_set is None else rule_set.test(value))
        return results

    def test_inputs(
        self,
        inputs: Sequence[Any],
        input_rule_sets: Sequence[RuleSet | None] | None,
    ) -> bool:
        """True iff every trained position accepts its argument."""
        return all(self.check_inputs(inputs, input_rule_sets))

    def test_output(self, output: Any, output_rule_set: RuleSet | None) -> bool:
        """True if the output conforms, or if no output was ever trained."""
        if output_rule_set is None:
            return True
        return output_rule_set.test(output)

    def validate(
        self,
        klass: Any,
        method: Any,
        inputs: Sequence[Any],
        output: Any = None,
    ) -> ValidationReport:
        """Look up a signature's rule sets and check one call against them."""
        class_name, method_name = identifier_name(klass), identifier_name(method)
        report = ValidationReport(
            class_name=class_name,
            method=method_name,
            input_results=self.check_inputs(
                inputs, self.get_input_rule_sets(class_name, method_name)
            ),
            output_result=self.test_output(
                output, self.get_output_rule_set(class_name, method_name)
            ),
        )
        self._logger.debug(
            "reflection_validated",
            class_name=class_name,
            method=method_name,
            status=report.status.value,
        )
        return report

    # ─── Lookup ───────────────────────────────────────────────────────────────

    def get_input_rule_sets(self, klass: Any, method: Any) -> list[RuleSet | None]:
        """
        Ordered input rule sets for a signature. Untrained positions are None;
        an untrained signature gives an empty list. Neither is an error.
        """
        class_name, method_name = identifier_name(klass), identifier_name(method)
        arity = self._arity.get((class_name, method_name), 0)
        return [
            self._rule_sets.get(SignatureKey(class_name, method_name, position))
            for position in range(arity)
        ]

    def get_output_rule_set(self, klass: Any, method: Any) -> RuleSet | None:
        key = SignatureKey(identifier_name(klass), identifier_name(method), OUTPUT)
        return self._rule_sets.get(key)

    def signatures(self) -> list[tuple[str, str]]:
        """Every (class, method) trained so far, in first-seen order."""
        return list(self._arity)

    def __len__(self) -> int:
        return len(self._rule_sets)

    # ─── Classification ───────────────────────────────────────────────────────

    @staticmethod
    def value_to_rule_type(value: Any) -> RuleType:
        return value_to_rule_type(value)

    @staticmethod
    def is_testable(
        args: Sequence[Any],
        input_rule_sets: Sequence[RuleSet | None] | None,
    ) -> bool:
        """
        True iff every argument's rule type has a trained Rule at its
        position. Guards automated comparison against asserting a verdict for
        a type no control ever showed.
        """
        rule_sets = input_rule_sets or []
        for position, arg in enumerate(args):
            rule_type = value_to_rule_type(arg)
            if rule_type is RuleType.UNSUPPORTED:
                return False
            rule_set = rule_sets[position] if position < len(rule_sets) else None
            if rule_set is None or rule_type not in rule_set.rules:
                return False
        return True
