"""
callshape — RuleSet

Everything learned for one training stream (one argument position, or the
return value) across all calls to one signature. Holds at most one Rule per
rule type tag; a Rule exists for a tag iff a meta of that tag was trained.
"""

from __future__ import annotations

from typing import Any

import structlog

from callshape.meta.types import BaseMeta
from callshape.rules.rule import RULE_CLASSES, Rule
from callshape.rules.types import (
    DEFAULT_RULE_CONFIG_MAP,
    META_TO_RULE_TYPE,
    RuleConfigMap,
    RuleType,
    value_to_rule_type,
)

logger = structlog.get_logger()


class RuleSet:
    """
    Bag of Rules keyed by RuleType.

    ``test`` fails a value whose tag was never trained here: a position that
    has only ever seen integers does not accept a string. Positions with no
    RuleSet at all are the aggregator's concern, and pass.
    """

    def __init__(self, config_map: RuleConfigMap | None = None) -> None:
        self._config_map = config_map if config_map is not None else DEFAULT_RULE_CONFIG_MAP
        self.rules: dict[RuleType, Rule] = {}

    @property
    def rule_types(self) -> frozenset[RuleType]:
        return frozenset(self.rules)

    def train(self, meta: BaseMeta) -> None:
        """Create or widen the Rule matching the meta's type."""
        rule_type = META_TO_RULE_TYPE.get(meta.type, RuleType.UNSUPPORTED)
        if rule_type is RuleType.UNSUPPORTED:
            logger.debug("rule_set_skipped_unsupported_meta", meta_type=meta.type)
            return

        rule = self.rules.get(rule_type)
        if rule is None:
            rule = RULE_CLASSES[rule_type](self._config_map.get(rule_type, frozenset()))
            self.rules[rule_type] = rule
        rule.train(meta)

    def test(self, value: Any) -> bool:
        """Check a live value against the Rule for its type tag."""
        rule = self.rules.get(value_to_rule_type(value))
        if rule is None:
            return False
        return rule.test(value)

    def __repr__(self) -> str:
        tags = sorted(t.value for t in self.rules)
        return f"RuleSet(rules={tags})"
