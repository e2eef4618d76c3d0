"""
Unit tests for RuleSet.
"""

from __future__ import annotations

from callshape.meta import build_meta
from callshape.rules import (
    IntegerRule,
    NullRule,
    RuleCheck,
    RuleSet,
    RuleType,
    build_config_map,
)


def make_rule_set(*values, config_map=None) -> RuleSet:
    rule_set = RuleSet(config_map)
    for value in values:
        rule_set.train(build_meta(value))
    return rule_set


class TestTraining:
    def test_empty_rule_set_has_no_rules(self):
        assert RuleSet().rules == {}

    def test_rule_created_per_trained_type(self):
        rule_set = make_rule_set(1, None, 2)
        assert rule_set.rule_types == frozenset({RuleType.INTEGER, RuleType.NULL})
        assert isinstance(rule_set.rules[RuleType.INTEGER], IntegerRule)
        assert isinstance(rule_set.rules[RuleType.NULL], NullRule)

    def test_same_type_reuses_rule(self):
        rule_set = make_rule_set(1)
        rule = rule_set.rules[RuleType.INTEGER]
        rule_set.train(build_meta(2))
        assert rule_set.rules[RuleType.INTEGER] is rule
        assert rule.trained == 2

    def test_unsupported_meta_creates_no_rule(self):
        rule_set = make_rule_set({"a": 1})
        assert rule_set.rules == {}

    def test_config_map_enables_checks(self):
        config_map = build_config_map({"integer": ["range"]})
        rule_set = make_rule_set(1, 3, config_map=config_map)
        assert rule_set.rules[RuleType.INTEGER].checks == frozenset({RuleCheck.RANGE})
        assert rule_set.test(2)
        assert not rule_set.test(4)


class TestTesting:
    def test_trained_type_passes(self):
        assert make_rule_set(1).test(42)

    def test_untrained_type_fails(self):
        """A position that only ever saw integers does not accept a string."""
        rule_set = make_rule_set(1)
        assert not rule_set.test("a")

    def test_unsupported_value_fails(self):
        assert not make_rule_set(1).test(object())

    def test_training_never_revokes_acceptance(self):
        config_map = build_config_map({"integer": ["range"], "string": ["length"]})
        rule_set = make_rule_set(5, "abc", config_map=config_map)
        accepted = [5, "abc"]
        assert all(rule_set.test(v) for v in accepted)

        for value in (100, -3, "", "a much longer value", None, [1], 2.5):
            rule_set.train(build_meta(value))
            assert all(rule_set.test(v) for v in accepted)
