"""
callshape — Rules (Learning & Validation)

Learns the permissible shapes of arguments and return values for each
(class, method) from recorded controls, then validates reflections against
what was learned.

Public interface:
  RuleSetAggregator — per-signature registry and training/validation entry point
  RuleSet           — rules learned for one argument position or output
  Control           — one recorded call
  RuleType          — rule type tag, with an explicit UNSUPPORTED variant
  RuleCheck         — optional narrowing checks enabled through configuration
"""

from callshape.rules.aggregator import (
    OUTPUT,
    RuleSetAggregator,
    SignatureKey,
    ValidationReport,
)
from callshape.rules.control import Control
from callshape.rules.rule import (
    ArrayRule,
    BooleanRule,
    FloatRule,
    IntegerRule,
    NullRule,
    Rule,
    StringRule,
)
from callshape.rules.rule_set import RuleSet
from callshape.rules.types import (
    DEFAULT_RULE_CONFIG_MAP,
    RuleCheck,
    RuleConfigMap,
    RuleType,
    build_config_map,
    value_to_rule_type,
)

__all__ = [
    "ArrayRule",
    "BooleanRule",
    "Control",
    "DEFAULT_RULE_CONFIG_MAP",
    "FloatRule",
    "IntegerRule",
    "NullRule",
    "OUTPUT",
    "Rule",
    "RuleCheck",
    "RuleConfigMap",
    "RuleSet",
    "RuleSetAggregator",
    "RuleType",
    "SignatureKey",
    "StringRule",
    "ValidationReport",
    "build_config_map",
    "value_to_rule_type",
]
