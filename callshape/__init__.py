"""
callshape — learn call shapes from recorded controls, validate reflections.

Typical use::

    aggregator = RuleSetAggregator.from_config(load_config(path).rules)
    aggregator.train(controls)

    rule_sets = aggregator.get_input_rule_sets("Foo", "bar")
    if aggregator.is_testable(args, rule_sets):
        ok = aggregator.test_inputs(args, rule_sets)
"""

from callshape.config import CallshapeConfig, load_config
from callshape.errors import CallshapeError, ControlFormatError, MetaDeserializationError
from callshape.rules import Control, RuleSet, RuleSetAggregator, RuleType

__all__ = [
    "CallshapeConfig",
    "CallshapeError",
    "Control",
    "ControlFormatError",
    "MetaDeserializationError",
    "RuleSet",
    "RuleSetAggregator",
    "RuleType",
    "load_config",
]
