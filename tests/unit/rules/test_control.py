"""
Unit tests for Control record parsing.
"""

from __future__ import annotations

import pytest

from callshape.errors import ControlFormatError
from callshape.rules import Control


class Ledger:
    def post(self, entry):
        return entry


class TestFromRecord:
    def test_string_keys(self):
        control = Control.from_record(
            {"class": "Foo", "method": "bar", "inputs": [1], "output": 2}
        )
        assert control.class_name == "Foo"
        assert control.method == "bar"
        assert control.inputs == [1]
        assert control.output == 2

    def test_symbol_style_keys(self):
        control = Control.from_record({":class": ":Foo", ":method": ":bar"})
        assert control.class_name == "Foo"
        assert control.method == "bar"

    def test_missing_inputs_is_none(self):
        control = Control.from_record({"class": "Foo", "method": "bar"})
        assert control.inputs is None
        assert control.output is None

    def test_tuple_inputs_become_list(self):
        control = Control.from_record({"class": "Foo", "method": "bar", "inputs": (1, 2)})
        assert control.inputs == [1, 2]

    def test_class_and_method_objects_resolve_to_names(self):
        control = Control.from_record({"class": Ledger, "method": Ledger.post})
        assert control.class_name == "Ledger"
        assert control.method == "post"

    def test_existing_control_passes_through(self):
        control = Control(class_name="Foo", method="bar")
        assert Control.from_record(control) is control

    def test_alias_construction(self):
        control = Control.model_validate({"class": "Foo", "method": "bar"})
        assert control.class_name == "Foo"

    def test_missing_method_raises(self):
        with pytest.raises(ControlFormatError):
            Control.from_record({"class": "Foo"})

    def test_missing_class_raises(self):
        with pytest.raises(ControlFormatError):
            Control.from_record({"method": "bar", "class": None})
