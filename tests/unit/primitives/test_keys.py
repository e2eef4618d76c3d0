"""
Unit tests for identifier normalisation.
"""

from __future__ import annotations

import enum

from callshape.primitives.keys import identifier_name, normalize_key, normalize_mapping


class RecordKey(enum.Enum):
    CLASS = "class"


class Account:
    def deposit(self, amount):
        return amount


class TestNormalizeKey:
    def test_plain_string(self):
        assert normalize_key("method") == "method"

    def test_symbol_prefix_and_whitespace_stripped(self):
        assert normalize_key(" :inputs ") == "inputs"

    def test_enum_uses_value(self):
        assert normalize_key(RecordKey.CLASS) == "class"

    def test_bytes_decoded(self):
        assert normalize_key(b"output") == "output"

    def test_mapping(self):
        assert normalize_mapping({":class": "A", b"method": "b"}) == {
            "class": "A",
            "method": "b",
        }


class TestIdentifierName:
    def test_type_uses_name(self):
        assert identifier_name(Account) == "Account"

    def test_function_uses_name(self):
        assert identifier_name(Account.deposit) == "deposit"

    def test_string_is_normalised(self):
        assert identifier_name(":Account") == "Account"
