"""
callshape — Control Records

A control is the historical record of one real invocation: which class and
method ran, the stored shape of each argument, and the stored shape of the
return value. Controls arrive from whatever store the instrumentation layer
uses, so keys are normalised before anything reads them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from callshape.errors import ControlFormatError
from callshape.primitives.common import CallshapeBaseModel
from callshape.primitives.keys import identifier_name, normalize_mapping


class Control(CallshapeBaseModel):
    """
    One recorded call.

    ``inputs`` is None when the record carries no inputs field at all; the
    aggregator trains that as a single null argument. An empty list means the
    call was recorded with no arguments and trains no input positions.
    """

    model_config = {"populate_by_name": True, "from_attributes": True, "frozen": True}

    class_name: str = Field(alias="class")
    method: str
    inputs: list[Any] | None = None
    output: Any = None

    @classmethod
    def from_record(cls, record: Control | Mapping[Any, Any]) -> Control:
        """Build a Control from a stored record with loosely typed keys."""
        if isinstance(record, Control):
            return record

        fields = normalize_mapping(record)
        missing = [k for k in ("class", "method") if fields.get(k) is None]
        if missing:
            raise ControlFormatError(
                f"Control record missing {', '.join(missing)}: {record!r}"
            )

        inputs = fields.get("inputs")
        return cls(
            class_name=identifier_name(fields["class"]),
            method=identifier_name(fields["method"]),
            inputs=list(inputs) if inputs is not None else None,
            output=fields.get("output"),
        )
