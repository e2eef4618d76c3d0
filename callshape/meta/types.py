"""
callshape — Meta Types

A meta is a frozen snapshot of the shape of one value: its type plus the few
measurements rules learn from (a number, a length, a numeric range).
Metas are the unit of training; rules never see the original value during
training, only its meta.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

from pydantic import Field

from callshape.primitives.common import CallshapeBaseModel


class MetaType(str, enum.Enum):
    """Discriminator written into every serialised meta."""

    ARRAY = "array"
    BOOL = "bool"
    FLOAT = "float"
    INT = "int"
    NULL = "null"
    STRING = "string"
    OBJECT = "object"


META_TYPES: frozenset[str] = frozenset(t.value for t in MetaType)


class BaseMeta(CallshapeBaseModel):
    model_config = {"populate_by_name": True, "from_attributes": True, "frozen": True}

    type: str


class ArrayMeta(BaseMeta):
    type: Literal["array"] = "array"
    length: int = 0
    # Numeric range of the items, NaN excluded; None when there are no numbers.
    # int is kept as int so integers too large for a float still fit.
    min: int | float | None = None
    max: int | float | None = None
    nan: bool = False


class BoolMeta(BaseMeta):
    type: Literal["bool"] = "bool"
    value: bool


class FloatMeta(BaseMeta):
    type: Literal["float"] = "float"
    value: float


class IntMeta(BaseMeta):
    type: Literal["int"] = "int"
    value: int


class NullMeta(BaseMeta):
    type: Literal["null"] = "null"


class StringMeta(BaseMeta):
    type: Literal["string"] = "string"
    length: int = 0


class ObjectMeta(BaseMeta):
    """Catch-all for values with no rule support. Carries the class name only."""

    type: Literal["object"] = "object"
    class_name: str = ""


Meta = Annotated[
    Union[ArrayMeta, BoolMeta, FloatMeta, IntMeta, NullMeta, StringMeta, ObjectMeta],
    Field(discriminator="type"),
]
