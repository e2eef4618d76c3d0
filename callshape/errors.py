"""
callshape — Errors

The aggregator itself never raises; these come from the collaborator seams
(meta deserialisation and control parsing) and propagate through training.
"""

from __future__ import annotations


class CallshapeError(Exception):
    """Base class for all callshape errors."""


class MetaDeserializationError(CallshapeError):
    """A stored meta snapshot could not be rebuilt."""


class ControlFormatError(CallshapeError):
    """A control record is missing its class or method identifier."""
