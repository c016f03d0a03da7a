r"""JSON serialization adapter with configurable naming, date format and
unknown-field handling."""

from __future__ import annotations

__all__ = [
    "DEFAULT_SERIALIZATION_OPTIONS",
    "JsonSerializer",
    "NamingConvention",
    "SerializationOptions",
    "UnknownFields",
    "default_value",
    "deserialize",
    "serialize",
]

from aresclient.serialization.options import (
    DEFAULT_SERIALIZATION_OPTIONS,
    NamingConvention,
    SerializationOptions,
    UnknownFields,
)
from aresclient.serialization.serializer import (
    JsonSerializer,
    default_value,
    deserialize,
    serialize,
)
