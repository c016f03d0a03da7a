r"""Options controlling how payloads are encoded and decoded."""

from __future__ import annotations

__all__ = ["DEFAULT_SERIALIZATION_OPTIONS", "NamingConvention", "SerializationOptions", "UnknownFields"]

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class NamingConvention(Enum):
    """Convention used for the keys of JSON objects on the wire.

    Applies to the declared fields of dataclasses and pydantic models:
    snake_case field names are renamed into the convention when encoding,
    and wire keys are mapped back to the field names when decoding. Keys
    of plain mappings (``dict`` values, ``Any`` and ``dict[str, X]``
    targets) are data and are never renamed. Pydantic field aliases take
    precedence over the convention. ``PRESERVE`` disables renaming in both directions.
    """

    CAMEL = "camel"
    PASCAL = "pascal"
    SNAKE = "snake"
    PRESERVE = "preserve"


class UnknownFields(Enum):
    """Handling of response fields that the target type does not declare."""

    IGNORE = "ignore"
    FORBID = "forbid"


@dataclass(frozen=True)
class SerializationOptions:
    r"""Immutable set of JSON serialization options.

    Args:
        naming: Naming convention of the declared fields of dataclasses
            and pydantic models. Defaults to lower camel case
            (``firstName``).
        date_format: ``strftime`` pattern applied to ``datetime`` values.
            ``None`` renders them in UTC as ``2024-01-02T03:04:05.678Z``.
        unknown_fields: Whether fields absent from the target dataclass or
            pydantic model are ignored or rejected when decoding.
        strict: Whether decoding refuses type coercion (e.g. ``"1"`` into
            an ``int`` field).

    Example:
        ```pycon
        >>> from aresclient.serialization import NamingConvention, SerializationOptions
        >>> options = SerializationOptions()
        >>> options.naming
        <NamingConvention.CAMEL: 'camel'>
        >>> options.merge(naming=NamingConvention.SNAKE).naming
        <NamingConvention.SNAKE: 'snake'>

        ```
    """

    naming: NamingConvention = NamingConvention.CAMEL
    date_format: str | None = None
    unknown_fields: UnknownFields = UnknownFields.IGNORE
    strict: bool = False

    def merge(self, **overrides: Any) -> SerializationOptions:
        """Return a copy with the non-``None`` ``overrides`` applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


DEFAULT_SERIALIZATION_OPTIONS = SerializationOptions()
