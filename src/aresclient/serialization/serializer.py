r"""JSON encoding and decoding of request and response payloads.

Encoding turns dataclasses, pydantic models and plain Python values into
JSON bytes. Decoding parses JSON text and validates it into the requested
type with a ``pydantic.TypeAdapter``, so any type pydantic understands
(dataclasses, models, ``TypedDict``, ``list[int]``, ...) can be used as a
response type.
"""

from __future__ import annotations

__all__ = ["JsonSerializer", "default_value", "deserialize", "serialize"]

import dataclasses
import json
import logging
import types
import typing
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from aresclient.exceptions import SerializationError
from aresclient.serialization.naming import decode_key, encode_key
from aresclient.serialization.options import (
    DEFAULT_SERIALIZATION_OPTIONS,
    NamingConvention,
    SerializationOptions,
    UnknownFields,
)

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

_BUILTIN_DEFAULTS: dict[Any, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    str: "",
    list: [],
    dict: {},
    tuple: (),
}


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


def default_value(target: Any) -> Any:
    """Return the value an empty response body decodes to.

    Example:
        ```pycon
        >>> from aresclient.serialization.serializer import default_value
        >>> default_value(bool), default_value(list[int]), default_value(dict)
        (False, [], {})

        ```
    """
    origin = typing.get_origin(target) or target
    default = _BUILTIN_DEFAULTS.get(origin)
    return type(default)() if default is not None else None


def _format_datetime(value: datetime, date_format: str | None) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    if date_format is not None:
        return value.strftime(date_format)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


def _to_json_compatible(value: Any, options: SerializationOptions) -> Any:
    # Only field names of dataclasses and models follow the naming
    # convention. Keys of plain mappings are data and stay as they are.
    if isinstance(value, Enum):
        return _to_json_compatible(value.value, options)
    if value is None or isinstance(value, (str, int, float)):
        return value
    if isinstance(value, BaseModel):
        encoded: dict[str, Any] = {}
        for name, info in type(value).model_fields.items():
            if not info.exclude:
                key = info.serialization_alias or info.alias or encode_key(name, options.naming)
                encoded[key] = _to_json_compatible(getattr(value, name), options)
        for key, item in (value.model_extra or {}).items():
            encoded[key] = _to_json_compatible(item, options)
        return encoded
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            encode_key(field.name, options.naming): _to_json_compatible(getattr(value, field.name), options)
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {
            (key if isinstance(key, str) else str(key)): _to_json_compatible(item, options)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json_compatible(item, options) for item in value]
    if isinstance(value, datetime):
        return _format_datetime(value, options.date_format)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    return _adapter(type(value)).dump_python(value, mode="json")


def serialize(value: Any, options: SerializationOptions | None = None) -> bytes:
    r"""Encode ``value`` as UTF-8 JSON.

    Args:
        value: The value to encode. The field names of dataclasses and
            pydantic models are renamed following ``options.naming``
            (pydantic aliases win), the keys of plain mappings are kept
            as they are, and ``datetime`` values are formatted with
            ``options.date_format``.
        options: The serialization options. Defaults to
            ``SerializationOptions()``.

    Returns:
        The JSON document as bytes.

    Raises:
        SerializationError: If the value cannot be represented as JSON.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from aresclient.serialization import serialize
        >>> @dataclass
        ... class NewItem:
        ...     item_name: str
        ...     stock: dict
        ...
        >>> serialize(NewItem(item_name="Lamp", stock={"EU_WEST": 3}))
        b'{"itemName":"Lamp","stock":{"EU_WEST":3}}'

        ```
    """
    options = options or DEFAULT_SERIALIZATION_OPTIONS
    try:
        return json.dumps(
            _to_json_compatible(value, options),
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        ).encode("utf-8")
    except (PydanticSchemaGenerationError, PydanticSerializationError, TypeError, ValueError) as exc:
        msg = f"Could not serialize value of type {type(value).__name__}: {exc}"
        raise SerializationError(msg, target=type(value).__name__) from exc


def _declared_fields(target: Any, naming: NamingConvention) -> dict[str, tuple[str, Any]] | None:
    """Map every accepted wire key of a dataclass or pydantic model to the
    key handed to validation and the field type.

    Returns ``None`` for any other type.
    """
    fields: dict[str, tuple[str, Any]] = {}
    if isinstance(target, type) and issubclass(target, BaseModel):
        for name, info in target.model_fields.items():
            fields[name] = (name, info.annotation)
            if info.alias is not None:
                fields[info.alias] = (info.alias, info.annotation)
            else:
                fields[encode_key(name, naming)] = (name, info.annotation)
        return fields
    if isinstance(target, type) and dataclasses.is_dataclass(target):
        hints = typing.get_type_hints(target)
        for field in dataclasses.fields(target):
            annotation = hints.get(field.name, Any)
            fields[field.name] = (field.name, annotation)
            fields[encode_key(field.name, naming)] = (field.name, annotation)
        return fields
    return None


def _prepare(target: Any, data: Any, naming: NamingConvention, path: str, unknown: list[str]) -> Any:
    """Rename the wire keys of the declared fields found in ``data`` while
    walking ``target``, and append the path of every undeclared field to
    ``unknown``. Everything else is returned untouched."""
    origin = typing.get_origin(target)
    args = typing.get_args(target)
    if origin is typing.Annotated:
        return _prepare(args[0], data, naming, path, unknown)
    if origin in (typing.Union, types.UnionType):
        candidates = [arg for arg in args if arg is not type(None)]
        return _prepare(candidates[0], data, naming, path, unknown) if len(candidates) == 1 else data
    if origin in (list, set, frozenset, tuple, Sequence) and isinstance(data, list) and args:
        item_types = args if origin is tuple and args[-1] is not Ellipsis else args[:1] * len(data)
        prepared = [
            _prepare(item_type, item, naming, f"{path}[{index}]", unknown)
            for index, (item_type, item) in enumerate(zip(item_types, data))
        ]
        return prepared + data[len(prepared) :]
    if origin in (dict, Mapping) and isinstance(data, dict) and len(args) == 2:
        return {
            key: _prepare(args[1], item, naming, f"{path}.{key}" if path else key, unknown)
            for key, item in data.items()
        }

    fields = _declared_fields(target, naming)
    if fields is None or not isinstance(data, dict):
        return data
    prepared_fields = {}
    for key, item in data.items():
        declared = fields.get(key) or fields.get(decode_key(key, naming))
        if declared is None:
            unknown.append(f"{path}.{key}" if path else key)
            prepared_fields[key] = item
            continue
        name, annotation = declared
        prepared_fields[name] = _prepare(annotation, item, naming, f"{path}.{name}" if path else name, unknown)
    return prepared_fields


def _describe_validation_error(exc: ValidationError, target: Any) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    where = f" at '{location}'" if location else ""
    extra = f" ({exc.error_count() - 1} more error(s))" if exc.error_count() > 1 else ""
    return f"Could not convert value{where} to {_type_name(target)}: {error['msg']}{extra}"


def deserialize(
    content: bytes | str,
    target: type[T] | Any = Any,
    options: SerializationOptions | None = None,
) -> T:
    r"""Decode a JSON document into ``target``.

    An empty (or whitespace-only) document decodes to the default value of
    ``target`` (``False``, ``0``, ``""``, ``[]``, ``{}`` for the builtins and
    ``None`` otherwise) instead of failing.

    Wire keys are mapped to field names only for the dataclasses and
    pydantic models reachable from ``target``. The keys of ``dict`` and
    ``Any`` values come back exactly as the server sent them.

    Args:
        content: The JSON document.
        target: The type to validate the document into. ``Any`` returns the
            parsed JSON unchanged.
        options: The serialization options. Defaults to
            ``SerializationOptions()``.

    Returns:
        The decoded value.

    Raises:
        SerializationError: If the document is not valid JSON, contains
            unknown fields while ``options.unknown_fields`` is ``FORBID``, or
            does not match ``target``.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from aresclient.serialization import deserialize
        >>> @dataclass
        ... class Item:
        ...     id: int
        ...     item_name: str
        ...
        >>> deserialize(b'{"id": 1, "itemName": "Lamp"}', Item)
        Item(id=1, item_name='Lamp')
        >>> deserialize(b'{"USD": 1.1, "userId": 7}', dict[str, float])
        {'USD': 1.1, 'userId': 7.0}

        ```
    """
    options = options or DEFAULT_SERIALIZATION_OPTIONS
    text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
    if not text.strip():
        return default_value(target)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise SerializationError(msg, target=_type_name(target)) from exc

    unknown: list[str] = []
    data = _prepare(target, data, options.naming, "", unknown)
    if unknown and options.unknown_fields is UnknownFields.FORBID:
        msg = f"Unknown field(s) for {_type_name(target)}: {', '.join(unknown)}"
        raise SerializationError(msg, target=_type_name(target))

    try:
        return _adapter(target).validate_python(data, strict=options.strict)
    except ValidationError as exc:
        raise SerializationError(_describe_validation_error(exc, target), target=_type_name(target)) from exc
    except PydanticSchemaGenerationError as exc:
        msg = f"Cannot decode into {_type_name(target)}: {exc}"
        raise SerializationError(msg, target=_type_name(target)) from exc


class JsonSerializer:
    r"""Serializer bound to a fixed set of options.

    Args:
        options: The serialization options. Defaults to
            ``SerializationOptions()``.

    Example:
        ```pycon
        >>> from aresclient.serialization import JsonSerializer, NamingConvention, SerializationOptions
        >>> serializer = JsonSerializer(SerializationOptions(naming=NamingConvention.PRESERVE))
        >>> serializer.serialize({"item_name": "Lamp"})
        b'{"item_name":"Lamp"}'
        >>> serializer.deserialize('{"item_name": "Lamp"}')
        {'item_name': 'Lamp'}

        ```
    """

    def __init__(self, options: SerializationOptions | None = None) -> None:
        self.options = options or DEFAULT_SERIALIZATION_OPTIONS

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(options={self.options!r})"

    def serialize(self, value: Any) -> bytes:
        return serialize(value, self.options)

    def deserialize(self, content: bytes | str, target: type[T] | Any = Any) -> T:
        return deserialize(content, target, self.options)
