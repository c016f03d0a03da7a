r"""Renaming of declared field names between Python and the JSON naming
convention on the wire. Keys of plain mappings are data and never renamed."""

from __future__ import annotations

__all__ = ["decode_key", "encode_key"]

from typing import TYPE_CHECKING

from pydantic.alias_generators import to_camel, to_pascal, to_snake

from aresclient.serialization.options import NamingConvention

if TYPE_CHECKING:
    from collections.abc import Callable

_ENCODERS: dict[NamingConvention, Callable[[str], str]] = {
    NamingConvention.CAMEL: to_camel,
    NamingConvention.PASCAL: to_pascal,
}


def encode_key(key: str, naming: NamingConvention) -> str:
    """Rename a Python key for the wire.

    Example:
        ```pycon
        >>> from aresclient.serialization.naming import encode_key
        >>> from aresclient.serialization.options import NamingConvention
        >>> encode_key("created_at", NamingConvention.CAMEL)
        'createdAt'
        >>> encode_key("created_at", NamingConvention.PASCAL)
        'CreatedAt'

        ```
    """
    encoder = _ENCODERS.get(naming)
    return key if encoder is None else encoder(key)


def decode_key(key: str, naming: NamingConvention) -> str:
    """Rename a wire key back to a Python name.

    Example:
        ```pycon
        >>> from aresclient.serialization.naming import decode_key
        >>> from aresclient.serialization.options import NamingConvention
        >>> decode_key("createdAt", NamingConvention.CAMEL)
        'created_at'

        ```
    """
    if naming in (NamingConvention.CAMEL, NamingConvention.PASCAL):
        return to_snake(key)
    return key
