"""Conversion of key types to and from serialized key metadata.

Key metadata stores the type as its integer code. Older metadata may carry
the identifier name ("AES", "HMAC_SHA1", ...) instead, so decoding accepts
both.
"""

from typing import Any

from keycat.catalog import CATALOG, KeyTypeCatalog
from keycat.models import UnknownKeyType
from keycat.result import Failure, Result, Success
from keycat.types import KeyType


def encode_key_type(identifier: KeyType, catalog: KeyTypeCatalog = CATALOG) -> int:
    """Get the value written to key metadata for a key type."""
    return catalog.code_of(identifier)


def key_type_from_name(name: str, catalog: KeyTypeCatalog = CATALOG) -> Result[KeyType, UnknownKeyType]:
    """Look up a key type by identifier or display name, ignoring case.

    Args:
    ----
        name: Identifier such as "RSA_PRIV" or display name such as "RSA Private"
        catalog: Catalogue to search

    Returns:
    -------
        Result with the key type or UnknownKeyType

    """
    wanted = name.strip().upper()
    for descriptor in catalog.descriptors():
        if wanted in (descriptor.identifier.value, descriptor.display_name.upper()):
            return Success(descriptor.identifier)
    return Failure(UnknownKeyType(name))


def decode_key_type(value: Any, catalog: KeyTypeCatalog = CATALOG) -> Result[KeyType, UnknownKeyType]:
    """Read a key type from a key metadata value.

    Accepts an integer code, a numeric string holding a code, or a key type
    name. Anything else is reported as UnknownKeyType.
    """
    if isinstance(value, bool):
        return Failure(UnknownKeyType(value))
    if isinstance(value, int):
        return catalog.identifier_of(value)
    if isinstance(value, str):
        text = value.strip()
        # str.isdigit() also accepts non-ASCII digits such as "²"
        if text.isascii() and text.isdigit():
            return catalog.identifier_of(int(text)).map_error(lambda _: UnknownKeyType(value))
        return key_type_from_name(text, catalog)
    return Failure(UnknownKeyType(value))
