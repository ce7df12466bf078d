"""The key type catalogue.

This module holds the closed set of key type descriptors and the sizes
currently selected for each type. Descriptors never change. The selected
size is the only mutable state, it lives in the catalogue rather than on the
descriptor, and every access to it is serialized by a lock.

Callers that generate keys concurrently should prefer ``resolve_size`` and
pass the size along explicitly instead of relying on the shared selection.
"""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from keycat.defaults import KEY_TYPE_TABLE
from keycat.models import InvalidKeySize, KeyTypeDescriptor, UnknownKeyType
from keycat.result import Failure, Result, Success
from keycat.types import KeyType

logger = logging.getLogger(__name__)


def _check_descriptors(descriptors: tuple[KeyTypeDescriptor, ...]) -> tuple[KeyTypeDescriptor, ...]:
    """Ensure every key type is described exactly once and codes are unique."""
    codes = [d.code for d in descriptors]
    if len(set(codes)) != len(codes):
        raise ValueError(f"Duplicate key type codes: {codes}")
    identifiers = [d.identifier for d in descriptors]
    if len(identifiers) != len(KeyType) or set(identifiers) != set(KeyType):
        raise ValueError(f"Descriptors must cover every key type exactly once: {[i.value for i in identifiers]}")
    return descriptors


def _build_descriptors() -> tuple[KeyTypeDescriptor, ...]:
    """Create the descriptor for every row of the key type table."""
    return _check_descriptors(
        tuple(
            KeyTypeDescriptor(
                identifier=identifier,
                code=code,
                display_name=display_name,
                acceptable_sizes=sizes,
                output_size=output_size,
            )
            for identifier, code, display_name, sizes, output_size in KEY_TYPE_TABLE
        )
    )


DESCRIPTORS: tuple[KeyTypeDescriptor, ...] = _build_descriptors()


class KeyTypeCatalog:
    """Validated access to key type size metadata and serialization codes."""

    def __init__(self: "KeyTypeCatalog", descriptors: tuple[KeyTypeDescriptor, ...] = DESCRIPTORS) -> None:
        descriptors = _check_descriptors(tuple(descriptors))
        self._by_identifier: Mapping[KeyType, KeyTypeDescriptor] = MappingProxyType(
            {d.identifier: d for d in descriptors}
        )
        self._by_code: Mapping[int, KeyTypeDescriptor] = MappingProxyType({d.code: d for d in descriptors})
        self._lock = threading.Lock()
        self._current: dict[KeyType, int] = {d.identifier: d.default_size for d in descriptors}

    def descriptor(self: "KeyTypeCatalog", identifier: KeyType) -> KeyTypeDescriptor:
        """Get the descriptor of a key type."""
        return self._by_identifier[identifier]

    def descriptors(self: "KeyTypeCatalog") -> list[KeyTypeDescriptor]:
        """Get all descriptors ordered by code."""
        return sorted(self._by_identifier.values(), key=lambda d: d.code)

    def default_size(self: "KeyTypeCatalog", identifier: KeyType) -> int:
        """Get the default (recommended) key size in bits."""
        return self.descriptor(identifier).default_size

    def current_size(self: "KeyTypeCatalog", identifier: KeyType) -> int:
        """Get the key size in bits currently selected for a key type."""
        with self._lock:
            return self._current[identifier]

    def output_size(self: "KeyTypeCatalog", identifier: KeyType) -> int:
        """Get the fixed output size of a key type, 0 if it has none."""
        return self.descriptor(identifier).output_size

    def acceptable_sizes(self: "KeyTypeCatalog", identifier: KeyType) -> tuple[int, ...]:
        """Get the acceptable key sizes, the default first."""
        return self.descriptor(identifier).acceptable_sizes

    def set_current_size(self: "KeyTypeCatalog", identifier: KeyType, new_size: int) -> Result[int, InvalidKeySize]:
        """Select the key size to use for a key type.

        Args:
        ----
            identifier: Key type to change
            new_size: Key size in bits

        Returns:
        -------
            Success with the new size, or Failure with InvalidKeySize if the
            size is not acceptable. A rejected size leaves the selection as it was.

        """
        checked = self._check_size(identifier, new_size)
        if isinstance(checked, Failure):
            logger.warning(str(checked.error))
            return checked

        with self._lock:
            previous = self._current[identifier]
            self._current[identifier] = checked.value
        if previous != checked.value:
            logger.info(f"Key size for {identifier.value} changed from {previous} to {checked.value}")
        return checked

    def reset_current_size(self: "KeyTypeCatalog", identifier: KeyType) -> int:
        """Restore the default key size for a key type and return it."""
        default = self.default_size(identifier)
        with self._lock:
            self._current[identifier] = default
        logger.debug(f"Key size for {identifier.value} reset to {default}")
        return default

    def reset_all(self: "KeyTypeCatalog") -> None:
        """Restore the default key size for every key type."""
        with self._lock:
            for identifier, descriptor in self._by_identifier.items():
                self._current[identifier] = descriptor.default_size

    def resolve_size(
        self: "KeyTypeCatalog", identifier: KeyType, size: int | None = None
    ) -> Result[int, InvalidKeySize]:
        """Pick the key size for a single operation without touching shared state.

        Args:
        ----
            identifier: Key type the size is for
            size: Requested size, or None to use the current selection

        Returns:
        -------
            Success with the size to use, or Failure with InvalidKeySize

        """
        if size is None:
            return Success(self.current_size(identifier))
        return self._check_size(identifier, size)

    def _check_size(self: "KeyTypeCatalog", identifier: KeyType, size: Any) -> Result[int, InvalidKeySize]:
        descriptor = self.descriptor(identifier)
        # bool is an int subclass but never a key size
        if isinstance(size, bool) or not isinstance(size, int) or not descriptor.accepts(size):
            return Failure(InvalidKeySize(identifier, size, descriptor.acceptable_sizes))
        return Success(size)

    def snapshot(self: "KeyTypeCatalog") -> dict[KeyType, int]:
        """Get the currently selected size of every key type."""
        with self._lock:
            return dict(self._current)

    def code_of(self: "KeyTypeCatalog", identifier: KeyType) -> int:
        """Get the serialization code of a key type."""
        return self.descriptor(identifier).code

    def identifier_of(self: "KeyTypeCatalog", code: Any) -> Result[KeyType, UnknownKeyType]:
        """Find the key type with the given serialization code.

        Codes 4 and 5 resolve to RSA_PRIV and RSA_PUB, matching ``code_of``.
        """
        if isinstance(code, bool) or not isinstance(code, int):
            return Failure(UnknownKeyType(code))
        descriptor = self._by_code.get(code)
        if descriptor is None:
            return Failure(UnknownKeyType(code))
        return Success(descriptor.identifier)

    def display_name(self: "KeyTypeCatalog", identifier: KeyType) -> str:
        """Get the human-readable name of a key type."""
        return self.descriptor(identifier).display_name


CATALOG = KeyTypeCatalog()


def get_catalog() -> KeyTypeCatalog:
    """Get the process-wide catalogue."""
    return CATALOG
