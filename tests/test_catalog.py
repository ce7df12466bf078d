"""Tests for the key type catalogue."""

import threading

import pytest

from keycat.catalog import CATALOG, DESCRIPTORS, KeyTypeCatalog, get_catalog
from keycat.models import InvalidKeySize, UnknownKeyType
from keycat.result import Failure, KeyCatError, Success
from keycat.types import KeyType

EXPECTED = {
    KeyType.AES: (0, "AES", (128, 192, 256), 0),
    KeyType.HMAC_SHA1: (1, "HMAC-SHA1", (256,), 20),
    KeyType.DSA_PRIV: (2, "DSA Private", (1024,), 48),
    KeyType.DSA_PUB: (3, "DSA Public", (1024,), 48),
    KeyType.RSA_PRIV: (4, "RSA Private", (2048, 1024, 768, 512), 256),
    KeyType.RSA_PUB: (5, "RSA Public", (2048, 1024, 768, 512), 256),
    KeyType.TEST: (127, "Test", (1,), 0),
}


def test_catalog_table(catalog: KeyTypeCatalog) -> None:
    """Test every key type against the published table."""
    assert len(DESCRIPTORS) == 7
    for identifier, (code, name, sizes, output_size) in EXPECTED.items():
        assert catalog.code_of(identifier) == code
        assert catalog.display_name(identifier) == name
        assert catalog.acceptable_sizes(identifier) == sizes
        assert catalog.output_size(identifier) == output_size


def test_default_and_current_size(catalog: KeyTypeCatalog) -> None:
    """Test the default is the first acceptable size and is selected initially."""
    for identifier in KeyType:
        assert catalog.default_size(identifier) == catalog.acceptable_sizes(identifier)[0]
        assert catalog.current_size(identifier) == catalog.default_size(identifier)


def test_aes_sizes(catalog: KeyTypeCatalog) -> None:
    """Test the AES entry."""
    assert catalog.default_size(KeyType.AES) == 128
    assert list(catalog.acceptable_sizes(KeyType.AES)) == [128, 192, 256]
    assert catalog.output_size(KeyType.AES) == 0


def test_set_current_size(catalog: KeyTypeCatalog) -> None:
    """Test selecting an acceptable key size."""
    result = catalog.set_current_size(KeyType.AES, 192)
    assert result == Success(192)
    assert catalog.current_size(KeyType.AES) == 192


def test_set_current_size_rejected(catalog: KeyTypeCatalog) -> None:
    """Test that an unacceptable size fails and leaves the selection unchanged."""
    result = catalog.set_current_size(KeyType.AES, 512)
    assert isinstance(result, Failure)
    assert result.error == InvalidKeySize(KeyType.AES, 512, (128, 192, 256))
    assert "512" in str(result.error)
    assert catalog.current_size(KeyType.AES) == 128

    catalog.set_current_size(KeyType.AES, 256)
    assert isinstance(catalog.set_current_size(KeyType.AES, 64), Failure)
    assert catalog.current_size(KeyType.AES) == 256


@pytest.mark.parametrize("size", [True, "192", 192.0, None, -128, 0])
def test_set_current_size_rejects_non_sizes(catalog: KeyTypeCatalog, size) -> None:
    """Test that values which are not integer key sizes are rejected."""
    assert isinstance(catalog.set_current_size(KeyType.AES, size), Failure)
    assert catalog.current_size(KeyType.AES) == 128


def test_set_current_size_matches_acceptable_sizes(catalog: KeyTypeCatalog) -> None:
    """Test a size is applied if and only if it is acceptable."""
    candidates = {1, 128, 192, 256, 512, 768, 1024, 2048, 4096}
    for identifier in KeyType:
        for size in sorted(candidates):
            before = catalog.current_size(identifier)
            result = catalog.set_current_size(identifier, size)
            if size in catalog.acceptable_sizes(identifier):
                assert isinstance(result, Success)
                assert catalog.current_size(identifier) == size
            else:
                assert isinstance(result, Failure)
                assert catalog.current_size(identifier) == before


def test_unwrap_rejected_size(catalog: KeyTypeCatalog) -> None:
    """Test that unwrapping a rejected size raises."""
    with pytest.raises(KeyCatError, match="Invalid key size 100 for RSA_PRIV"):
        catalog.set_current_size(KeyType.RSA_PRIV, 100).unwrap()


def test_reset_current_size(catalog: KeyTypeCatalog) -> None:
    """Test restoring the default key size."""
    catalog.set_current_size(KeyType.RSA_PUB, 512)
    catalog.set_current_size(KeyType.RSA_PUB, 768)
    assert catalog.reset_current_size(KeyType.RSA_PUB) == 2048
    assert catalog.current_size(KeyType.RSA_PUB) == 2048

    # Resetting an untouched type is harmless
    catalog.reset_current_size(KeyType.TEST)
    assert catalog.current_size(KeyType.TEST) == 1


def test_reset_all_and_snapshot(catalog: KeyTypeCatalog) -> None:
    """Test resetting every selection at once."""
    catalog.set_current_size(KeyType.AES, 256)
    catalog.set_current_size(KeyType.RSA_PRIV, 1024)
    snapshot = catalog.snapshot()
    assert snapshot[KeyType.AES] == 256
    assert snapshot[KeyType.RSA_PRIV] == 1024

    catalog.reset_all()
    assert catalog.snapshot() == {identifier: catalog.default_size(identifier) for identifier in KeyType}
    # The earlier snapshot is a copy
    assert snapshot[KeyType.AES] == 256


def test_acceptable_sizes_read_only(catalog: KeyTypeCatalog) -> None:
    """Test that callers cannot change the acceptable sizes."""
    sizes = catalog.acceptable_sizes(KeyType.AES)
    with pytest.raises((TypeError, AttributeError)):
        sizes.append(512)  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        sizes[0] = 512  # type: ignore[index]
    assert catalog.acceptable_sizes(KeyType.AES) == (128, 192, 256)


def test_descriptor_frozen(catalog: KeyTypeCatalog) -> None:
    """Test that descriptors cannot be modified."""
    descriptor = catalog.descriptor(KeyType.AES)
    with pytest.raises(Exception):
        descriptor.acceptable_sizes = (512,)
    assert str(descriptor) == "AES"


def test_resolve_size(catalog: KeyTypeCatalog) -> None:
    """Test choosing a size for one operation without changing the selection."""
    assert catalog.resolve_size(KeyType.RSA_PRIV) == Success(2048)
    assert catalog.resolve_size(KeyType.RSA_PRIV, 1024) == Success(1024)
    assert catalog.current_size(KeyType.RSA_PRIV) == 2048

    result = catalog.resolve_size(KeyType.RSA_PRIV, 4096)
    assert isinstance(result, Failure)
    assert isinstance(result.error, InvalidKeySize)

    catalog.set_current_size(KeyType.RSA_PRIV, 768)
    assert catalog.resolve_size(KeyType.RSA_PRIV) == Success(768)


def test_code_round_trip(catalog: KeyTypeCatalog) -> None:
    """Test that every code resolves back to its own key type."""
    for identifier in KeyType:
        assert catalog.identifier_of(catalog.code_of(identifier)) == Success(identifier)


def test_rsa_codes_resolve_to_rsa(catalog: KeyTypeCatalog) -> None:
    """Test codes 4 and 5 resolve to the RSA types, not DSA."""
    assert catalog.code_of(KeyType.RSA_PRIV) == 4
    assert catalog.identifier_of(4).unwrap() == KeyType.RSA_PRIV
    assert catalog.identifier_of(5).unwrap() == KeyType.RSA_PUB


@pytest.mark.parametrize("code", [-1, 6, 7, 42, 126, 128, 255, 1000])
def test_unknown_code(catalog: KeyTypeCatalog, code: int) -> None:
    """Test that unknown codes are reported, never defaulted."""
    result = catalog.identifier_of(code)
    assert isinstance(result, Failure)
    assert result.error == UnknownKeyType(code)
    assert result.unwrap_or(None) is None


@pytest.mark.parametrize("code", [None, "4", 4.0, True, False])
def test_non_integer_code(catalog: KeyTypeCatalog, code) -> None:
    """Test that values other than integers are not codes."""
    assert isinstance(catalog.identifier_of(code), Failure)


def test_display_names(catalog: KeyTypeCatalog) -> None:
    """Test the human-readable names."""
    assert catalog.display_name(KeyType.DSA_PUB) == "DSA Public"
    assert catalog.display_name(KeyType.HMAC_SHA1) == "HMAC-SHA1"


def test_descriptors_ordered_by_code(catalog: KeyTypeCatalog) -> None:
    """Test listing descriptors."""
    codes = [d.code for d in catalog.descriptors()]
    assert codes == [0, 1, 2, 3, 4, 5, 127]


def test_shared_catalog() -> None:
    """Test the process-wide catalogue."""
    assert get_catalog() is CATALOG
    CATALOG.set_current_size(KeyType.AES, 192)
    assert get_catalog().current_size(KeyType.AES) == 192


def test_private_catalogs_are_independent(catalog: KeyTypeCatalog) -> None:
    """Test that selections in one catalogue do not leak into another."""
    catalog.set_current_size(KeyType.AES, 256)
    assert CATALOG.current_size(KeyType.AES) == 128
    assert KeyTypeCatalog().current_size(KeyType.AES) == 128


def test_concurrent_selection(catalog: KeyTypeCatalog) -> None:
    """Test that concurrent updates always leave an acceptable size."""
    sizes = catalog.acceptable_sizes(KeyType.RSA_PRIV)

    def worker(offset: int) -> None:
        for i in range(200):
            catalog.set_current_size(KeyType.RSA_PRIV, sizes[(i + offset) % len(sizes)])
            catalog.set_current_size(KeyType.RSA_PRIV, 4096)
            assert catalog.current_size(KeyType.RSA_PRIV) in sizes

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert catalog.current_size(KeyType.RSA_PRIV) in sizes


def test_key_type_text_is_display_name(catalog: KeyTypeCatalog) -> None:
    """Test that key types render as their display names."""
    assert str(KeyType.DSA_PUB) == "DSA Public"
    for identifier in KeyType:
        assert str(identifier) == catalog.display_name(identifier)
    # the identifier stays available for config files and the command line
    assert KeyType.HMAC_SHA1.value == "HMAC_SHA1"


def test_custom_descriptors_duplicate_code() -> None:
    """Test that a catalogue refuses descriptors sharing a code."""
    clash = DESCRIPTORS[5].model_copy(update={"code": 4})
    with pytest.raises(ValueError, match="Duplicate key type codes"):
        KeyTypeCatalog(DESCRIPTORS[:5] + (clash,) + DESCRIPTORS[6:])


def test_custom_descriptors_coverage() -> None:
    """Test that a catalogue needs every key type exactly once."""
    with pytest.raises(ValueError, match="every key type exactly once"):
        KeyTypeCatalog(DESCRIPTORS[:-1])

    extra = DESCRIPTORS[0].model_copy(update={"code": 99})
    with pytest.raises(ValueError, match="every key type exactly once"):
        KeyTypeCatalog(DESCRIPTORS + (extra,))

    assert KeyTypeCatalog(tuple(reversed(DESCRIPTORS))).identifier_of(4) == Success(KeyType.RSA_PRIV)
