"""Constants, the key type table and default configuration for KeyCat."""

import os
from pathlib import Path
from typing import Any

from cryptography.hazmat.primitives import hashes

from keycat.types import KeyType, LogLevel

DEFAULT_DIR_ROOT = Path(os.getcwd())
DEFAULT_SUBDIR_CONFIG = "config"
CONFIG_FILE_NAME = "keycat.yaml"
LOG_FILE_NAME = "keycat.log"

ENV_CONFIG_DIR = "KEYCAT_CONFIG_DIR"

DEFAULT_LOG_LEVEL = LogLevel.INFO

# (identifier, code, display name, acceptable sizes with the default first, output size)
# Codes are written into serialized key metadata and must never be reassigned.
KEY_TYPE_TABLE: tuple[tuple[KeyType, int, str, tuple[int, ...], int], ...] = (
    (KeyType.AES, 0, "AES", (128, 192, 256), 0),
    (KeyType.HMAC_SHA1, 1, "HMAC-SHA1", (256,), hashes.SHA1.digest_size),
    (KeyType.DSA_PRIV, 2, "DSA Private", (1024,), 48),
    (KeyType.DSA_PUB, 3, "DSA Public", (1024,), 48),
    (KeyType.RSA_PRIV, 4, "RSA Private", (2048, 1024, 768, 512), 256),
    (KeyType.RSA_PUB, 5, "RSA Public", (2048, 1024, 768, 512), 256),
    (KeyType.TEST, 127, "Test", (1,), 0),
)


def get_default_config() -> dict[str, Any]:
    """Get default configuration dictionary with every type at its default size."""
    return {
        "catalog": {
            "key_sizes": {str(identifier.value): sizes[0] for identifier, _, _, sizes, _ in KEY_TYPE_TABLE},
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL.value,
        },
    }
