"""Type definitions for KeyCat."""

from enum import StrEnum


class KeyType(StrEnum):
    """Supported key types.

    The member value is the identifier written in configuration files and
    accepted on the command line. ``str()`` gives the display name.
    """

    AES = "AES"
    HMAC_SHA1 = "HMAC_SHA1"
    DSA_PRIV = "DSA_PRIV"
    DSA_PUB = "DSA_PUB"
    RSA_PRIV = "RSA_PRIV"
    RSA_PUB = "RSA_PUB"
    TEST = "TEST"

    def __str__(self: "KeyType") -> str:
        # the table imports this module, so it is looked up at call time
        from keycat.defaults import KEY_TYPE_TABLE

        return next(name for identifier, _, name, _, _ in KEY_TYPE_TABLE if identifier is self)


class LogLevel(StrEnum):
    """Log levels accepted in the configuration file."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
