"""KeyCat - catalogue of key types, sizes and serialization codes."""

__version__ = "0.1.0"
