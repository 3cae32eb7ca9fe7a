"""Pure-Python AES with its modes of operation, AES-GCM and bounded octet strings."""

__version__ = "0.1.0"
__all__ = ["aes", "gcm", "octet"]