import hashlib

from errors import ConfigurationError

KEY_SIZE = 32


def derive_key(secret: str) -> bytes:
    """Derives the 32-byte codec key as the SHA-256 digest of the UTF-8 secret."""
    if not secret:
        raise ConfigurationError("ENCRYPTED_ID_SECRET must be a non-empty string")
    return hashlib.sha256(secret.encode("utf-8")).digest()
