"""
Converts ciphertext bytes to and from the URL-safe text used in tokens.

This is unpadded base64url: '+' and '/' are replaced by '-' and '_' and the
trailing '=' characters are dropped. Decoding only accepts the canonical form,
so every byte string has exactly one valid text representation.
"""
import base64
import binascii
import re

from errors import MalformedToken

_URLSAFE_CHARS = re.compile(r"[A-Za-z0-9_-]*")


def is_urlsafe(text: str) -> bool:
    return bool(_URLSAFE_CHARS.fullmatch(text))


def encode_bytes(data: bytes) -> str:
    """Encodes bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode_bytes(text: str) -> bytes:
    """Decodes unpadded base64url text back into bytes."""
    if not is_urlsafe(text):
        raise MalformedToken("Token contains characters outside the base64url alphabet")

    padded = text + "=" * (-len(text) % 4)
    try:
        data = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise MalformedToken(f"Token is not valid base64url: {e}") from e

    # Reject leftover bits in the final character
    if encode_bytes(data) != text:
        raise MalformedToken("Token is not in canonical base64url form")
    return data
