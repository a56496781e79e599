"""
Reversible encryption of 64-bit database IDs into opaque, URL-safe tokens.

    encode: id -> payload (id + nonce + signature) -> AES-256-ECB -> base64url
    decode: the reverse, with the signature verified after decryption

The scheme is fixed for compatibility with an existing peer system: the same
derived key is used for AES and HMAC, and the cipher runs unchained over two
16-byte blocks. Changing either is a breaking change for all issued tokens.
"""
import logging
from typing import NamedTuple, Optional, Union

from cipher import decrypt_blocks, encrypt_blocks
from encoding import decode_bytes, encode_bytes, is_urlsafe
from errors import DecodeError
from keys import derive_key
from models import EncryptedId
from payload import build_payload, parse_payload

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "obf_"


class DecodeResult(NamedTuple):
    ok: bool
    id: int
    error: Optional[DecodeError] = None


class EncryptedIdCodec:
    """
    Encodes and decodes identifiers under one secret.

    The derived key is computed once in the constructor and never mutated,
    so a single instance can be shared freely between concurrent requests.
    """

    __slots__ = ("_key", "_prefix")

    def __init__(self, secret: str, prefix: str = DEFAULT_PREFIX):
        prefix = prefix or ""
        if not is_urlsafe(prefix):
            raise ValueError(f"Token prefix {prefix!r} is not URL-safe")
        self._key = derive_key(secret)
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def __repr__(self) -> str:
        return f"EncryptedIdCodec(prefix={self._prefix!r})"

    def encrypt(self, identifier: int) -> EncryptedId:
        return EncryptedId(self.encode(identifier))

    def encode(self, identifier: int) -> str:
        """Returns the token for an identifier. Same input, same token."""
        payload = build_payload(identifier, self._key)
        ciphertext = encrypt_blocks(payload, self._key)
        return f"{self._prefix}{encode_bytes(ciphertext)}"

    def decode(self, token: Union[str, EncryptedId]) -> int:
        """
        Recovers the identifier from a token.

        Raises a DecodeError subclass when the token is empty, is not valid
        base64url, has the wrong length, or fails the signature check.
        """
        if not isinstance(token, EncryptedId):
            token = EncryptedId(token)

        text = token.value
        if self._prefix and text.startswith(self._prefix):
            text = text[len(self._prefix):]

        ciphertext = decode_bytes(text)
        payload = decrypt_blocks(ciphertext, self._key)
        return parse_payload(payload, self._key)

    def try_decode(self, token: Union[str, EncryptedId, None]) -> DecodeResult:
        """Non-raising decode: failures come back as ok=False with id 0."""
        try:
            return DecodeResult(True, self.decode(token))
        except DecodeError as e:
            logger.warning(f"Rejected token: {type(e).__name__}")
            return DecodeResult(False, 0, e)
