"""
Builds and parses the fixed 32-byte plaintext that gets encrypted into a token.

Layout:
    [0:8)   identifier, signed 64-bit little-endian
    [8:16)  nonce, first 8 bytes of HMAC-SHA256(key, identifier bytes)
    [16:32) signature, first 16 bytes of HMAC-SHA256(key, identifier + nonce)

The nonce is deterministic, so the same identifier always yields the same
payload. It is covered by the signature and never checked on its own.
"""
import hashlib
import hmac
import struct

from errors import IdentifierOutOfRange, InvalidLength, SignatureMismatch

ID_FORMAT = "<q"
ID_SIZE = struct.calcsize(ID_FORMAT)
NONCE_SIZE = 8
SIGNATURE_SIZE = 16
PAYLOAD_SIZE = ID_SIZE + NONCE_SIZE + SIGNATURE_SIZE

INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


def _keyed_hash(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha256).digest()


def pack_id(identifier: int) -> bytes:
    """Packs an identifier into its fixed-width 8-byte form."""
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise IdentifierOutOfRange(f"Identifier must be an integer, got {type(identifier).__name__}")
    if not INT64_MIN <= identifier <= INT64_MAX:
        raise IdentifierOutOfRange(f"Identifier {identifier} does not fit in a signed 64-bit integer")
    return struct.pack(ID_FORMAT, identifier)


def build_payload(identifier: int, key: bytes) -> bytes:
    id_bytes = pack_id(identifier)
    nonce = _keyed_hash(key, id_bytes)[:NONCE_SIZE]
    signature = _keyed_hash(key, id_bytes + nonce)[:SIGNATURE_SIZE]
    return id_bytes + nonce + signature


def parse_payload(payload: bytes, key: bytes) -> int:
    """
    Verifies the payload signature and returns the embedded identifier.

    Raises InvalidLength for anything other than 32 bytes and SignatureMismatch
    when the stored signature does not match the recomputed one.
    """
    if len(payload) != PAYLOAD_SIZE:
        raise InvalidLength(f"Payload must be {PAYLOAD_SIZE} bytes, got {len(payload)}")

    signed = payload[:ID_SIZE + NONCE_SIZE]
    expected = _keyed_hash(key, signed)[:SIGNATURE_SIZE]
    # compare_digest inspects every byte regardless of where they first differ
    if not hmac.compare_digest(expected, payload[ID_SIZE + NONCE_SIZE:]):
        raise SignatureMismatch("Token is invalid or corrupted")

    (identifier,) = struct.unpack(ID_FORMAT, payload[:ID_SIZE])
    return identifier
