"""
AES-256 over the 32-byte payload as two independent 16-byte blocks (ECB, no
padding, no IV).

Equal plaintext blocks give equal ciphertext blocks. This matches the peer
implementation and must not change without breaking every issued token.
"""
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from errors import InvalidCiphertextLength
from payload import PAYLOAD_SIZE

BLOCK_SIZE = 16


def _cipher(key: bytes) -> Cipher:
    return Cipher(algorithms.AES(key), modes.ECB())


def encrypt_blocks(payload: bytes, key: bytes) -> bytes:
    if len(payload) != PAYLOAD_SIZE:
        raise ValueError(f"Payload must be {PAYLOAD_SIZE} bytes, got {len(payload)}")
    encryptor = _cipher(key).encryptor()
    return encryptor.update(payload) + encryptor.finalize()


def decrypt_blocks(ciphertext: bytes, key: bytes) -> bytes:
    if len(ciphertext) != PAYLOAD_SIZE:
        raise InvalidCiphertextLength(
            f"Ciphertext must be {PAYLOAD_SIZE} bytes, got {len(ciphertext)}"
        )
    decryptor = _cipher(key).decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()
