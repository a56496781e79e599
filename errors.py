"""
Error taxonomy for the encrypted ID codec.

Every failure on the decode path is a DecodeError, so callers (and the HTTP
layer) can treat all of them the same way without revealing which check
rejected a token.
"""


class EncryptedIdError(Exception):
    """Base class for all codec errors."""
    pass


class ConfigurationError(EncryptedIdError):
    """The secret is missing or empty. Fatal at startup."""
    pass


class IdentifierOutOfRange(EncryptedIdError, ValueError):
    """The identifier does not fit in a signed 64-bit integer."""
    pass


class DecodeError(EncryptedIdError, ValueError):
    """Base class for every reason a token can be rejected."""
    pass


class MalformedToken(DecodeError):
    """Token text is not canonical base64url."""
    pass


class InvalidEncryptedId(DecodeError):
    """Token value is empty or whitespace."""
    pass


class InvalidCiphertextLength(DecodeError):
    """Decoded ciphertext is not exactly 32 bytes."""
    pass


class InvalidLength(DecodeError):
    """Payload is not exactly 32 bytes."""
    pass


class SignatureMismatch(DecodeError):
    """Signature check failed: tampered token or wrong key."""
    pass
