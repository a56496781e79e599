from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from errors import InvalidEncryptedId


class EncryptedId:
    """An opaque token as handed to external callers."""

    __slots__ = ("_value",)

    def __init__(self, value: Optional[str]):
        if not isinstance(value, str) or not value.strip():
            raise InvalidEncryptedId("EncryptedId cannot be empty")
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"EncryptedId({self._value!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, EncryptedId):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


class EncryptResponse(BaseModel):
    """Response model for an encrypted identifier."""
    value: str = Field(..., description="URL-safe token for the identifier")


class ErrorResponse(BaseModel):
    """Uniform body for rejected tokens."""
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
    token_prefix: str
    timestamp: datetime
