import logging

from fastapi import APIRouter, Depends, Path, Request

import config
from core_logic import InvalidTokenException, get_codec
from errors import DecodeError
from limiter import limiter
from models import EncryptResponse, ErrorResponse
from obfuscation import EncryptedIdCodec
from payload import INT64_MAX, INT64_MIN

# --- Router Setup ---

api_router = APIRouter(
    prefix="/api/obfuscation",
    tags=["Obfuscation"],
)

logger = logging.getLogger("obfuscation_service")

# --- API Routes ---

@api_router.get(
    "/encrypt/{id}",
    response_model=EncryptResponse,
    summary="Encrypt a numeric identifier into a token",
)
@limiter.limit(config.RATE_LIMIT_ENCRYPT)
async def encrypt_id(
    request: Request,
    id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Signed 64-bit identifier"),
    codec: EncryptedIdCodec = Depends(get_codec),
):
    """Returns the opaque token for an identifier."""
    return EncryptResponse(value=codec.encode(id))


@api_router.get(
    "/decrypt/{value}",
    response_model=int,
    responses={400: {"model": ErrorResponse}},
    summary="Decrypt a token back into its identifier",
)
@limiter.limit(config.RATE_LIMIT_DECRYPT)
async def decrypt_id(
    request: Request,
    value: str = Path(..., description="Token produced by the encrypt endpoint"),
    codec: EncryptedIdCodec = Depends(get_codec),
):
    """Returns the identifier for a token, or 400 for any invalid token."""
    try:
        return codec.decode(value)
    except DecodeError as e:
        # Every rejection looks the same to the client
        logger.warning(f"Token rejected ({type(e).__name__}) from {request.client.host if request.client else 'unknown'}")
        raise InvalidTokenException()
