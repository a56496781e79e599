import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from fastapi import Request, HTTPException, status

import config
from obfuscation import EncryptedIdCodec

INVALID_TOKEN_MESSAGE = "Invalid or corrupted token"

# --- LOGGING SETUP ---

def setup_logging(level: str = config.LOG_LEVEL, log_dir: Optional[str] = config.LOG_DIR) -> logging.Logger:
    """Configure structured logging with optional rotation"""
    logger = logging.getLogger("obfuscation_service")
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, "app.log"),
                maxBytes=10_485_760,
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # The codec logs under its module name
    codec_logger = logging.getLogger("obfuscation")
    codec_logger.setLevel(level)
    if not codec_logger.handlers:
        for handler in logger.handlers:
            codec_logger.addHandler(handler)

    return logger

logger = setup_logging()

# --- CUSTOM EXCEPTIONS ---

class InvalidTokenException(HTTPException):
    def __init__(self, detail: str = INVALID_TOKEN_MESSAGE):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

# --- CODEC DEPENDENCY ---

def get_codec(request: Request) -> EncryptedIdCodec:
    """Returns the codec built during application startup."""
    codec = getattr(request.app.state, "codec", None)
    if codec is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Codec not initialized")
    return codec
