import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from config import Config
from limiter import limiter
from obfuscation import EncryptedIdCodec

TEST_SECRET = "test-secret"

# Reference vectors for TEST_SECRET, unprefixed
REFERENCE_TOKENS = {
    12345: "MzuJ5jXFBnxiLSZ-xD9uuCemFl4hChwoPrMqoWPZZEA",
    -1: "PE9KIkwbouA-WCssCmfyJggxIjQjs_5BzebAGTPMRM4",
    0: "XXmpmtoT9yfP4wQGGq-JBg7TP8Hdswb6Z4PLNjbAOYw",
}


@pytest.fixture
def codec() -> EncryptedIdCodec:
    return EncryptedIdCodec(TEST_SECRET)


@pytest.fixture
def bare_codec() -> EncryptedIdCodec:
    return EncryptedIdCodec(TEST_SECRET, prefix="")


@pytest.fixture
def settings() -> Config:
    settings = Config()
    settings.ENCRYPTED_ID_SECRET = TEST_SECRET
    settings.TOKEN_PREFIX = "obf_"
    settings.CORS_ORIGINS = ["*"]
    return settings


@pytest.fixture
def client(settings):
    """
    Test client with its own app instance. The lifespan runs on enter, so the
    codec is built exactly as it would be in production.
    """
    limiter.reset()
    with TestClient(create_app(settings)) as test_client:
        yield test_client
