import pytest
from fastapi.testclient import TestClient
from limits import parse

import config

from app import create_app
from config import Config
from errors import ConfigurationError

from conftest import REFERENCE_TOKENS, TEST_SECRET

INVALID_BODY = {"error": "Invalid or corrupted token"}


# ===================================
# 1. Service Endpoints
# ===================================

def test_health_check(client: TestClient):
    """Tests the /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["token_prefix"] == "obf_"
    assert "timestamp" in data


def test_root_banner(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert "Obfuscation Service API" in response.text


# ===================================
# 2. Obfuscation API
# ===================================

def test_encrypt_returns_reference_token(client: TestClient):
    response = client.get("/api/obfuscation/encrypt/12345")
    assert response.status_code == 200
    assert response.json() == {"value": "obf_" + REFERENCE_TOKENS[12345]}


def test_encrypt_negative_id(client: TestClient):
    response = client.get("/api/obfuscation/encrypt/-1")
    assert response.status_code == 200
    assert response.json()["value"] == "obf_" + REFERENCE_TOKENS[-1]


def test_decrypt_returns_identifier(client: TestClient):
    response = client.get(f"/api/obfuscation/decrypt/obf_{REFERENCE_TOKENS[12345]}")
    assert response.status_code == 200
    assert response.json() == 12345


def test_decrypt_accepts_unprefixed_token(client: TestClient):
    response = client.get(f"/api/obfuscation/decrypt/{REFERENCE_TOKENS[0]}")
    assert response.status_code == 200
    assert response.json() == 0


def test_round_trip_through_api(client: TestClient):
    for identifier in (1, 2, 3, 9223372036854775807, -9223372036854775808):
        token = client.get(f"/api/obfuscation/encrypt/{identifier}").json()["value"]
        assert client.get(f"/api/obfuscation/decrypt/{token}").json() == identifier


@pytest.mark.parametrize("value", [
    "obf_" + REFERENCE_TOKENS[12345][:-2] + "AA",  # tampered
    "obf_AAAA",                                      # too short
    "obf_not-a-token!",                              # malformed
    "%20",                                           # whitespace only
])
def test_decrypt_rejections_are_indistinguishable(client: TestClient, value):
    response = client.get(f"/api/obfuscation/decrypt/{value}")
    assert response.status_code == 400
    assert response.json() == INVALID_BODY


def test_decrypt_rejects_token_from_other_secret(settings):
    other = Config()
    other.ENCRYPTED_ID_SECRET = "another-secret"
    other.TOKEN_PREFIX = "obf_"
    with TestClient(create_app(other)) as other_client:
        token = other_client.get("/api/obfuscation/encrypt/12345").json()["value"]

    with TestClient(create_app(settings)) as client:
        response = client.get(f"/api/obfuscation/decrypt/{token}")
    assert response.status_code == 400
    assert response.json() == INVALID_BODY


@pytest.mark.parametrize("value", ["abc", "1.5", "9223372036854775808", "-9223372036854775809"])
def test_encrypt_rejects_invalid_identifier(client: TestClient, value):
    response = client.get(f"/api/obfuscation/encrypt/{value}")
    assert response.status_code == 422


def test_unprefixed_deployment(settings):
    settings.TOKEN_PREFIX = ""
    with TestClient(create_app(settings)) as client:
        response = client.get("/api/obfuscation/encrypt/12345")
    assert response.json() == {"value": REFERENCE_TOKENS[12345]}


def test_cors_headers(client: TestClient):
    response = client.get("/api/obfuscation/encrypt/1", headers={"Origin": "https://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.skipif(not config.RATE_LIMIT_ENABLED, reason="rate limiting disabled")
def test_rate_limit_applies_to_encrypt(client: TestClient):
    allowed = parse(config.RATE_LIMIT_ENCRYPT).amount
    statuses = [client.get("/api/obfuscation/encrypt/1").status_code for _ in range(allowed + 1)]
    assert statuses[:allowed] == [200] * allowed
    assert statuses[allowed] == 429


# ===================================
# 3. Startup
# ===================================

@pytest.mark.parametrize("secret", [None, "", "   "])
def test_startup_fails_without_secret(secret):
    settings = Config()
    settings.ENCRYPTED_ID_SECRET = secret
    with pytest.raises(ConfigurationError):
        with TestClient(create_app(settings)):
            pass


def test_codec_is_built_once_at_startup(settings):
    app = create_app(settings)
    with TestClient(app) as client:
        codec = app.state.codec
        client.get("/api/obfuscation/encrypt/1")
        assert app.state.codec is codec
        assert codec.decode(codec.encode(5)) == 5
        assert TEST_SECRET not in repr(codec)
