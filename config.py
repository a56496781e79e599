import os

from dotenv import load_dotenv

from encoding import is_urlsafe
from errors import ConfigurationError

# Values from a local .env file fill in anything not already in the environment
load_dotenv()


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(key: str, default: str) -> list[str]:
    raw = os.getenv(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

class Config:
    """Centralized configuration with validation"""
    SERVICE_NAME: str = "Obfuscation Service API"

    # Security
    ENCRYPTED_ID_SECRET: str | None = os.getenv("ENCRYPTED_ID_SECRET")
    TOKEN_PREFIX: str = os.getenv("TOKEN_PREFIX", "obf_")

    # CORS
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", "*")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", True)
    RATE_LIMIT_ENCRYPT: str = os.getenv("RATE_LIMIT_ENCRYPT", "60/minute")
    RATE_LIMIT_DECRYPT: str = os.getenv("RATE_LIMIT_DECRYPT", "60/minute")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str | None = os.getenv("LOG_DIR") or None

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    def validate(self):
        """Validate configuration on startup"""
        if not self.ENCRYPTED_ID_SECRET or not self.ENCRYPTED_ID_SECRET.strip():
            raise ConfigurationError("ENCRYPTED_ID_SECRET must be set")
        if not is_urlsafe(self.TOKEN_PREFIX or ""):
            raise ConfigurationError("TOKEN_PREFIX may only contain letters, digits, '-' and '_'")
        if not self.CORS_ORIGINS:
            raise ConfigurationError("CORS_ORIGINS must list at least one origin")

# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
