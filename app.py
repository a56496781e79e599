from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware

from slowapi import _rate_limit_exceeded_handler, errors

# Import core modules
import config
from config import Config
from core_logic import logger, INVALID_TOKEN_MESSAGE
from errors import DecodeError
from limiter import limiter
from models import HealthResponse
from obfuscation import EncryptedIdCodec
from router import api_router


def create_app(settings: Config = config.config) -> FastAPI:
    """Builds the application around a single codec created at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Misconfiguration is fatal: the app must not serve without a secret
        settings.validate()
        app.state.codec = EncryptedIdCodec(settings.ENCRYPTED_ID_SECRET, prefix=settings.TOKEN_PREFIX)
        logger.info(f"ENCRYPTED_ID_SECRET loaded; token prefix {settings.TOKEN_PREFIX!r}")
        logger.info("Application started successfully")
        try:
            yield
        finally:
            app.state.codec = None
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        lifespan=lifespan
    )

    # --- MIDDLEWARE ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.limiter = limiter
    app.add_exception_handler(errors.RateLimitExceeded, _rate_limit_exceeded_handler)

    # --- ROUTES ---
    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return f"{settings.SERVICE_NAME} - compatible EncryptedId tokens"

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            service=settings.SERVICE_NAME,
            token_prefix=settings.TOKEN_PREFIX or "",
            timestamp=datetime.now(timezone.utc),
        )

    # --- EXCEPTION HANDLERS ---
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(DecodeError)
    async def decode_error_handler(request: Request, exc: DecodeError):
        logger.warning(f"Unhandled token rejection on {request.url.path}: {type(exc).__name__}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": INVALID_TOKEN_MESSAGE})

    return app


# Main app instance
app = create_app()


def main() -> None:
    import uvicorn
    uvicorn.run("app:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    main()
