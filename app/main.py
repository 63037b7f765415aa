"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Selects the SMS provider once at startup
- Registers API routes
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import time

import httpx

from app.core.config import settings, validate_settings, ProviderConfig
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.services.providers import select_provider
from app.services.sms_service import SMSService
from app.api import sms

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting SMS dispatcher...")
    http_client = None

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        provider_config = ProviderConfig.from_settings(settings)
        http_client = httpx.AsyncClient(timeout=provider_config.request_timeout)
        provider = select_provider(provider_config, client=http_client)

        app.state.http_client = http_client
        app.state.sms_service = SMSService(provider, bulk_concurrency=settings.SMS_BULK_CONCURRENCY)

        logger.info(f"🎉 SMS dispatcher started (provider={provider.name.value})")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        if http_client is not None:
            await http_client.aclose()
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down SMS dispatcher...")
    await app.state.http_client.aclose()
    logger.info("👋 SMS dispatcher shut down")


app = FastAPI(
    title="SMS Dispatcher",
    description="Outbound SMS notifications over Twilio or an HTTP gateway",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Slower than one provider timeout
    if process_time > settings.SMS_REQUEST_TIMEOUT:
        logger.warning(f"Slow request detected: {request.method} {request.url.path} ({process_time:.2f}s)")

    return response


app.include_router(sms.router, prefix=settings.API_PREFIX, tags=["SMS"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": "SMS Dispatcher",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Service status and the active SMS provider."""
    sms_service = getattr(request.app.state, "sms_service", None)
    return {
        "status": "healthy" if sms_service else "starting",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0",
        "checks": {
            "sms_provider": sms_service.provider.name.value if sms_service else "not_configured"
        }
    }


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
