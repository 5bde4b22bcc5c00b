"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import RequestIDMiddleware, LoggingMiddleware
from api.routes import documents as documents_routes
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from infrastructure.external.storage import (
    get_storage_config,
    init_storage_client,
)
from infrastructure.rate_limiter import api_rate_limit, limiter


# Configure logging explicitly at the entry point, not on import
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # A pre-built client (tests, embedding apps) takes precedence
    if getattr(app.state, "storage", None) is None:
        # Fails fast on missing credentials or an unreachable bucket
        config = get_storage_config(settings)
        app.state.storage = await init_storage_client(config)
        logger.info(
            "storage_initialized",
            endpoint=config.endpoint_url,
            bucket=config.bucket,
        )

    yield

    app.state.storage = None
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    description="Document upload and presigned download service for the consular portal",
)

app.state.limiter = limiter

# Middleware runs bottom-up: request id first, then logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(documents_routes.router, prefix="/api")


@app.get("/", tags=["Root"])
@api_rate_limit
async def root(request: Request):
    """Service information"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
    }


@app.get("/api/health", tags=["Health"])
@api_rate_limit
async def health_check(request: Request):
    """Health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=4000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
