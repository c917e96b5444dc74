"""
Markov Text Service
Main application entry point

Serves the Markov chain engine over HTTP: training, generation,
next-token probabilities, statistics and JSON model files.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from markov_service import __version__
from markov_service.api.routers import markov_router
from markov_service.config import settings
from markov_service.services.errors import (
    InvalidConfigurationError,
    InvalidInputError,
    MarkovError,
    NotFoundError,
    NotTrainedError,
    SchemaMismatchError,
)
from markov_service.utils.logger import setup_logger

# Setup logging
logger = setup_logger(__name__)

ERROR_STATUS = {
    InvalidConfigurationError: 400,
    InvalidInputError: 400,
    NotFoundError: 404,
    NotTrainedError: 409,
    SchemaMismatchError: 409,
}


def error_status(exc: MarkovError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for service initialization"""
    logger.info("[BOOT] Starting Markov Service...")
    logger.info(f"[BOOT] Default order: {settings.MARKOV_ORDER}")

    try:
        if settings.MARKOV_PRELOAD_PATH:
            preload = Path(settings.MARKOV_PRELOAD_PATH)
            logger.info(f"[BOOT] Preloading default model from {preload}...")
            model = markov_router.new_model()
            await model.load_from_file_async(preload)
            markov_router.MODEL_CACHE["default"] = model

        logger.info("[BOOT] Markov Service ready!")
        yield

    except Exception as e:
        logger.error(f"[ERR] Failed to initialize: {e}", exc_info=True)
        raise
    finally:
        logger.info("[SHUTDOWN] Dropping in-memory models...")
        markov_router.MODEL_CACHE.clear()
        logger.info("[SHUTDOWN] Markov Service stopped")


# Create FastAPI app
app = FastAPI(
    title="Markov Text Service",
    description="Markov chain text generation - training, sampling and persistence",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MarkovError)
async def markov_exception_handler(request: Request, exc: MarkovError):
    status = error_status(exc)
    logger.warning(f"[Markov] {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=status,
        content={
            "ok": False,
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERR] Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "AI_SERVICE_ERROR",
                "message": "Internal server error occurred",
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "ok": True,
        "data": {
            "status": "healthy",
            "models": sorted(markov_router.MODEL_CACHE.keys()),
        },
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "markov": "/markov/*",
        },
    }


app.include_router(markov_router.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "markov_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
