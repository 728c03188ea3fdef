"""
E-TernakID Web API - FastAPI application.

JSON API over the livestock data layer plus the SSE change stream.
"""

import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from eternak import __version__
from eternak.config import settings
from eternak.db.livestock import create_default_animals, get_sync
from eternak.errors import (
    AnimalNotFoundError,
    EntryNotFoundError,
    InsufficientHealthDataError,
    InvalidRecordError,
    StoreConfigurationError,
    StoreWriteError,
)
from eternak.web.auth import router as access_router
from eternak.web.livestock_routes import router as livestock_router
from eternak.web.log_routes import router as log_router
from eternak.web.prediction_routes import router as prediction_router

logger = logging.getLogger(__name__)

app = FastAPI(title="E-TernakID", version=__version__)

# Background tasks started on startup (store polling)
background_tasks: set[asyncio.Task] = set()


@app.on_event("startup")
async def startup_event():
    """Load the herd, seed an empty store and start polling."""
    from eternak.llm.prompt_logger import enable_prompt_logging, get_logging_status

    if settings.eternak_log_prompts:
        enable_prompt_logging(True)
    status = get_logging_status()
    logger.info("E-TernakID starting up...")
    logger.info(f"  Store backend: {settings.store_backend}")
    logger.info(f"  Prompt file logging: {status['file_logging']} (ETERNAK_LOG_PROMPTS={status['env_ETERNAK_LOG_PROMPTS']})")

    sync = get_sync()
    try:
        sync.load()
    except Exception:
        logger.exception("Could not load livestock on startup, will retry on first request")
        return

    if settings.seed_on_startup and not sync.ids():
        created = await create_default_animals()
        logger.info(f"  Seeded {len(created)} animals into an empty store")

    if settings.sync_poll_seconds > 0:
        task = asyncio.create_task(sync.poll_forever(settings.sync_poll_seconds))
        background_tasks.add(task)
        task.add_done_callback(background_tasks.discard)


@app.on_event("shutdown")
async def shutdown_event():
    for task in list(background_tasks):
        task.cancel()


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(access_router, prefix="/api")
app.include_router(livestock_router, prefix="/api")
app.include_router(log_router, prefix="/api")
app.include_router(prediction_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for the hosting platform."""
    return {"status": "healthy"}


# =============================================================================
# Error Mapping
# =============================================================================


@app.exception_handler(AnimalNotFoundError)
@app.exception_handler(EntryNotFoundError)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidRecordError)
async def invalid_record_handler(request: Request, exc: InvalidRecordError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False, include_input=False)},
    )


@app.exception_handler(InsufficientHealthDataError)
async def insufficient_data_handler(request: Request, exc: InsufficientHealthDataError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreWriteError)
async def store_write_handler(request: Request, exc: StoreWriteError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(StoreConfigurationError)
async def store_configuration_handler(request: Request, exc: StoreConfigurationError):
    logger.error(f"Document store is not configured: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and return the FastAPI application."""
    return app
