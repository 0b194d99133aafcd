"""FastAPI application entry point."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from storyforge.api.router import router as api_router
from storyforge.config import get_settings
from storyforge.infrastructure.database import (
    connect_database,
    ensure_indexes,
    get_stories_collection,
)
from storyforge.infrastructure.object_storage import create_s3_client, ensure_bucket

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown.

    A document store or bucket failure here aborts startup.
    """
    logger.info("Starting StoryForge application...")
    logger.info(f"Environment: {settings.environment}")

    mongo_client, database = await connect_database(settings)
    collection = get_stories_collection(database)
    await ensure_indexes(collection)

    s3_client = create_s3_client(settings)
    await asyncio.to_thread(ensure_bucket, s3_client, settings.s3_bucket)

    app.state.stories_collection = collection
    app.state.s3_client = s3_client

    yield

    await mongo_client.close()
    logger.info("Shutting down StoryForge application...")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="StoryForge",
        description="Story and segment storage with direct-to-bucket media uploads",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(api_router)

    @app.get("/health", response_class=PlainTextResponse)
    async def health_check() -> str:
        """Liveness probe."""
        return "OK"

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "storyforge.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
