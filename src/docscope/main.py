"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

# Logging constants defined here (not in constants/) because logging.basicConfig()
# must run before any module imports that might create loggers.
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    level=logging.INFO,
)

# Unify uvicorn loggers with app format
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    uvicorn_logger.addHandler(handler)

from docscope.api.routers import assist, context, search  # noqa: E402
from docscope.config import ConfigError, load_settings  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan handler: validates configuration on startup."""
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        raise

    logger.info(
        f"docscope started (provider={settings.llm_provider}, model={settings.llm_model}, "
        f"context budget={settings.context.max_context_tokens} tokens)"
    )

    yield


app = FastAPI(
    title="docscope",
    description="Context retrieval and token-budgeted prompt assembly over uploaded documents",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(search.router)
app.include_router(context.router)
app.include_router(assist.router)
