"""FastAPI application -- Script Workbench entrypoint."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import workbench.deps as deps
from workbench.api.parse import router as parse_router
from workbench.settings import load_options

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load options and configure logging."""
    options = load_options()
    if os.environ.get("WORKBENCH_DEV_MODE"):
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName(options.log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    deps._options = options
    logger.info("Script Workbench starting with options: %s", options.model_dump())

    yield

    deps._options = None


app = FastAPI(
    title="Script Workbench",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(parse_router)
