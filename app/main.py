from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.responder import build_default_responder


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_responder()
    try:
        yield
    finally:
        build_default_responder.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Mold Data Responder",
        description="Decodes mold data protocol messages and answers reads from stored snapshots.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
