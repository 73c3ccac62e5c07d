"""FastAPI application factory for the jencoder token form backend."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jencoder.api.routes_config import router as config_router
from jencoder.api.routes_payload import router as payload_router
from jencoder.api.routes_tokens import router as tokens_router
from jencoder.core.logs import configure_logging
from jencoder.core.settings import AppSettings
from jencoder.db.engine import dispose_engine, init_models


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = AppSettings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        await init_models()
        yield
        await dispose_engine()

    app = FastAPI(
        title="Jencoder - JWT Encoder Tool",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = settings.get_cors_origin_list()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type"],
        )

    app.include_router(tokens_router)
    app.include_router(payload_router)
    app.include_router(config_router)

    return app
