"""FastAPI application bootstrap."""

from __future__ import annotations

from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from src.devjournal.config import Config
from src.devjournal.logger import setup_logger

from .dependencies import get_config
from .routes import (
    register_dashboard_routes,
    register_entry_routes,
    register_function_routes,
    register_resume_routes,
)
from .routes.functions import FUNCTIONS_PREFIX


class ApiCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves ``excluded_prefixes`` alone.

    The function endpoints answer their own preflights (204, empty body) and
    attach a fixed header set to every response.
    """

    def __init__(self, app: ASGIApp, excluded_prefixes: Sequence[str] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.excluded_prefixes = tuple(excluded_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.excluded_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Every collaborator (repository, blob store, completion client, JWT
    verifier) is built from ``config`` when given, otherwise from the
    process-wide configuration.
    """
    app_config = config or get_config()
    setup_logger(log_level=app_config.log_level, log_file=app_config.log_file)

    app = FastAPI(title="DevJournal API", version="1.0.0")

    app.add_middleware(
        ApiCORSMiddleware,
        excluded_prefixes=[FUNCTIONS_PREFIX],
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_entry_routes(app)
    register_dashboard_routes(app)
    register_resume_routes(app)
    register_function_routes(app)

    if config is not None:
        app.dependency_overrides[get_config] = lambda: config

    return app


app = create_app()
