"""Standalone FastAPI application serving the full hashing API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

import hashfort
from hashfort.integrations.fastapi.errors import install_exception_handlers
from hashfort.integrations.fastapi.middleware import register_middleware
from hashfort.integrations.fastapi.router import create_hash_router

if TYPE_CHECKING:
    from hashfort.hashfort import HashFort


def create_app(hf: HashFort, *, title: str = "HashFort") -> FastAPI:
    """Build an app with the hashing router, error handlers, and request middleware.

    The engine's worker pool is shut down when the app stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        hf.dispose()

    app = FastAPI(title=title, version=hashfort.__version__, lifespan=lifespan)
    register_middleware(app)
    install_exception_handlers(app, hf.config)
    app.include_router(create_hash_router(hf))
    return app
