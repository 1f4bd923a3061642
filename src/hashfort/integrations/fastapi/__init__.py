"""FastAPI integration for HashFort."""

from hashfort.integrations.fastapi.app import create_app
from hashfort.integrations.fastapi.errors import install_exception_handlers
from hashfort.integrations.fastapi.middleware import register_middleware
from hashfort.integrations.fastapi.router import create_hash_router

__all__ = [
    "create_app",
    "create_hash_router",
    "install_exception_handlers",
    "register_middleware",
]
