"""HashFort — Argon2id password hashing service for Python."""

__version__ = "1.0.0"

from hashfort.config import FieldLimit, HashOptions, Limits, RateLimitConfig
from hashfort.core.errors import (
    BatchSizeError,
    EmptyBatchError,
    EngineError,
    HashFortError,
    RateLimitError,
    ValidationError,
)
from hashfort.core.schemas import BatchHashResponse, BatchItemError, ConfigResponse
from hashfort.events import (
    BatchProcessed,
    EngineFailed,
    PasswordHashed,
    PasswordVerified,
    RateLimitExceeded,
)
from hashfort.hashfort import HashFort

__all__ = [
    "BatchHashResponse",
    "BatchItemError",
    "BatchProcessed",
    "BatchSizeError",
    "ConfigResponse",
    "EmptyBatchError",
    "EngineError",
    "EngineFailed",
    "FieldLimit",
    "HashFort",
    "HashFortError",
    "HashOptions",
    "Limits",
    "PasswordHashed",
    "PasswordVerified",
    "RateLimitConfig",
    "RateLimitError",
    "RateLimitExceeded",
    "ValidationError",
]
