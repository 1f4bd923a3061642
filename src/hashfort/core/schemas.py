"""HashFort schemas — request/response models for the hashing API.

Request fields are typed loosely on purpose: type problems are reported by
the validator as 400 errors with a safe message instead of framework 422s.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class HashRequest(BaseModel):
    """Single password hash input."""
    model_config = ConfigDict(extra="ignore")

    password: Any = None
    options: Any = None


class VerifyRequest(BaseModel):
    """Password verification input."""
    model_config = ConfigDict(extra="ignore")

    hash: Any = None
    password: Any = None


class BatchHashRequest(BaseModel):
    """Batch hash input (up to the configured batch size)."""
    model_config = ConfigDict(extra="ignore")

    passwords: Any = None
    options: Any = None


class HashResponse(BaseModel):
    hash: str


class VerifyResponse(BaseModel):
    isValid: bool


class BatchItemError(BaseModel):
    """A single failed batch entry, keyed by its input index."""
    index: int
    message: str


class BatchHashResponse(BaseModel):
    """Batch outcome. Hashes are not index-tagged; see BatchItemError for failures."""
    hashes: list[str]
    errors: list[BatchItemError]


class HashOptionsResponse(BaseModel):
    time_cost: int
    memory_cost: int
    parallelism: int
    salt_length: int


class RangeLimit(BaseModel):
    min: int
    max: int


class MemoryCostLimit(RangeLimit):
    note: str = "Must be a power of 2"


class BatchSizeLimit(BaseModel):
    max: int


class LimitsResponse(BaseModel):
    time_cost: RangeLimit
    memory_cost: MemoryCostLimit
    parallelism: RangeLimit
    salt_length: RangeLimit
    batch_size: BatchSizeLimit


class ConfigResponse(BaseModel):
    """Default options and allowed parameter ranges."""
    defaultOptions: HashOptionsResponse
    limits: LimitsResponse


class HealthResponse(BaseModel):
    status: str


class OverviewResponse(BaseModel):
    status: str
    message: str
    version: str
    endpoints: dict[str, str]
