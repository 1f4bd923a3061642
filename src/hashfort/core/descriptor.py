"""Config descriptor — read-only view of the defaults and limits."""

from hashfort.config import DEFAULT_LIMITS, DEFAULT_OPTIONS, HashOptions, Limits
from hashfort.core.schemas import (
    BatchSizeLimit,
    ConfigResponse,
    HashOptionsResponse,
    LimitsResponse,
    MemoryCostLimit,
    RangeLimit,
)


def get_config(
    defaults: HashOptions = DEFAULT_OPTIONS,
    limits: Limits = DEFAULT_LIMITS,
) -> ConfigResponse:
    """Describe the compiled-in cost profile and bounds. Pure; reads no request state."""
    return ConfigResponse(
        defaultOptions=HashOptionsResponse(**defaults.to_dict()),
        limits=LimitsResponse(
            time_cost=RangeLimit(min=limits.time_cost.min, max=limits.time_cost.max),
            memory_cost=MemoryCostLimit(min=limits.memory_cost.min, max=limits.memory_cost.max),
            parallelism=RangeLimit(min=limits.parallelism.min, max=limits.parallelism.max),
            salt_length=RangeLimit(min=limits.salt_length.min, max=limits.salt_length.max),
            batch_size=BatchSizeLimit(max=limits.batch_size_max),
        ),
    )
