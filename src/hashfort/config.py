"""HashFort configuration — dataclasses for hashing defaults, limits, and rate limits."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class HashOptions:
    """A complete Argon2id cost profile. Always within the configured limits."""

    time_cost: int = 2
    memory_cost: int = 19456  # KiB
    parallelism: int = 1
    salt_length: int = 16

    def to_dict(self) -> dict[str, int]:
        return {
            "time_cost": self.time_cost,
            "memory_cost": self.memory_cost,
            "parallelism": self.parallelism,
            "salt_length": self.salt_length,
        }


@dataclass(frozen=True, slots=True)
class FieldLimit:
    """Closed [min, max] bound for one option field."""

    min: int
    max: int

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True, slots=True)
class Limits:
    """Bounds applied to client-supplied options and batch sizes."""

    time_cost: FieldLimit = FieldLimit(1, 10)
    memory_cost: FieldLimit = FieldLimit(8192, 1048576)  # power of two required
    parallelism: FieldLimit = FieldLimit(1, 16)
    salt_length: FieldLimit = FieldLimit(8, 32)
    batch_size_max: int = 100

    def for_field(self, name: str) -> FieldLimit:
        return getattr(self, name)


OPTION_FIELDS = ("time_cost", "memory_cost", "parallelism", "salt_length")

DEFAULT_OPTIONS = HashOptions()
DEFAULT_LIMITS = Limits()


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """Per-endpoint rate limits. Pass to HashFort to enable rate limiting.

    Format: "{count}/{period}" where period is sec/min/hour/day.
    Set an individual field to None to skip rate limiting for that endpoint.
    Batch requests consume one unit per submitted password.

    Example:
        RateLimitConfig()                       # All defaults
        RateLimitConfig(hash="10/min")          # Override hash only
        RateLimitConfig(verify=None)            # Disable verify limiting
    """

    hash: str | None = "30/min"
    verify: str | None = "60/min"
    batch_hash: str | None = "200/min"

    def __post_init__(self) -> None:
        from hashfort.ratelimit import parse_rate_limit

        for field_name in ("hash", "verify", "batch_hash"):
            value = getattr(self, field_name)
            if value is not None:
                parse_rate_limit(value)


def _default_max_workers() -> int:
    return min(4, os.cpu_count() or 1)


@dataclass(frozen=True, slots=True)
class HashFortConfig:
    """Internal config built by the HashFort constructor. Not user-facing."""

    defaults: HashOptions = DEFAULT_OPTIONS
    limits: Limits = DEFAULT_LIMITS
    max_workers: int = field(default_factory=_default_max_workers)
    hash_timeout_seconds: float | None = 30.0
    rate_limit: RateLimitConfig | None = None
    expose_error_details: bool = False
    trust_proxy: bool = False

    def __post_init__(self) -> None:
        for name in OPTION_FIELDS:
            value = getattr(self.defaults, name)
            bound = self.limits.for_field(name)
            if value not in bound:
                raise ValueError(
                    f"Default {name}={value} is outside limits [{bound.min}, {bound.max}]"
                )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
