"""HashFort event system — typed events and the hook registry.

Register hooks via @hashfort.on("event_name") to react to hashing activity
(audit logs, metrics, alerting). Hooks run after the operation completes and
are fail-open: errors are logged and never affect the response. Events never
carry passwords or hashes.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable

logger = logging.getLogger("hashfort.events")


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Event:
    """Base event — all events carry a timestamp."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class PasswordHashed(Event):
    """Fired after a single password is hashed."""
    time_cost: int = 0
    memory_cost: int = 0
    parallelism: int = 0
    salt_length: int = 0


@dataclass(frozen=True, slots=True)
class PasswordVerified(Event):
    """Fired after a verification completes (match or mismatch)."""
    is_valid: bool = False


@dataclass(frozen=True, slots=True)
class BatchProcessed(Event):
    """Fired after a batch request is processed."""
    total: int = 0
    succeeded: int = 0
    failed: int = 0


@dataclass(frozen=True, slots=True)
class EngineFailed(Event):
    """Fired when the hashing primitive fails, times out, or rejects a hash."""
    operation: str = ""
    reason: str = ""


@dataclass(frozen=True, slots=True)
class RateLimitExceeded(Event):
    """Fired when a request is rejected by rate limiting."""
    endpoint: str = ""
    ip_address: str | None = None
    limit: str = ""


EVENT_MAP: dict[str, type[Event]] = {
    "password_hashed": PasswordHashed,
    "password_verified": PasswordVerified,
    "batch_processed": BatchProcessed,
    "engine_failed": EngineFailed,
    "rate_limit_exceeded": RateLimitExceeded,
}


# ---------------------------------------------------------------------------
# Hook registry
# ---------------------------------------------------------------------------

HookCallback = Callable[..., Any]


class HookRegistry:
    """Registry for event hook callbacks. Supports multiple listeners per event."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {}

    def register(self, event_name: str, callback: HookCallback) -> None:
        """Register a callback for an event name."""
        if event_name not in EVENT_MAP:
            raise ValueError(
                f"Unknown event '{event_name}'. "
                f"Valid events: {', '.join(sorted(EVENT_MAP))}"
            )
        self._hooks.setdefault(event_name, []).append(callback)

    def get_hooks(self, event_name: str) -> list[HookCallback]:
        return self._hooks.get(event_name, [])

    async def emit(self, event_name: str, event: Event) -> None:
        """Fire all registered callbacks for an event. Fail-open: errors are logged."""
        for callback in self.get_hooks(event_name):
            try:
                if inspect.iscoroutinefunction(callback):
                    await callback(event)
                else:
                    loop = asyncio.get_running_loop()
                    await loop.run_in_executor(None, callback, event)
            except Exception:
                logger.exception(
                    "Hook error in '%s' handler %s.%s",
                    event_name,
                    callback.__module__,
                    callback.__qualname__,
                )
