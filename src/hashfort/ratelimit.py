"""Rate limiting — cost-weighted sliding window with pluggable storage.

Hashing is expensive, so a request may consume more than one unit: a batch
costs one unit per submitted password.
"""

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class RateLimit:
    """Parsed rate limit: max_requests units within window_seconds."""

    max_requests: int
    window_seconds: int


_PERIODS = {
    "sec": 1,
    "min": 60,
    "hour": 3600,
    "day": 86400,
}
_ALIASES = {"second": "sec", "minute": "min"}


def _period_seconds(name: str) -> int | None:
    name = name.strip().lower()
    if name.endswith("s") and name[:-1] in (*_PERIODS, *_ALIASES):
        name = name[:-1]
    return _PERIODS.get(_ALIASES.get(name, name))


def parse_rate_limit(value: str) -> RateLimit:
    """Parse a rate limit string like '30/min' into a RateLimit.

    Periods: sec, second, min, minute, hour, day (and plurals).

    Raises ValueError on invalid format.
    """
    count_str, sep, period_str = value.strip().partition("/")
    if not sep:
        raise ValueError(f"Invalid rate limit format: '{value}'. Expected 'count/period'.")

    try:
        count = int(count_str.strip())
    except ValueError:
        raise ValueError(f"Invalid rate limit count: '{count_str.strip()}'") from None
    if count <= 0:
        raise ValueError(f"Rate limit count must be positive, got {count}")

    window = _period_seconds(period_str)
    if window is None:
        raise ValueError(
            f"Unknown rate limit period: '{period_str.strip()}'. "
            f"Valid periods: {', '.join(sorted((*_PERIODS, *_ALIASES)))}"
        )
    return RateLimit(max_requests=count, window_seconds=window)


@runtime_checkable
class RateLimitStore(Protocol):
    """Protocol for rate limit storage backends. Must be thread-safe."""

    def hit(self, key: str, limit: RateLimit, cost: int = 1) -> tuple[bool, int, float]:
        """Record cost units for key if they fit in the window.

        Returns:
            Tuple of (allowed, remaining, retry_after_seconds). A rejected hit
            records nothing.
        """
        ...

    def reset(self, key: str | None = None) -> None:
        """Reset rate limit state. If key is None, reset all keys."""
        ...


class InMemoryStore:
    """Thread-safe in-memory sliding window.

    Each key holds a deque of (timestamp, cost) entries, oldest first.
    State is per process; multiple workers each enforce their own window.
    """

    def __init__(self, time_func: Callable[[], float] | None = None) -> None:
        self._now = time_func or time.monotonic
        self._windows: dict[str, deque[tuple[float, int]]] = defaultdict(deque)
        self._used: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def hit(self, key: str, limit: RateLimit, cost: int = 1) -> tuple[bool, int, float]:
        now = self._now()
        cutoff = now - limit.window_seconds

        with self._lock:
            window = self._windows[key]
            while window and window[0][0] <= cutoff:
                _, expired = window.popleft()
                self._used[key] -= expired

            used = self._used[key]
            if used + cost > limit.max_requests:
                if not window:
                    # A single request larger than the whole budget never fits.
                    return (False, limit.max_requests - used, float(limit.window_seconds))
                retry_after = window[0][0] + limit.window_seconds - now
                return (False, limit.max_requests - used, max(retry_after, 0.1))

            window.append((now, cost))
            self._used[key] = used + cost
            return (True, limit.max_requests - used - cost, 0.0)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._windows.clear()
                self._used.clear()
            else:
                self._windows.pop(key, None)
                self._used.pop(key, None)
