"""Options validator — normalizes untrusted cost parameters and request inputs.

Invalid per-field overrides never reject a request: each one silently falls
back to the configured default for that field, so the returned HashOptions
always satisfies every bound.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from hashfort.config import DEFAULT_LIMITS, DEFAULT_OPTIONS, OPTION_FIELDS, HashOptions, Limits
from hashfort.core.errors import BatchSizeError, EmptyBatchError, ValidationError

logger = logging.getLogger("hashfort.validation")


def is_power_of_two(value: int) -> bool:
    """Return True if value is 2**k for some integer k >= 0."""
    return value > 0 and value & (value - 1) == 0


def _as_int(value: Any) -> int | None:
    """Coerce a JSON number to int if it is integral, else None.

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _accept(name: str, value: Any, limits: Limits) -> int | None:
    number = _as_int(value)
    if number is None or number not in limits.for_field(name):
        return None
    if name == "memory_cost" and not is_power_of_two(number):
        return None
    return number


def validate_password(password: Any) -> str:
    """Raise ValidationError unless password is a non-empty string."""
    if not isinstance(password, str) or not password:
        raise ValidationError("Password must be a non-empty string")
    return password


def validate_hash_string(hash_string: Any) -> str:
    """Raise ValidationError unless hash_string is a non-empty string.

    Structural checks on the tagged hash are left to the hashing engine.
    """
    if not isinstance(hash_string, str) or not hash_string:
        raise ValidationError("Hash must be a non-empty string")
    return hash_string


def validate_options(
    partial: Any,
    *,
    defaults: HashOptions = DEFAULT_OPTIONS,
    limits: Limits = DEFAULT_LIMITS,
) -> HashOptions:
    """Merge caller overrides onto the defaults, keeping only in-bound values.

    Args:
        partial: Client-supplied overrides. Anything other than a mapping
            yields the defaults unchanged. Unknown keys are ignored.
        defaults: Cost profile used for missing or rejected fields.
        limits: Closed bounds each override must fall within.

    Returns:
        A new HashOptions within all bounds.
    """
    if not isinstance(partial, Mapping):
        return defaults

    accepted: dict[str, int] = {}
    for name in OPTION_FIELDS:
        if name not in partial or partial[name] is None:
            continue
        value = _accept(name, partial[name], limits)
        if value is None:
            logger.debug("Ignoring out-of-range %s override: %r", name, partial[name])
            continue
        accepted[name] = value

    return replace(defaults, **accepted)


def validate_batch(passwords: Any, *, limits: Limits = DEFAULT_LIMITS) -> list:
    """Check batch preconditions before the coordinator runs.

    Raises:
        EmptyBatchError: If passwords is not a list or is empty.
        BatchSizeError: If passwords has more than limits.batch_size_max entries.
    """
    if not isinstance(passwords, list) or not passwords:
        raise EmptyBatchError()
    if len(passwords) > limits.batch_size_max:
        raise BatchSizeError(limits.batch_size_max)
    return passwords
