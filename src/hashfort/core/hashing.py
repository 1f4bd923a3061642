"""Single-item handlers — hash or verify one password.

Framework-agnostic. Both functions take the shared HashingEngine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hashfort.config import DEFAULT_LIMITS, DEFAULT_OPTIONS, HashOptions, Limits
from hashfort.core.validation import validate_hash_string, validate_options, validate_password

if TYPE_CHECKING:
    from hashfort.core.engine import HashingEngine


async def hash_one(
    engine: HashingEngine,
    password: Any,
    partial_options: Any = None,
    *,
    defaults: HashOptions = DEFAULT_OPTIONS,
    limits: Limits = DEFAULT_LIMITS,
) -> str:
    """Hash a single password.

    A HashOptions passed as partial_options is taken as already resolved.

    Returns:
        The tagged hash string.

    Raises:
        ValidationError: If password is empty or not a string.
        EngineError: If the primitive fails or exceeds its time budget.
    """
    validate_password(password)
    if isinstance(partial_options, HashOptions):
        options = partial_options
    else:
        options = validate_options(partial_options, defaults=defaults, limits=limits)
    return await engine.hash(password, options)


async def verify_one(engine: HashingEngine, hash_string: Any, password: Any) -> bool:
    """Verify password against a tagged hash.

    A wrong password returns False. A malformed hash, or one whose embedded
    costs exceed the limits, raises EngineError(reason="invalid_hash").

    Raises:
        ValidationError: If either argument is empty or not a string.
    """
    validate_hash_string(hash_string)
    validate_password(password)
    return await engine.verify(hash_string, password)
