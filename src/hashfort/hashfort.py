"""HashFort — instance-based configuration and entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hashfort.config import DEFAULT_LIMITS, DEFAULT_OPTIONS, HashFortConfig, HashOptions, Limits, RateLimitConfig
from hashfort.core.batch import process_batch
from hashfort.core.descriptor import get_config
from hashfort.core.engine import HashingEngine
from hashfort.core.errors import EngineError, RateLimitError
from hashfort.core.hashing import hash_one, verify_one
from hashfort.core.schemas import BatchHashResponse, ConfigResponse
from hashfort.core.validation import validate_batch, validate_options
from hashfort.events import (
    BatchProcessed,
    EngineFailed,
    HookRegistry,
    PasswordHashed,
    PasswordVerified,
    RateLimitExceeded,
)
from hashfort.ratelimit import InMemoryStore, RateLimitStore, parse_rate_limit

if TYPE_CHECKING:
    from fastapi import APIRouter, FastAPI

logger = logging.getLogger("hashfort")


class HashFort:
    """Main HashFort instance — holds config, the hashing engine, and hooks.

    Args:
        defaults: Cost profile used when a request omits or fails an override.
        limits: Bounds for option overrides and batch size.
        max_workers: Maximum concurrent Argon2 invocations (default min(4, cpus)).
        hash_timeout: Per-call wall-clock budget in seconds. None disables it.
        rate_limit: RateLimitConfig or None. None = no rate limiting.
        rate_limit_store: Custom RateLimitStore (default: in-memory).
        expose_error_details: If True, 500 responses include the exception text.
        trust_proxy: If True, the client IP for rate limiting is read from
            X-Forwarded-For.
    """

    def __init__(
        self,
        *,
        defaults: HashOptions = DEFAULT_OPTIONS,
        limits: Limits = DEFAULT_LIMITS,
        max_workers: int | None = None,
        hash_timeout: float | None = 30.0,
        rate_limit: RateLimitConfig | None = None,
        rate_limit_store: RateLimitStore | None = None,
        expose_error_details: bool = False,
        trust_proxy: bool = False,
    ) -> None:
        extra = {} if max_workers is None else {"max_workers": max_workers}
        self._config = HashFortConfig(
            defaults=defaults,
            limits=limits,
            hash_timeout_seconds=hash_timeout,
            rate_limit=rate_limit,
            expose_error_details=expose_error_details,
            trust_proxy=trust_proxy,
            **extra,
        )
        self._engine = HashingEngine(
            max_workers=self._config.max_workers,
            timeout_seconds=self._config.hash_timeout_seconds,
            limits=limits,
        )
        self._hooks = HookRegistry()
        self._rate_limit_store = None
        if rate_limit is not None:
            self._rate_limit_store = rate_limit_store or InMemoryStore()

    @property
    def config(self) -> HashFortConfig:
        """Read-only access to the internal config."""
        return self._config

    @property
    def engine(self) -> HashingEngine:
        return self._engine

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def rate_limit_store(self) -> RateLimitStore | None:
        return self._rate_limit_store

    # ------ Event hooks ------

    def on(self, event_name: str):
        """Decorator to register an event hook.

        Usage:
            @hashfort.on("batch_processed")
            async def handle(event):
                print(event.failed)
        """
        def decorator(fn):
            self._hooks.register(event_name, fn)
            return fn
        return decorator

    def add_hook(self, event_name: str, callback) -> None:
        """Register an event hook callback programmatically."""
        self._hooks.register(event_name, callback)

    # ------ Hashing operations ------

    async def hash(self, password: Any, options: Any = None) -> str:
        """Hash a password, applying valid overrides from options.

        Raises:
            ValidationError: If password is empty or not a string.
            EngineError: If hashing fails or times out.
        """
        cfg = self._config
        used = validate_options(options, defaults=cfg.defaults, limits=cfg.limits)
        try:
            result = await hash_one(self._engine, password, used)
        except EngineError as e:
            await self._hooks.emit("engine_failed", EngineFailed(operation="hash", reason=e.reason))
            raise

        await self._hooks.emit("password_hashed", PasswordHashed(**used.to_dict()))
        return result

    async def verify(self, hash_string: Any, password: Any) -> bool:
        """Check a password against a tagged hash.

        Raises:
            ValidationError: If hash or password is empty or not a string.
            EngineError: If the hash is malformed, over limits, or verification times out.
        """
        try:
            is_valid = await verify_one(self._engine, hash_string, password)
        except EngineError as e:
            await self._hooks.emit("engine_failed", EngineFailed(operation="verify", reason=e.reason))
            raise

        await self._hooks.emit("password_verified", PasswordVerified(is_valid=is_valid))
        return is_valid

    async def batch_hash(self, passwords: Any, options: Any = None) -> BatchHashResponse:
        """Hash many passwords with one cost profile. Item failures are reported per index.

        Raises:
            EmptyBatchError: If passwords is missing, not a list, or empty.
            BatchSizeError: If passwords exceeds the configured batch size.
        """
        cfg = self._config
        validate_batch(passwords, limits=cfg.limits)
        result = await process_batch(
            self._engine, passwords, options, defaults=cfg.defaults, limits=cfg.limits,
        )
        await self._hooks.emit(
            "batch_processed",
            BatchProcessed(
                total=len(passwords),
                succeeded=len(result.hashes),
                failed=len(result.errors),
            ),
        )
        return result

    def get_config(self) -> ConfigResponse:
        """Default options and limits, as served by GET /config."""
        return get_config(self._config.defaults, self._config.limits)

    # ------ Rate limiting ------

    async def check_rate_limit(self, endpoint: str, ip_address: str | None, cost: int = 1) -> None:
        """Consume cost units for the client on endpoint.

        No-op when rate limiting is disabled or the endpoint has no limit.

        Raises:
            RateLimitError: If the client has exhausted its window.
        """
        rl = self._config.rate_limit
        if rl is None or self._rate_limit_store is None:
            return
        limit_str = getattr(rl, endpoint)
        if limit_str is None:
            return

        key = f"ip:{ip_address or 'unknown'}:{endpoint}"
        allowed, _, retry_after = self._rate_limit_store.hit(key, parse_rate_limit(limit_str), cost)
        if not allowed:
            logger.info("Rate limit exceeded for %s on %s", ip_address, endpoint)
            await self._hooks.emit(
                "rate_limit_exceeded",
                RateLimitExceeded(endpoint=endpoint, ip_address=ip_address, limit=limit_str),
            )
            raise RateLimitError(retry_after)

    # ------ FastAPI integration ------

    def fastapi_router(self) -> APIRouter:
        """Create a FastAPI router with the hashing endpoints.

        Usage:
            app.include_router(hashfort.fastapi_router())
            install_exception_handlers(app, hashfort.config)
        """
        from hashfort.integrations.fastapi.router import create_hash_router

        return create_hash_router(self)

    def create_app(self, *, title: str = "HashFort") -> FastAPI:
        """Build a standalone FastAPI app serving the full HTTP surface."""
        from hashfort.integrations.fastapi.app import create_app

        return create_app(self, title=title)

    # ------ Lifecycle ------

    def dispose(self) -> None:
        """Shut down the engine's worker pool."""
        self._engine.shutdown()
