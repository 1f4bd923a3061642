"""Hashing engine — argon2-cffi behind a bounded worker pool.

A semaphore sized to the pool caps how many Argon2 invocations run at once
across every request sharing the engine. A call only reaches the pool once
a worker is free, so the optional wall-clock timeout covers the Argon2 work
itself and not the wait for a worker.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar

from argon2 import PasswordHasher, Type, extract_parameters
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from hashfort.config import DEFAULT_LIMITS, HashOptions, Limits
from hashfort.core.errors import ENGINE_FAILURE, ENGINE_INVALID_HASH, ENGINE_TIMEOUT, EngineError

logger = logging.getLogger("hashfort.engine")

HASH_LENGTH = 32

T = TypeVar("T")


def _password_bytes(password: str) -> bytes:
    # Lone surrogates are valid in JSON strings but not in UTF-8.
    return password.encode("utf-8", "surrogatepass")


def _hasher_for(options: HashOptions) -> PasswordHasher:
    return PasswordHasher(
        time_cost=options.time_cost,
        memory_cost=options.memory_cost,
        parallelism=options.parallelism,
        hash_len=HASH_LENGTH,
        salt_len=options.salt_length,
        type=Type.ID,
    )


# Verification reads its parameters from the hash itself.
_verifier = PasswordHasher()


class HashingEngine:
    """Runs the Argon2 primitive off the event loop with bounded concurrency.

    Args:
        max_workers: Maximum concurrent Argon2 invocations.
        timeout_seconds: Per-call wall-clock budget. None disables the guard.
        limits: Upper bounds enforced on parameters embedded in hashes
            submitted for verification.
    """

    def __init__(
        self,
        *,
        max_workers: int = 1,
        timeout_seconds: float | None = None,
        limits: Limits = DEFAULT_LIMITS,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="hashfort-engine",
        )
        self._max_workers = max_workers
        self._slots = asyncio.Semaphore(max_workers)
        self._timeout = timeout_seconds
        self._limits = limits

    @property
    def max_workers(self) -> int:
        return self._max_workers

    # ------ Blocking primitives ------

    def hash_sync(self, password: str, options: HashOptions) -> str:
        """Hash password with the given cost profile. Blocks the calling thread."""
        try:
            return _hasher_for(options).hash(_password_bytes(password))
        except HashingError as e:
            logger.error("Argon2 hashing failed: %s", e)
            raise EngineError("Failed to hash password", reason=ENGINE_FAILURE) from e

    def verify_sync(self, hash_string: str, password: str) -> bool:
        """Check password against an encoded Argon2 hash. Blocks the calling thread.

        Returns False on mismatch. Raises EngineError for malformed hashes and
        for hashes whose cost parameters exceed the configured maxima.
        """
        try:
            params = extract_parameters(hash_string)
        except InvalidHashError as e:
            raise EngineError("Invalid hash format", reason=ENGINE_INVALID_HASH) from e

        limits = self._limits
        if (
            params.time_cost > limits.time_cost.max
            or params.memory_cost > limits.memory_cost.max
            or params.parallelism > limits.parallelism.max
        ):
            raise EngineError("Hash parameters exceed allowed limits", reason=ENGINE_INVALID_HASH)

        try:
            return _verifier.verify(hash_string, _password_bytes(password))
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise EngineError("Invalid hash format", reason=ENGINE_INVALID_HASH) from e

    # ------ Async wrappers ------

    async def _run(self, operation: str, fn: Callable[..., T], *args) -> T:
        await self._slots.acquire()
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, fn, *args)
        future.add_done_callback(self._release)
        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Argon2 %s exceeded %.1fs budget", operation, self._timeout)
            raise EngineError(f"Password {operation} timed out", reason=ENGINE_TIMEOUT) from None

    def _release(self, future: asyncio.Future) -> None:
        # The slot is held until the worker is done, even after a timeout.
        self._slots.release()
        if not future.cancelled():
            future.exception()

    async def hash(self, password: str, options: HashOptions) -> str:
        return await self._run("hashing", self.hash_sync, password, options)

    async def verify(self, hash_string: str, password: str) -> bool:
        return await self._run("verification", self.verify_sync, hash_string, password)

    def shutdown(self) -> None:
        """Stop the worker pool. Queued work is cancelled, running work finishes."""
        self._executor.shutdown(wait=False, cancel_futures=True)
