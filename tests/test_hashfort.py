"""Tests for the HashFort entry point — operations, hooks, and rate limiting."""

import logging

import pytest

from conftest import FAST_OPTIONS
from hashfort import (
    BatchProcessed,
    BatchSizeError,
    EmptyBatchError,
    EngineError,
    EngineFailed,
    HashFort,
    HashOptions,
    Limits,
    PasswordHashed,
    PasswordVerified,
    RateLimitConfig,
    RateLimitError,
    ValidationError,
)
from hashfort.config import FieldLimit
from hashfort.ratelimit import InMemoryStore

pytestmark = pytest.mark.asyncio


class TestOperations:
    async def test_hash_and_verify(self, hf: HashFort):
        hashed = await hf.hash("myPassword123", FAST_OPTIONS)
        assert hashed.startswith("$argon2id$v=19$m=8192,t=1,p=1$")
        assert await hf.verify(hashed, "myPassword123") is True
        assert await hf.verify(hashed, "wrongPassword") is False

    async def test_hash_rejects_empty_password(self, hf: HashFort):
        with pytest.raises(ValidationError):
            await hf.hash("")

    async def test_verify_malformed_hash(self, hf: HashFort):
        with pytest.raises(EngineError) as exc:
            await hf.verify("invalid_hash", "pw")
        assert exc.value.status_code == 400

    async def test_batch_hash(self, hf: HashFort):
        result = await hf.batch_hash(["one", "", "three"], FAST_OPTIONS)
        assert len(result.hashes) == 2
        assert [e.index for e in result.errors] == [1]

    async def test_batch_preconditions(self, hf: HashFort):
        with pytest.raises(EmptyBatchError):
            await hf.batch_hash([])
        with pytest.raises(EmptyBatchError):
            await hf.batch_hash(None)
        with pytest.raises(BatchSizeError):
            await hf.batch_hash(["pw"] * 101)

    async def test_custom_defaults_and_limits(self):
        hf = HashFort(
            defaults=HashOptions(time_cost=1, memory_cost=8192, parallelism=1, salt_length=8),
            limits=Limits(time_cost=FieldLimit(1, 2), batch_size_max=2),
            max_workers=1,
        )
        try:
            hashed = await hf.hash("pw", {"time_cost": 3})
            assert "$m=8192,t=1,p=1$" in hashed
            with pytest.raises(BatchSizeError, match="limited to 2"):
                await hf.batch_hash(["a", "b", "c"])
            assert hf.get_config().limits.batch_size.max == 2
        finally:
            hf.dispose()

    async def test_rejects_defaults_outside_limits(self):
        with pytest.raises(ValueError, match="Default time_cost=50 is outside limits"):
            HashFort(defaults=HashOptions(time_cost=50))
        with pytest.raises(ValueError, match="salt_length"):
            HashFort(defaults=HashOptions(salt_length=8), limits=Limits(salt_length=FieldLimit(16, 32)))

    async def test_default_max_workers(self):
        hf = HashFort()
        try:
            assert 1 <= hf.engine.max_workers <= 4
            assert hf.config.hash_timeout_seconds == 30.0
        finally:
            hf.dispose()


class TestHooks:
    async def test_password_hashed_event(self, hf: HashFort):
        events = []
        hf.add_hook("password_hashed", lambda e: events.append(e))
        await hf.hash("pw", {**FAST_OPTIONS, "salt_length": 20})
        assert len(events) == 1
        assert isinstance(events[0], PasswordHashed)
        assert (events[0].time_cost, events[0].memory_cost, events[0].salt_length) == (1, 8192, 20)

    async def test_overrides_resolved_once(self, hf: HashFort, caplog):
        caplog.set_level(logging.DEBUG, logger="hashfort.validation")
        events = []
        hf.add_hook("password_hashed", lambda e: events.append(e))
        hashed = await hf.hash("pw", {**FAST_OPTIONS, "parallelism": 99})
        assert "$m=8192,t=1,p=1$" in hashed
        assert events[0].parallelism == 1
        ignored = [r for r in caplog.records if r.name == "hashfort.validation"]
        assert len(ignored) == 1

    async def test_password_verified_event(self, hf: HashFort):
        events = []

        @hf.on("password_verified")
        async def handler(event):
            events.append(event)

        hashed = await hf.hash("pw", FAST_OPTIONS)
        await hf.verify(hashed, "nope")
        assert events == [PasswordVerified(timestamp=events[0].timestamp, is_valid=False)]

    async def test_batch_processed_event(self, hf: HashFort):
        events = []
        hf.add_hook("batch_processed", lambda e: events.append(e))
        await hf.batch_hash(["a", "", "c"], FAST_OPTIONS)
        assert isinstance(events[0], BatchProcessed)
        assert (events[0].total, events[0].succeeded, events[0].failed) == (3, 2, 1)

    async def test_engine_failed_event(self, hf: HashFort):
        events = []
        hf.add_hook("engine_failed", lambda e: events.append(e))
        with pytest.raises(EngineError):
            await hf.verify("$argon2id$garbage", "pw")
        assert isinstance(events[0], EngineFailed)
        assert (events[0].operation, events[0].reason) == ("verify", "invalid_hash")

    async def test_no_event_on_validation_error(self, hf: HashFort):
        events = []
        hf.add_hook("password_hashed", lambda e: events.append(e))
        hf.add_hook("engine_failed", lambda e: events.append(e))
        with pytest.raises(ValidationError):
            await hf.hash(None)
        assert events == []

    async def test_hook_errors_are_swallowed(self, hf: HashFort, caplog):
        def broken(event):
            raise RuntimeError("hook exploded")

        hf.add_hook("password_hashed", broken)
        hashed = await hf.hash("pw", FAST_OPTIONS)
        assert hashed.startswith("$argon2id$")
        assert "Hook error in 'password_hashed'" in caplog.text

    async def test_unknown_event_rejected(self, hf: HashFort):
        with pytest.raises(ValueError, match="Unknown event"):
            hf.add_hook("password_leaked", lambda e: None)

    async def test_events_carry_no_secrets(self, hf: HashFort):
        events = []
        hf.add_hook("password_hashed", lambda e: events.append(e))
        hashed = await hf.hash("supersecret", FAST_OPTIONS)
        rendered = repr(events[0])
        assert "supersecret" not in rendered
        assert hashed not in rendered


class TestRateLimit:
    async def test_disabled_by_default(self, hf: HashFort):
        assert hf.rate_limit_store is None
        for _ in range(100):
            await hf.check_rate_limit("hash", "1.2.3.4")

    async def test_limits_per_endpoint_and_ip(self):
        hf = HashFort(rate_limit=RateLimitConfig(hash="2/min", verify=None), max_workers=1)
        try:
            await hf.check_rate_limit("hash", "1.1.1.1")
            await hf.check_rate_limit("hash", "1.1.1.1")
            with pytest.raises(RateLimitError):
                await hf.check_rate_limit("hash", "1.1.1.1")
            await hf.check_rate_limit("hash", "2.2.2.2")
            for _ in range(5):
                await hf.check_rate_limit("verify", "1.1.1.1")
        finally:
            hf.dispose()

    async def test_batch_cost(self):
        events = []
        store = InMemoryStore()
        hf = HashFort(rate_limit=RateLimitConfig(batch_hash="10/min"), rate_limit_store=store, max_workers=1)
        hf.add_hook("rate_limit_exceeded", lambda e: events.append(e))
        try:
            await hf.check_rate_limit("batch_hash", "1.1.1.1", cost=8)
            with pytest.raises(RateLimitError):
                await hf.check_rate_limit("batch_hash", "1.1.1.1", cost=3)
            assert hf.rate_limit_store is store
            assert events[0].endpoint == "batch_hash"
            assert events[0].limit == "10/min"
        finally:
            hf.dispose()
