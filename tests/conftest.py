"""Test fixtures for HashFort tests.

All tests run the real argon2-cffi primitive with the cheapest allowed costs.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hashfort import HashFort

# Cheapest cost profile the default limits accept.
FAST_OPTIONS = {"time_cost": 1, "memory_cost": 8192, "parallelism": 1}


@pytest.fixture
def hf():
    """HashFort instance with a small worker pool and no timeout."""
    instance = HashFort(max_workers=2, hash_timeout=None)
    yield instance
    instance.dispose()


@pytest_asyncio.fixture
async def client(hf: HashFort):
    """Async HTTP client against the standalone app."""
    async with AsyncClient(
        transport=ASGITransport(app=hf.create_app()),
        base_url="http://test",
    ) as client:
        yield client
