"""
Mock Device Server - Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── fixed_now: the instant every pinned clock returns
    ├── synth: Synthesizer with a seeded Random and a frozen clock
    ├── config: a fresh Settings instance
    ├── cash_register: CashRegisterService wired to `synth`
    ├── pos: PosService wired to `synth`
    └── test_client: HTTPX AsyncClient talking to the app in-process
"""

import os
import random
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any app import so Settings() picks it up.
os.environ["LOG_LEVEL"] = "WARNING"

from mock_device_server.config import Settings  # noqa: E402
from mock_device_server.services.cash_register import CashRegisterService  # noqa: E402
from mock_device_server.services.pos import PosService  # noqa: E402
from mock_device_server.services.synth import Synthesizer  # noqa: E402


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 8, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def synth(fixed_now):
    """Deterministic value source: seeded RNG, clock frozen at `fixed_now`."""
    return Synthesizer(rng=random.Random(42), clock=lambda: fixed_now)


@pytest.fixture
def config():
    return Settings()


@pytest.fixture
def cash_register(synth, config):
    return CashRegisterService(synth=synth, config=config)


@pytest.fixture
def pos(synth, config):
    return PosService(synth=synth, config=config)


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; no server
    process and no network.
    """
    from mock_device_server.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
