"""
Pytest configuration and shared fixtures.

This configuration sets up:
- Test markers for categorization
- Settings, registry, limiter and dispatcher fixtures
- A controllable clock for the sliding window limiter
- FakeRedis for the optional tool store
- FastAPI TestClient fixtures for the HTTP transport
"""

from typing import Iterator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from sum_mcp.core.config import Settings
from sum_mcp.services.auth import AuthGate
from sum_mcp.services.rate_limit import SlidingWindowRateLimiter
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.tools.registry import ToolRegistry, build_default_registry


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: Low gear tests for individual components
    - integration: High gear tests across transports and the dispatcher
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across transports")


# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Manually advanced time source for the rate limiter."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings with safe defaults: open auth, no tool store, reference
    rate limit of 10 per 10 seconds.
    """
    return Settings(
        service_name="Sum.Mcp",
        environment="development",
        api_key="",
        redis_url=None,
        rate_limit_permit_limit=10,
        rate_limit_window_seconds=10.0,
        rate_limit_segments_per_window=10,
        tool_timeout_seconds=5.0,
    )


@pytest.fixture
def secured_settings(test_settings: Settings) -> Settings:
    """Settings with the API key set to ``abc``."""
    values = test_settings.model_dump()
    values["api_key"] = "abc"
    return Settings(**values)


# =============================================================================
# Dispatch layer
# =============================================================================


@pytest.fixture
def registry() -> ToolRegistry:
    """Frozen registry holding the built-in catalog."""
    return build_default_registry()


@pytest.fixture
def rate_limiter(fake_clock: FakeClock) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(
        permit_limit=10,
        window_seconds=10.0,
        segments_per_window=10,
        clock=fake_clock,
    )


@pytest.fixture
def dispatcher(
    registry: ToolRegistry, rate_limiter: SlidingWindowRateLimiter
) -> Dispatcher:
    """Dispatcher with an open Auth Gate and the fake-clock limiter."""
    return Dispatcher(
        registry=registry,
        auth_gate=AuthGate(),
        rate_limiter=rate_limiter,
        timeout=5.0,
    )


# =============================================================================
# FakeRedis
# =============================================================================


@pytest.fixture
def fake_redis():
    """
    Create a fake Redis client for testing.

    fakeredis provides a Redis-compatible client without a running server.
    """
    return fakeredis.FakeRedis(decode_responses=True)


# =============================================================================
# HTTP transport
# =============================================================================


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    """TestClient over an open (no API key) application."""
    from sum_mcp.main import create_app

    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def secured_client(secured_settings: Settings) -> Iterator[TestClient]:
    """TestClient over an application requiring the API key ``abc``."""
    from sum_mcp.main import create_app

    with TestClient(create_app(secured_settings)) as test_client:
        yield test_client
