"""Pytest configuration and fixtures."""

import random

import pytest

from cforce.config.settings import Settings
from cforce.orchestrator import IntelOrchestrator
from tests.fakes import FakeGateway


@pytest.fixture
def settings():
    """Provide settings fixture with fast progress timings."""
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        progress_interval=0.01,
        progress_reset_delay=0.05,
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def orchestrator(settings, gateway):
    return IntelOrchestrator(settings, gateway=gateway, rng=random.Random(7))
