"""Pytest configuration and fixtures.

Provides environment isolation, marker registration, and small fallible
operations shared by the outcome and guard tests. Fixtures marked autouse
apply to every test.
"""

from __future__ import annotations

import logging
import os

import pytest

from tests.helpers import DelayedRequests, Producer

# =============================================================================
# Test Doubles
# =============================================================================


@pytest.fixture
def requests() -> DelayedRequests:
    return DelayedRequests()


@pytest.fixture
def producer() -> Producer:
    return Producer()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "outcomekit.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_outcomekit_env(request, monkeypatch):
    """Clear OUTCOMEKIT_* variables so settings resolve to defaults.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("OUTCOMEKIT_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_asyncio_logger():
    """Keep asyncio debug chatter out of captured records."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioural guarantees of the public surface",
        "allow_dotenv: Permit loading a project .env file",
        "allow_env_pollution: Keep OUTCOMEKIT_* variables from the environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
