"""
Pytest config.

Pins the repository root on sys.path so the local `rbac_preflight` package
imports without being installed, and shares the fake capability fixtures.
"""

import logging
import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_root_on_syspath()

from test_constants import FakeCapabilities, PreflightTestConstants  # noqa: E402


@pytest.fixture
def fake_capabilities() -> FakeCapabilities:
    return FakeCapabilities()


@pytest.fixture
def namespace() -> str:
    return PreflightTestConstants.DEFAULT_NAMESPACE


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
