"""
Shared fixtures for WOPR tests.
"""

import pytest

from src.wopr.renderer import Renderer
from helpers import CaptureTransport


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that open real sockets (may be slow)"
    )


@pytest.fixture
def renderer():
    """Renderer that never sleeps."""
    return Renderer(sleep=lambda seconds: None)


@pytest.fixture
def capture():
    return CaptureTransport()
