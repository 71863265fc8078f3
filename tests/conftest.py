"""
Pytest configuration for Docker Utility tests.
"""

import logging
import os
import sys

import pytest

# Add the src directory to the Python path
src_path = os.path.join(os.path.dirname(__file__), '..', 'src')
sys.path.insert(0, os.path.abspath(src_path))

# Import test fixtures
from tests.fixtures.runtime_fixtures import *  # noqa: E402,F401,F403

from docker_utility.utils.logger import logger  # noqa: E402


@pytest.fixture(autouse=True)
def reset_log_level():
    """`--debug` raises the shared logger to DEBUG; put it back after each test."""
    level = logger.level
    yield
    logger.setLevel(level)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "requires_docker: marks tests that require Docker to be running"
    )
