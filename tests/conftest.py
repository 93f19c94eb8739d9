"""Shared pytest fixtures for testdriver tests.

Fixtures provide a recorder for a single test unit, a mocked WebDriver
session and a configuration with short timeouts.
"""

from unittest.mock import MagicMock

import pytest

from testdriver.cli.config import Configuration
from testdriver.core.context import Context
from testdriver.testing.recorder import Recorder

pytest_plugins = ["pytester"]


@pytest.fixture
def recorder() -> Recorder:
    """Recorder for a unit named Example."""
    return Recorder("Example")


@pytest.fixture
def driver() -> MagicMock:
    """Mocked Selenium WebDriver session."""
    mock = MagicMock(name="driver")
    mock.session_id = "session-1"
    return mock


@pytest.fixture
def context(driver: MagicMock, recorder: Recorder) -> Context:
    """Context wrapping the mocked driver."""
    return Context(driver, recorder)


@pytest.fixture
def config() -> Configuration:
    """Configuration for tests with short timeouts and two browsers."""
    return Configuration(
        remote_url="http://grid.test:4444/wd/hub",
        browsers="firefox,chrome",
        implicit_wait=5,
        async_script=10,
        parallel=2,
    )
