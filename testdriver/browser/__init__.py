"""
Browser module for handling WebDriver sessions and the embedded driver.

This package contains components for opening remote browser sessions with
the configured capabilities and for running a local chromedriver process.
"""

from .launcher import DriverLauncher, LauncherError
from .session import (SessionError, build_capabilities, make_options,
                      new_remote, should_quit)

__all__ = [
    "DriverLauncher",
    "LauncherError",
    "SessionError",
    "build_capabilities",
    "make_options",
    "new_remote",
    "should_quit",
]
