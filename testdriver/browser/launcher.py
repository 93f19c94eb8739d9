#!/usr/bin/env python3
"""
Embedded driver launcher module.

This module starts and stops a local chromedriver process so that tests can
run without a pre-existing remote WebDriver endpoint.
"""

import sys

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager


class LauncherError(RuntimeError):
    """Raised when the embedded driver cannot be started or stopped."""


class DriverLauncher:
    """
    Runs a chromedriver child process and exposes its local URL.

    A single launcher is shared by every test unit of a run.
    """

    def __init__(self, webdriver_path=None, stop_timeout=10):
        """
        Initialize the launcher.

        Args:
            webdriver_path: Path to the chromedriver executable (resolved
                with webdriver-manager when not given)
            stop_timeout: Seconds to wait for the process to exit on stop
        """
        self.webdriver_path = webdriver_path
        self.stop_timeout = stop_timeout
        self.service = None

    @property
    def url(self):
        """Base URL of the running driver, None before start."""
        if self.service is None:
            return None
        return self.service.service_url

    def start(self):
        """
        Start the driver process.

        Returns:
            str: Base URL the driver is listening on

        Raises:
            LauncherError: If the binary cannot be resolved or does not start
        """
        try:
            executable_path = self.webdriver_path or ChromeDriverManager().install()
            service = Service(executable_path=executable_path)
            service.start()
        except (WebDriverException, OSError, ValueError) as e:
            raise LauncherError(f"Error starting internal chrome driver: {e}") from e

        self.service = service
        print(f"Started internal chrome driver at {self.url}")
        return self.url

    def stop(self):
        """
        Stop the driver process.

        Raises:
            LauncherError: If the process is still alive after stopping
        """
        if self.service is None:
            return
        service = self.service
        try:
            service.stop()
            process = getattr(service, "process", None)
            if process is not None and process.poll() is None:
                process.wait(timeout=self.stop_timeout)
        except Exception as e:
            raise LauncherError(f"Error stopping internal chrome driver: {e}") from e
        self.service = None

    def stop_or_exit(self):
        """Stop the driver process, exiting the interpreter if that fails."""
        try:
            self.stop()
        except LauncherError as e:
            print(f"Fatal: {e}", file=sys.stderr)
            sys.exit(1)
