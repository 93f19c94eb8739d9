"""
Testdriver browser testing package.

This package lets browser tests be written against a familiar unit-test
style API: every WebDriver call fails the test on error, and every test is
run once per configured browser.
"""

__version__ = "1.0.0"

from .cli.config import Configuration
from .core.context import Context
from .core.element import Element
from .testing.runner import main, run, run_suite

__all__ = ["Configuration", "Context", "Element", "main", "run", "run_suite"]
