"""
Core module containing the test context and multi-browser fan-out.

This package contains the fail-fast wrappers around WebDriver sessions and
elements, the pairing of each test with every configured browser and the
loading of test files.
"""

from .context import Context
from .element import Element
from .errors import BROWSER_ERRORS
from .fanout import (PatternMatcher, build_units, make_test_func,
                     resolve_browsers, unit_name)
from .suite import camel_case, collect_tests, load_module

__all__ = [
    "BROWSER_ERRORS",
    "Context",
    "Element",
    "PatternMatcher",
    "build_units",
    "camel_case",
    "collect_tests",
    "load_module",
    "make_test_func",
    "resolve_browsers",
    "unit_name",
]
