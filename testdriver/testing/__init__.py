"""
Testing module running browser tests under pytest.

This package contains the outcome recorder handed to each test unit, the
pytest plugin that fans tests out per browser and the suite runner that
invokes pytest.
"""

from .plugin import BrowserTestItem, FanoutPlugin, SuiteFile
from .recorder import Recorder
from .runner import main, run, run_suite

__all__ = ["BrowserTestItem", "FanoutPlugin", "Recorder", "SuiteFile", "main", "run", "run_suite"]
