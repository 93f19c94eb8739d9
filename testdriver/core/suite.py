#!/usr/bin/env python3
"""
Test suite loading module.

This module imports a Python file of browser tests and collects the mapping
of test names to test functions it defines.
"""

import importlib.util
import os


def camel_case(name):
    """Convert a function name like test_user_login into UserLogin."""
    if name.startswith("test_"):
        name = name[len("test_"):]
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def load_module(path):
    """
    Import a Python file as a module.

    Args:
        path: Path to the test file

    Returns:
        module: The imported module
    """
    module_name = os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import test file: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def collect_tests(module):
    """
    Collect the tests defined by a module.

    A module either defines a TESTS mapping of test name to function, or
    top-level functions named test_*.

    Args:
        module: Imported test module

    Returns:
        dict: Mapping of test name to test function
    """
    tests = getattr(module, "TESTS", None)
    if tests is not None:
        return dict(tests)

    return {
        camel_case(name): value
        for name, value in vars(module).items()
        if name.startswith("test_") and callable(value)
    }
