#!/usr/bin/env python3
"""
Multi-browser test fan-out module.

This module turns a mapping of test names to test functions into one test
unit per (test, browser) pair, and filters units by name.
"""

import re

from ..browser.session import new_remote
from .context import Context


class PatternMatcher:
    """
    Name filter that caches the last compiled pattern.

    The pattern is only recompiled when a different pattern string is seen.
    """

    def __init__(self):
        self.pattern = None
        self.regex = None

    def match(self, pattern, name):
        """
        Report whether name matches pattern anywhere in the string.

        Raises:
            re.error: If the pattern is not a valid regular expression
        """
        if self.regex is None or self.pattern != pattern:
            self.regex = re.compile(pattern)
            self.pattern = pattern
        return self.regex.search(name) is not None


def resolve_browsers(config):
    """
    Resolve the list of browsers to run against.

    Args:
        config: Configuration instance

    Returns:
        list: Browser names in configured order
    """
    if config.internal_chrome:
        return ["chrome"]
    return [browser.strip() for browser in config.browsers.split(",") if browser.strip()]


def unit_name(test_name, browser):
    """
    Name the unit running test_name against browser.

    Only the first letter of each word of the browser name is upper-cased,
    so "MicrosoftEdge" keeps its inner capitals.

    Returns:
        str: Unit name of the form <TestName><Browser>
    """
    return test_name + " ".join(word[:1].upper() + word[1:] for word in browser.split(" "))


def make_test_func(browser, test, config, endpoint=None):
    """
    Create the body of the test unit running test against browser.

    Args:
        browser: Browser name
        test: Test function taking a Context
        config: Configuration instance
        endpoint: URL of the embedded driver, if any

    Returns:
        callable: Function taking the unit's Recorder
    """
    def run(t):
        try:
            driver, quit = new_remote(browser, config, endpoint)
        except Exception as e:
            t.fatalf("Failed to create remote: %s", e)
        try:
            test(Context(driver, t))
        except Exception:
            # Count the crash as a failure before the quit policy runs
            t.fail()
            raise
        finally:
            quit(t.failed())
    return run


def build_units(tests, browsers):
    """
    Pair every test with every browser.

    Args:
        tests: Mapping of test name to test function
        browsers: Resolved browser list

    Returns:
        list: (unit name, browser, test function) tuples, grouped by test
    """
    return [
        (unit_name(name, browser), browser, test)
        for name, test in tests.items()
        for browser in browsers
    ]
