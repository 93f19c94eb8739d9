#!/usr/bin/env python3
"""
Browser error module.

This module defines the errors a browser call can raise that fail the
running test instead of escaping from it.
"""

from selenium.common.exceptions import WebDriverException
from urllib3.exceptions import HTTPError

# Errors reported by the driver, and transport errors (MaxRetryError,
# ProtocolError) raised when the driver stops responding mid-session
BROWSER_ERRORS = (WebDriverException, HTTPError)
