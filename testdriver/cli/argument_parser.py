#!/usr/bin/env python3
"""
Command-line argument parsing module.

This module provides functions for setting up and parsing the command-line
arguments recognized by browser test programs.
"""

import argparse
import re
from urllib.parse import urlparse

DEFAULT_REMOTE_URL = "http://localhost:4444/wd/hub"
DEFAULT_BROWSERS = "firefox,chrome,iexplorer"
DEFAULT_TIMEOUT = 120.0

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600, None: 1}


def parse_duration(value):
    """
    Parse a duration such as "120", "120s", "500ms" or "2m" into seconds.

    Args:
        value: Duration string

    Returns:
        float: Duration in seconds

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid duration
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise argparse.ArgumentTypeError(f"invalid duration: {value!r}")
    return float(match.group(1)) * _DURATION_UNITS[match.group(2)]


def create_parser(prog=None):
    """
    Create the command-line argument parser.

    Args:
        prog: Program name shown in usage (default: from sys.argv)

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog=prog,
        description='Run browser tests against one or more WebDriver browsers'
    )

    # WebDriver options
    driver_group = parser.add_argument_group('WebDriver Options')
    driver_group.add_argument('--remote', dest='remote_url', type=str, default=DEFAULT_REMOTE_URL,
                        help=f'Remote WebDriver URL (default: {DEFAULT_REMOTE_URL})')
    driver_group.add_argument('--browsers', type=str, default=DEFAULT_BROWSERS,
                        help=f'Comma-separated list of browsers to run against (default: {DEFAULT_BROWSERS})')
    driver_group.add_argument('--proxy', type=str, default="",
                        help='Proxy the browsers should use for HTTP and SSL (e.g., localhost:8888)')
    driver_group.add_argument('--implicit-wait', type=parse_duration, default=DEFAULT_TIMEOUT,
                        help='Implicit wait timeout, e.g. 120s or 500ms (default: 120s)')
    driver_group.add_argument('--async-script', type=parse_duration, default=DEFAULT_TIMEOUT,
                        help='Async script timeout, e.g. 120s or 500ms (default: 120s)')

    # Session teardown
    quit_group = parser.add_argument_group('Teardown Options')
    quit_group.add_argument('--no-quit', action='store_true',
                        help='Leave every browser open at the end of its test, even if successful')
    quit_group.add_argument('--quit-on-fail', action='store_true',
                        help='Quit the browser even if the test fails (default: keep it open)')

    # Self-contained mode
    internal_group = parser.add_argument_group('Internal Chrome Options')
    internal_group.add_argument('--internal-chrome', action='store_true',
                        help='Launch a local chromedriver for a self contained environment')
    internal_group.add_argument('--webdriver-path', type=str, default=None,
                        help='Path to the chromedriver executable (optional)')

    # Test selection and scheduling
    run_group = parser.add_argument_group('Run Options')
    run_group.add_argument('--run', type=str, default='.*',
                        help='Regular expression selecting the tests to run (default: all)')
    run_group.add_argument('--parallel', type=int, default=1,
                        help='Number of pytest-xdist workers running tests in parallel (default: 1)')
    run_group.add_argument('-v', '--verbose', action='store_true',
                        help='Report every test, including passing ones')

    # Configuration file options
    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (JSON)')
    config_group.add_argument('--save-config', type=str, default=None,
                        help='Save current settings to configuration file')

    return parser


def parse_args(args=None, parser=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse (uses sys.argv if None)
        parser: Parser to use (default: create_parser())

    Returns:
        argparse.Namespace: Parsed arguments

    Raises:
        SystemExit: If arguments are missing or invalid
    """
    parser = parser or create_parser()
    parsed_args = parser.parse_args(args)

    # Validate remote URL
    parsed_url = urlparse(parsed_args.remote_url)
    if not parsed_url.scheme or not parsed_url.netloc:
        parser.error(f"Invalid remote URL: {parsed_args.remote_url}")

    # Validate name pattern early so the run fails before any browser starts
    try:
        re.compile(parsed_args.run)
    except re.error as e:
        parser.error(f"Invalid --run pattern {parsed_args.run!r}: {e}")

    if parsed_args.parallel < 1:
        parser.error(f"--parallel must be at least 1, got {parsed_args.parallel}")

    if parsed_args.internal_chrome and parsed_args.browsers != DEFAULT_BROWSERS:
        print("Warning: --browsers is ignored in internal chrome mode, running chrome only.")

    return parsed_args
