#!/usr/bin/env python3
"""
Configuration management module.

This module provides the Configuration object passed to the session and
fan-out layers, and functionality for loading and saving it as JSON.
"""

import json
import os
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Optional
from urllib.parse import urlparse

from .argument_parser import (DEFAULT_BROWSERS, DEFAULT_REMOTE_URL,
                              DEFAULT_TIMEOUT, create_parser)


@dataclass
class Configuration:
    """
    Configuration for a browser test run.

    This dataclass is built once at startup and passed explicitly to the
    components that need it. Timeouts are in seconds.
    """
    # WebDriver endpoint and browsers
    remote_url: str = DEFAULT_REMOTE_URL
    browsers: str = DEFAULT_BROWSERS
    proxy: str = ""
    implicit_wait: float = DEFAULT_TIMEOUT
    async_script: float = DEFAULT_TIMEOUT

    # Teardown policy
    quit: bool = True
    quit_on_fail: bool = False

    # Self-contained mode
    internal_chrome: bool = False
    webdriver_path: Optional[str] = None

    # Test selection and scheduling
    run: str = ".*"
    parallel: int = 1
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        parsed_url = urlparse(self.remote_url)
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValueError(f"Invalid remote URL: {self.remote_url}")

        if self.implicit_wait < 0:
            raise ValueError(f"implicit_wait must not be negative, got {self.implicit_wait}")
        if self.async_script < 0:
            raise ValueError(f"async_script must not be negative, got {self.async_script}")
        if self.parallel < 1:
            raise ValueError(f"parallel must be at least 1, got {self.parallel}")
        try:
            re.compile(self.run)
        except re.error as e:
            raise ValueError(f"Invalid test name pattern {self.run!r}: {e}") from e

    @classmethod
    def from_args(cls, args):
        """
        Create a Configuration instance from parsed command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            Configuration: Configuration instance
        """
        return cls(
            remote_url=args.remote_url,
            browsers=args.browsers,
            proxy=args.proxy,
            implicit_wait=args.implicit_wait,
            async_script=args.async_script,
            quit=not args.no_quit,
            quit_on_fail=args.quit_on_fail,
            internal_chrome=args.internal_chrome,
            webdriver_path=args.webdriver_path,
            run=args.run,
            parallel=args.parallel,
            verbose=args.verbose,
        )

    def to_dict(self):
        """
        Convert configuration to a dictionary.

        Returns:
            dict: Dictionary representation of the configuration
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict):
        """
        Create a Configuration instance from a dictionary.

        Args:
            config_dict: Dictionary containing configuration parameters

        Returns:
            Configuration: Configuration instance

        Raises:
            KeyError: If the dictionary contains unknown fields
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise KeyError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        return cls(**config_dict)

    def print_summary(self):
        """Print a summary of the configuration."""
        print(f"\nTestdriver configuration:")
        if self.internal_chrome:
            print(f"- WebDriver: internal chromedriver"
                  f"{' at ' + self.webdriver_path if self.webdriver_path else ''}")
        else:
            print(f"- WebDriver: {self.remote_url}")
            print(f"- Browsers: {self.browsers}")
        print(f"- Proxy: {self.proxy or 'None'}")
        print(f"- Timeouts: implicit wait {self.implicit_wait}s, async script {self.async_script}s")
        print(f"- Quit browser on success: {'Yes' if self.quit else 'No'}")
        print(f"- Quit browser on failure: {'Yes' if self.quit and self.quit_on_fail else 'No'}")
        print(f"- Test filter: {self.run}")
        print(f"- Parallel tests: {self.parallel}")
        print()


def load_config(config_file: str) -> Configuration:
    """
    Load configuration from a JSON file.

    Args:
        config_file: Path to the configuration file

    Returns:
        Configuration: Configuration instance

    Raises:
        FileNotFoundError: If the configuration file does not exist
        json.JSONDecodeError: If the configuration file is not valid JSON
        KeyError: If the configuration file has unknown fields
    """
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r') as f:
        config_dict = json.load(f)

    return Configuration.from_dict(config_dict)


def write_config(config: Configuration, config_file: str) -> None:
    """
    Write configuration to a JSON file, creating its directory if needed.

    Args:
        config: Configuration instance
        config_file: Path to the configuration file
    """
    directory = os.path.dirname(os.path.abspath(config_file))
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    with open(config_file, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


def save_config(config: Configuration, config_file: str) -> None:
    """Save configuration to a JSON file and report where it went."""
    write_config(config, config_file)
    print(f"Configuration saved to {config_file}")


def load_config_from_args(args, parser=None):
    """
    Load configuration from command-line arguments or a config file.

    Arguments given explicitly on the command line override values from
    the configuration file.

    Args:
        args: Parsed command-line arguments
        parser: Parser the arguments came from (default: create_parser())

    Returns:
        Configuration: Configuration instance
    """
    if not args.config:
        return Configuration.from_args(args)

    config = load_config(args.config)
    print(f"Loaded configuration from {args.config}")
    return _override_config_from_args(config, args, parser or create_parser())


def _override_config_from_args(config, args, parser):
    """
    Override configuration with explicitly specified command-line arguments.

    Args:
        config: Existing configuration
        args: Parsed command-line arguments
        parser: Parser providing the default values

    Returns:
        Configuration: New configuration, validated again

    Raises:
        ValueError: If the overridden configuration is invalid
    """
    overrides = {}
    for key, value in vars(args).items():
        # Skip if the value is the same as the default
        if value == parser.get_default(key):
            continue
        if key == 'no_quit':
            overrides['quit'] = not value
        elif hasattr(config, key):
            overrides[key] = value

    return replace(config, **overrides)
