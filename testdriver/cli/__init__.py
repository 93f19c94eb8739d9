"""
Command-line interface module for browser test programs.

This package contains modules for parsing command-line arguments
and managing the run configuration.
"""

from .argument_parser import create_parser, parse_args, parse_duration
from .config import Configuration, load_config, load_config_from_args, save_config

__all__ = [
    "create_parser",
    "parse_args",
    "parse_duration",
    "Configuration",
    "load_config",
    "load_config_from_args",
    "save_config",
]
