#!/usr/bin/env python3
"""
Main entry point for running a browser test file.

This module loads a Python file of browser tests and runs it against the
configured browsers.
"""

import sys
import traceback

from .cli.argument_parser import create_parser
from .core.suite import collect_tests, load_module
from .testing.runner import main as run_main


def main(argv=None):
    """Main entry point for the testdriver command."""
    parser = create_parser(prog="testdriver")
    parser.add_argument('module', type=str,
                        help='Python file defining TESTS or test_* functions')

    args = sys.argv[1:] if argv is None else argv
    path = parser.parse_known_args(args)[0].module

    try:
        tests = collect_tests(load_module(path))
    except Exception as e:
        print(f"\nError loading {path}: {e}")
        traceback.print_exc()
        return 1

    if not tests:
        print(f"No tests found in {path}")
        return 1

    try:
        return run_main(tests, args, parser, path=path)
    except KeyboardInterrupt:
        print("\nTest run interrupted by user.")
        return 130
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
