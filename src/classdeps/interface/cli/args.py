from __future__ import annotations

"""
CLI Argument Definition and Mapping.

The accepted command line is deliberately tiny: at most one positional
directory. Anything else (extra arguments, or an argument starting with
``-``) is a usage error, detected before argparse sees the input so that
argparse never exits the process on its own.
"""

import argparse
from typing import Any, Dict, List

from classdeps.domain.constants import APP_NAME
from classdeps.domain.errors import UsageError

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the classdeps CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "List the classes of a directory of compiled class files in reverse "
            "dependency order, grouping mutually dependent classes."
        ),
        add_help=False,
    )
    p.add_argument(
        "input_path",
        metavar="directory",
        nargs="?",
        default=None,
        help="Directory containing .class files (default: current directory).",
    )
    return p


def usage_line() -> str:
    """Return the one-line usage message, without trailing newline."""
    return build_parser().format_usage().strip()


def check_invocation(argv: List[str]) -> None:
    """
    Reject command lines outside ``[directory]``.

    Raises:
        UsageError: If more than one argument is given, or an option-like one.
    """
    if len(argv) > 1 or (argv and argv[0].startswith("-")):
        raise UsageError(usage_line())

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def parse_args(argv: List[str]) -> argparse.Namespace:
    """Validate the invocation shape, then parse it."""
    check_invocation(argv)
    return build_parser().parse_args(argv)


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}
    overrides["input_path"] = args.input_path
    return overrides
