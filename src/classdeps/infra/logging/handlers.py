from __future__ import annotations

"""
Logging Handler Tagging.

Marks the handlers created by this package so that reconfiguration removes
only our own handlers and leaves library or test-harness handlers alone.
"""

import logging
import sys

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_classdeps_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as internally managed."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """Check whether a handler carries our internal tag."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    """Build the stderr handler used for diagnostics."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh
