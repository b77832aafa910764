from __future__ import annotations

"""
Logging Configuration Models.

Defines the configuration dataclass used to initialize the logging subsystem
and the mapping of level names to native logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        console_fmt: Structural format for terminal output.
    """
    level: str = "WARNING"
    console: bool = True

    console_fmt: str = "%(levelname)s | %(message)s"
