from __future__ import annotations

"""
Configuration Domain Defaults.

Provides the runtime configuration dictionary that drives the analysis
pipeline. The tool reads no configuration file and no environment variables;
callers override defaults programmatically or through the CLI mapping.
"""

import os
from typing import Any, Dict

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_DECODE_WORKERS = 1


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Input
        "input_path": os.getcwd(),

        # Error policy: skip undecodable files (True) or abort the run (False)
        "skip_malformed": True,

        # Decoding
        "decode_workers": DEFAULT_DECODE_WORKERS,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
    }
