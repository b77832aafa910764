from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: invocation checks, logging bootstrap,
configuration merging, analysis execution and report printing.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from classdeps.core.pipeline.engine import run_analysis
from classdeps.core.pipeline.validator import validate_config
from classdeps.core.report.render import render_report
from classdeps.domain.config import get_default_config
from classdeps.domain.constants import (
    EXIT_FAILURE,
    EXIT_MISSING_INPUT,
    EXIT_OK,
    EXIT_USAGE,
)
from classdeps.domain.errors import UsageError
from classdeps.infra.logging import LoggingConfig, configure_logging, get_logger
from classdeps.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, config: Optional[Dict[str, Any]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments, excluding the program name.
              Defaults to ``sys.argv[1:]``.
        config: Optional base configuration replacing the defaults.

    Returns:
        int: Process exit code.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    # 1. Invocation shape
    try:
        args = cli_args.parse_args(argv)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    # 2. Configuration
    base_conf = dict(config) if config is not None else get_default_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr)
    configure_logging(LoggingConfig(level=clean_conf["log_level"], console=True))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Pre-flight input verification
    input_path = os.path.abspath(os.path.expanduser(clean_conf["input_path"]))
    if not os.path.isdir(input_path):
        print(f"ERROR: Input directory does not exist: {input_path}", file=sys.stderr)
        return EXIT_MISSING_INPUT

    # 5. Analysis
    result = run_analysis(clean_conf)
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Report
    for line in render_report(result.records, result.groups):
        print(line)

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


if __name__ == "__main__":
    sys.exit(main())
