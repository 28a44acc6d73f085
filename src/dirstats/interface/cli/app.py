from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the interactive lifecycle: logging bootstrap, reading the root
directory from standard input, root validation, scan execution and report
rendering. The CLI takes no flags; the only input is the root path line.
"""

import sys
from typing import Any, Dict, Optional, TextIO

from dirstats.core.pipeline.engine import run_scan
from dirstats.core.pipeline.stages.validator import validate_config
from dirstats.domain.constants import INVALID_ROOT_MESSAGE, ROOT_PROMPT
from dirstats.infra.fs import is_existing_directory, normalize_path
from dirstats.infra.logging import LoggingConfig, configure_logging, get_logger
from dirstats.interface.cli.report import render_report

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        config: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Execute the interactive CLI workflow.

    Args:
        stdin: Input stream providing the root path. Defaults to sys.stdin.
        stdout: Output stream for prompt and report. Defaults to sys.stdout.
        config: Optional runtime configuration. Defaults are used when None.

    Returns:
        int: Process exit code. Rejecting the root is not an error (0).
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    # 1. Configuration and logging bootstrap (diagnostics on stderr)
    cfg, warnings = validate_config(config, strict=False)
    configure_logging(LoggingConfig(level=cfg["log_level"], console=True, log_file=None))
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    # 2. Root acquisition
    print(ROOT_PROMPT, end="", file=stdout, flush=True)
    root = normalize_path(stdin.readline())

    # 3. Pre-flight root verification
    if not is_existing_directory(root):
        logger.debug(f"Rejected root input: '{root}'")
        print(INVALID_ROOT_MESSAGE, file=stdout)
        return 0

    # 4. Scan execution phase
    logger.debug(f"Targeting root directory: {root}")
    try:
        result = run_scan(root, cfg)
    except KeyboardInterrupt:
        logger.warning("Scan interrupted by user.")
        return 130

    # 5. Output rendering phase
    for line in render_report(result):
        print(line, file=stdout)

    return 0

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
