from __future__ import annotations

"""
Configuration Domain Defaults.

Provides the dict-based runtime configuration driving the scan engine.
The configuration is programmatic only; the CLI always runs on defaults.
"""

from typing import Any, Dict

from dirstats.domain.constants import KEY_MODE_NAME

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Aggregation
        "key_mode": KEY_MODE_NAME,

        # Parallelism (None: detect from the host)
        "hardware_concurrency": None,

        # Diagnostics
        "log_level": "INFO",
    }
