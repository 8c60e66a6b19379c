"""
cultural_arbitrage – Main entry point.

Loads and validates the environment configuration, sets up logging, and
reports which integrations are configured. Exits with status 1 if the
environment is invalid.
"""

import sys

from src.config.settings import load_configuration
from src.config.summary import log_startup_summary
from src.config.validator import ConfigurationValidationError
from src.utils.log_setup import setup_logging


def main() -> int:
    """Bootstrap the configuration; return a process exit code."""
    try:
        config = load_configuration()
    except ConfigurationValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(config)
    log_startup_summary(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
