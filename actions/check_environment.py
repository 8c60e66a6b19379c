#!/usr/bin/env python3
"""
Check the API server environment before deploying or starting it.

**Conceptual**: Runs the same validation and derivation the server runs at
startup, without starting anything. Every problem is printed at once, one
per line, so a broken `.env` or app-settings block can be fixed in one pass.

**Usage**:
    # Check the process environment plus the repo-root .env
    python actions/check_environment.py

    # Check a specific env file
    python actions/check_environment.py --env-file deploy/production.env

    # Ignore any .env file, only look at the process environment
    python actions/check_environment.py --no-env-file

    # Also print the resolved configuration (secrets masked) as JSON
    python actions/check_environment.py --show

**Exit codes**:
  - 0: Environment is valid
  - 1: Environment failed validation
  - 2: Bad arguments (e.g. --env-file does not exist)
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path so we can import src modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config.environment import DEFAULT_ENV_FILE
from src.config.settings import load_configuration
from src.config.summary import integration_status, redacted_view
from src.config.validator import ConfigurationValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the API server environment configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help=f"Path to a .env file. Default: {DEFAULT_ENV_FILE}",
    )

    parser.add_argument(
        "--no-env-file",
        action="store_true",
        help="Do not read any .env file.",
    )

    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the resolved configuration as JSON (secrets masked).",
    )

    return parser


def main(argv=None, environ=None) -> int:
    """
    Main entry point for the environment check.

    **Workflow**:
      1. Parse command-line arguments
      2. Load raw environment (process + optional .env)
      3. Validate and derive the snapshot
      4. Print integration status (and the snapshot with --show)
    """
    args = build_parser().parse_args(argv)

    if args.no_env_file:
        env_file = None
    elif args.env_file is not None:
        env_file = Path(args.env_file)
        if not env_file.is_file():
            print(f"ERROR: Env file not found: {env_file}", file=sys.stderr)
            return 2
    else:
        env_file = DEFAULT_ENV_FILE

    try:
        config = load_configuration(env_file=env_file, environ=environ)
    except ConfigurationValidationError as e:
        print(f"✗ {e}", file=sys.stderr)
        print(f"\n{len(e.issues)} problem(s) found.", file=sys.stderr)
        return 1

    print("=" * 60)
    print("Environment OK")
    print("=" * 60)
    print(f"Environment: {config.server.environment}")
    print(f"Port: {config.server.port}")
    for name, configured in integration_status(config).items():
        print(f"  {'✓' if configured else '✗'} {name}")

    if args.show:
        print(json.dumps(redacted_view(config), indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
