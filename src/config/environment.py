"""
Raw environment source: process environment plus an optional `.env` file.

**Conceptual**: The validator consumes a flat mapping of strings. This module
builds that mapping once, at startup: values from the local `.env` file fill
gaps, and anything already set in the process environment wins.

**Why not `load_dotenv()`?**
  - `load_dotenv` writes into `os.environ`; `dotenv_values` only reads.
  - The result is an ordinary dict that tests can inspect, and the
    precedence (process over file) is explicit in one place.

**Security note**: `.env` holds secrets and must stay out of git.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

# Repository-root .env (src/config/environment.py -> repo root)
DEFAULT_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


def read_env_file(env_file: Union[str, Path, None]) -> Dict[str, str]:
    """
    Read key=value pairs from `env_file`.

    Returns an empty dict when `env_file` is None or does not exist. Keys
    declared without a value (`FOO` on its own line) are dropped, so they
    count as "not set".
    """
    if env_file is None:
        return {}

    path = Path(env_file)
    if not path.is_file():
        logger.debug("No env file at %s", path)
        return {}

    values = {key: value for key, value in dotenv_values(path).items() if value is not None}
    logger.debug("Read %d variable(s) from %s", len(values), path)
    return values


def load_raw_environment(
    env_file: Union[str, Path, None] = DEFAULT_ENV_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Build the raw environment mapping handed to the validator.

    Args:
        env_file: Optional `.env` file. Its values only fill gaps.
        environ: Process environment (defaults to `os.environ`).

    Returns:
        New dict; neither `environ` nor `os.environ` is modified.

    Usage example:
        >>> raw = load_raw_environment(env_file=None, environ={"PORT": "9090"})
        >>> raw["PORT"]
        '9090'
    """
    if environ is None:
        environ = os.environ

    raw = read_env_file(env_file)
    raw.update(environ)
    return raw
