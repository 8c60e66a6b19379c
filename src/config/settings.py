"""
Configuration bootstrap for the API server.

**Conceptual**: This module ties the pipeline together:

    raw environment -> validate -> derive -> ConfigurationSnapshot

It runs once, synchronously, before the server starts accepting requests.
Validation failure raises `ConfigurationValidationError` and the process must
not go on to serve traffic; there is no retry.

**Usage pattern**:
  ```python
  from src.config.settings import load_configuration

  config = load_configuration()
  app = create_app(config)
  ```

**Design decision**: There is no module-level singleton and no
`get_settings()` cache. The caller owns the snapshot and passes it to the
components that need it, which keeps initialization order visible and lets
tests build as many independent snapshots as they like.
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from src.config.derivation import derive
from src.config.environment import DEFAULT_ENV_FILE, load_raw_environment
from src.config.snapshot import ConfigurationSnapshot
from src.config.validator import validate
from src.config.variables import VARIABLE_SPECS


def build_configuration(raw: Mapping[str, Optional[str]]) -> ConfigurationSnapshot:
    """
    Validate `raw` against VARIABLE_SPECS and derive the snapshot.

    The table is fixed here: `derive` reads every variable VARIABLE_SPECS
    declares, so a narrower table could not be derived.

    Raises:
        ConfigurationValidationError: If `raw` fails validation.
    """
    return derive(validate(raw, VARIABLE_SPECS))


def load_configuration(
    env_file: Union[str, Path, None] = DEFAULT_ENV_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigurationSnapshot:
    """
    Load the configuration snapshot from the process environment.

    Args:
        env_file: Optional `.env` file whose values fill gaps in `environ`.
        environ: Process environment (defaults to `os.environ`).

    Returns:
        Frozen ConfigurationSnapshot.

    Raises:
        ConfigurationValidationError: If the environment is invalid.
    """
    raw = load_raw_environment(env_file=env_file, environ=environ)
    return build_configuration(raw)
