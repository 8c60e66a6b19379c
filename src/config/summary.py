"""
Startup summary helpers: which integrations are configured, and a
secret-free rendering of the snapshot for logs and the environment check.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional

from src.config.snapshot import ConfigurationSnapshot

# Field names whose values are never printed
SECRET_FIELDS = frozenset({"api_key", "jwt_secret", "database_url", "redis_url"})

REDACTED = "***"


def integration_status(config: ConfigurationSnapshot) -> Dict[str, bool]:
    """Map each external integration to whether it has credentials."""
    return {
        "azure_openai": config.ai.azure.is_configured,
        "openai": bool(config.ai.openai.api_key),
        "anthropic": bool(config.ai.anthropic.api_key),
        "qloo": bool(config.qloo.api_key),
        "coingecko": bool(config.coingecko.api_key),
        "opensea": bool(config.opensea.api_key),
        "farcaster": bool(config.social.farcaster.api_key),
    }


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: (REDACTED if key in SECRET_FIELDS and item else _redact(item))
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(item) for item in value]
    return value


def redacted_view(config: ConfigurationSnapshot) -> Dict[str, Any]:
    """
    Render the snapshot as nested plain dicts with secrets masked.

    Set secrets become "***"; unset ones stay None so an operator can still
    see what is missing. Tuples become lists (JSON-friendly).
    """
    return _redact(dataclasses.asdict(config))


def log_startup_summary(config: ConfigurationSnapshot, logger: Optional[logging.Logger] = None) -> None:
    """
    Log environment, port, and integration status at INFO level.

    Call after `setup_logging`; before that no handler passes INFO records.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info(
        "Configuration loaded (environment=%s, port=%d)",
        config.server.environment,
        config.server.port,
    )
    logger.info("CORS origins: %s", ", ".join(config.cors.origins) or "(none)")
    for name, configured in integration_status(config).items():
        logger.info("%s: %s", name, "configured" if configured else "not configured")
