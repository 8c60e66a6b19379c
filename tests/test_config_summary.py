"""
Tests for src/config/summary.py
"""

import json
import logging

from src.config.settings import build_configuration
from src.config.summary import REDACTED, integration_status, log_startup_summary, redacted_view


def test_integration_status_defaults_all_unconfigured():
    status = integration_status(build_configuration({}))
    assert not any(status.values())


def test_integration_status_with_keys():
    config = build_configuration({
        "AZURE_OPENAI_API_KEY": "k",
        "AZURE_OPENAI_ENDPOINT": "https://e",
        "QLOO_API_KEY": "q",
    })
    status = integration_status(config)

    assert status["azure_openai"] is True
    assert status["qloo"] is True
    assert status["opensea"] is False


def test_redacted_view_masks_secrets():
    config = build_configuration({
        "OPENAI_API_KEY": "sk-live-123",
        "JWT_SECRET": "jwt-abc",
        "DATABASE_URL": "postgres://u:p@h/db",
    })
    view = redacted_view(config)

    assert view["ai"]["openai"]["api_key"] == REDACTED
    assert view["ai"]["anthropic"]["api_key"] is None
    assert view["security"]["jwt_secret"] == REDACTED
    assert view["storage"]["database_url"] == REDACTED
    assert view["server"]["port"] == 8000
    assert view["cors"]["origins"] == ["http://localhost:3000"]

    dumped = json.dumps(view)
    assert "sk-live-123" not in dumped
    assert "jwt-abc" not in dumped


def test_log_startup_summary(caplog):
    config = build_configuration({"OPENSEA_API_KEY": "o"})
    logger = logging.getLogger("test_summary")

    with caplog.at_level(logging.INFO, logger="test_summary"):
        log_startup_summary(config, logger)

    assert "Configuration loaded (environment=development, port=8000)" in caplog.text
    assert "opensea: configured" in caplog.text
    assert "qloo: not configured" in caplog.text
