"""
Tests for the environment check action and the main bootstrap.
"""

import json
import sys
from pathlib import Path

# Add project root to path so we can import actions module
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actions.check_environment import main as check_main
import main as bootstrap
from src.config.settings import build_configuration
from src.config.validator import ConfigurationValidationError, ValidationIssue


def test_check_valid_environment(capsys):
    code = check_main(["--no-env-file"], environ={"PORT": "9090", "QLOO_API_KEY": "q"})

    out = capsys.readouterr().out
    assert code == 0
    assert "Environment OK" in out
    assert "Port: 9090" in out
    assert "✓ qloo" in out


def test_check_invalid_environment_lists_every_problem(capsys):
    code = check_main(["--no-env-file"], environ={"PORT": "abc", "NODE_ENV": "bogus"})

    captured = capsys.readouterr()
    assert code == 1
    assert "NODE_ENV:" in captured.err
    assert "PORT:" in captured.err
    assert "2 problem(s) found." in captured.err
    assert "problem(s) found" not in captured.out


def test_check_missing_env_file(tmp_path, capsys):
    code = check_main(["--env-file", str(tmp_path / "missing.env")], environ={})

    captured = capsys.readouterr()
    assert code == 2
    assert "not found" in captured.err
    assert captured.out == ""


def test_check_show_masks_secrets(tmp_path, capsys):
    env_file = tmp_path / "prod.env"
    env_file.write_text("OPENAI_API_KEY=sk-secret\nNODE_ENV=production\n")

    code = check_main(["--env-file", str(env_file), "--show"], environ={})

    out = capsys.readouterr().out
    assert code == 0
    assert "sk-secret" not in out
    json_start = out.index("{")
    view = json.loads(out[json_start:])
    assert view["server"]["environment"] == "production"
    assert view["ai"]["openai"]["api_key"] == "***"


def fail_to_load():
    raise ConfigurationValidationError([ValidationIssue("PORT", "expected a base-10 integer, got 'x'")])


def test_main_exits_nonzero_on_invalid_environment(monkeypatch, capsys):
    monkeypatch.setattr(bootstrap, "load_configuration", fail_to_load)

    assert bootstrap.main() == 1
    err = capsys.readouterr().err
    assert "Environment validation failed" in err
    assert "PORT: expected a base-10 integer" in err


def test_main_success(monkeypatch):
    configured = []
    monkeypatch.setattr(bootstrap, "load_configuration", lambda: build_configuration({}))
    monkeypatch.setattr(bootstrap, "setup_logging", configured.append)

    assert bootstrap.main() == 0
    assert configured[0].server.port == 8000


def test_main_sets_up_logging_before_startup_summary(monkeypatch):
    calls = []
    monkeypatch.setattr(bootstrap, "load_configuration", lambda: build_configuration({}))
    monkeypatch.setattr(bootstrap, "setup_logging", lambda config: calls.append("setup_logging"))
    monkeypatch.setattr(bootstrap, "log_startup_summary", lambda config: calls.append("log_startup_summary"))

    assert bootstrap.main() == 0
    assert calls == ["setup_logging", "log_startup_summary"]
