"""
Tests for src/config/environment.py

All tests use temporary directories (via tmp_path fixture) for .env files.
"""

import os

from src.config.environment import load_raw_environment, read_env_file


def write_env(tmp_path, text):
    path = tmp_path / ".env"
    path.write_text(text)
    return path


def test_read_env_file_missing_returns_empty(tmp_path):
    assert read_env_file(tmp_path / "nope.env") == {}
    assert read_env_file(None) == {}


def test_read_env_file_parses_pairs(tmp_path):
    path = write_env(tmp_path, "PORT=9090\n# comment\nNODE_ENV='production'\nBARE_KEY\n")

    values = read_env_file(path)

    assert values == {"PORT": "9090", "NODE_ENV": "production"}


def test_process_environment_wins_over_file(tmp_path):
    path = write_env(tmp_path, "PORT=9090\nLOG_LEVEL=debug\n")

    raw = load_raw_environment(env_file=path, environ={"PORT": "7000"})

    assert raw["PORT"] == "7000"
    assert raw["LOG_LEVEL"] == "debug"


def test_no_env_file(tmp_path):
    raw = load_raw_environment(env_file=None, environ={"A": "1"})
    assert raw == {"A": "1"}


def test_input_environ_is_not_mutated(tmp_path):
    path = write_env(tmp_path, "FROM_FILE=1\n")
    environ = {"A": "1"}

    load_raw_environment(env_file=path, environ=environ)

    assert environ == {"A": "1"}


def test_os_environ_is_not_mutated(tmp_path, monkeypatch):
    monkeypatch.delenv("ONLY_IN_FILE_XYZ", raising=False)
    path = write_env(tmp_path, "ONLY_IN_FILE_XYZ=1\n")

    raw = load_raw_environment(env_file=path)

    assert raw["ONLY_IN_FILE_XYZ"] == "1"
    assert "ONLY_IN_FILE_XYZ" not in os.environ


def test_defaults_to_os_environ(monkeypatch):
    monkeypatch.setenv("PORT", "4321")
    raw = load_raw_environment(env_file=None)
    assert raw["PORT"] == "4321"
