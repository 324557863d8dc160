"""Tests for CLI entry point."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from feature_toggle import __version__
from feature_toggle.cli import app
from feature_toggle.providers.backend import BackendCheckError

runner = CliRunner()


def _write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(body)
    return config_path


def test_cli_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"feature-toggle {__version__}" in result.stdout


def test_cli_version_short():
    result = runner.invoke(app, ["-V"])
    assert result.exit_code == 0
    assert "feature-toggle" in result.stdout


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "check-backend" in result.stdout


def test_cli_check_enabled_flag(tmp_path):
    config_path = _write_config(tmp_path, "static_flags:\n  frontend-example-hello-world: true\n")
    result = runner.invoke(app, ["check", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "New feature enabled!" in result.stdout


def test_cli_check_named_flag_defaults_off(tmp_path):
    config_path = _write_config(tmp_path, "static_flags:\n  other: true\n")
    result = runner.invoke(app, ["check", "unknown-flag", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "Falling back to legacy logic" in result.stdout


def test_cli_check_without_config_uses_defaults(tmp_path):
    result = runner.invoke(app, ["check", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 0
    assert "Frontend check" in result.stdout


def test_cli_check_backend(tmp_path):
    config_path = _write_config(tmp_path, "backend:\n  url: http://backend/api/feature-check\n")
    with patch("feature_toggle.cli.BackendFlagClient.fetch", return_value=True):
        result = runner.invoke(app, ["check-backend", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "Backend check:\nNew feature enabled!" in result.stdout


def test_cli_check_backend_failure_exits_nonzero(tmp_path):
    config_path = _write_config(tmp_path, json.dumps({"flag_name": "x"}))
    with patch("feature_toggle.cli.BackendFlagClient.fetch", side_effect=BackendCheckError("refused")):
        result = runner.invoke(app, ["check-backend", "--config", str(config_path)])
    assert result.exit_code == 1
    assert "Backend API call failed" in result.stdout


def test_cli_check_repeated_hits_cache(tmp_path):
    config_path = _write_config(tmp_path, "static_flags:\n  frontend-example-hello-world: true\n")
    result = runner.invoke(app, ["check", "--times", "3", "--config", str(config_path)])
    assert result.exit_code == 0
    assert result.stdout.count("New feature enabled!") == 3
    assert result.stdout.count("(cached)") == 2


def test_cli_check_backend_repeated_fetches_once(tmp_path):
    config_path = _write_config(tmp_path, "flag_name: x\n")
    with patch("feature_toggle.cli.BackendFlagClient.fetch", return_value=False) as fetch:
        result = runner.invoke(app, ["check-backend", "-n", "2", "--config", str(config_path)])
    assert result.exit_code == 0
    assert result.stdout.count("Falling back to legacy logic") == 2
    assert result.stdout.count("(cached)") == 1
    fetch.assert_called_once()
