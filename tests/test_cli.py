"""Tests for the command line entry point."""

import sys

import pytest
from fastapi.testclient import TestClient

from pos_server import cli, http_server
from pos_server.config import API_URL_VARIABLES

VARIABLES = API_URL_VARIABLES + ("POS_OPERATOR_CODE", "POS_TIMEOUT", "POS_LANGUAGE")


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Clean environment in an empty working directory."""
    for name in VARIABLES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["pos-mcp-server", *args])
    cli.main()


def test_http_mode_uses_env_file(env, monkeypatch):
    env_file = env / "pos.env"
    env_file.write_text("POS_API_URL=http://from-env-file.test\nPOS_LANGUAGE=en\n")
    served = {}

    def fake_run_http_server(host, port, reload):
        served.update(host=host, port=port, reload=reload)
        with TestClient(http_server.app) as client:
            served["health"] = client.get("/health").json()
            served["language"] = client.get("/settings/language").json()

    monkeypatch.setattr(http_server, "run_http_server", fake_run_http_server)

    run_cli(monkeypatch, "--mode", "http", "--port", "9000", "--env-file", str(env_file))

    assert served["port"] == 9000
    assert served["reload"] is False
    assert served["health"] == {"status": "healthy", "backend": "http://from-env-file.test"}
    assert served["language"] == {"language": "en"}


def test_http_mode_exits_on_configuration_error(env, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(http_server, "run_http_server", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(SystemExit) as excinfo:
        run_cli(monkeypatch, "--mode", "http", "--env-file", str(env / "missing.env"))

    assert excinfo.value.code == 2
    assert calls == []
    assert "Configuration error" in capsys.readouterr().err


def test_console_mode_exits_on_configuration_error(env, monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(monkeypatch, "--mode", "console", "--env-file", str(env / "missing.env"))

    assert excinfo.value.code == 2
    assert "Backend URL not configured" in capsys.readouterr().err
