"""Tests for server construction, shutdown policy and CLI entrypoint."""

from __future__ import annotations

import logging
import signal

import pytest
import uvicorn

import app.main as main_module
import app.server as server_module
from app.api.application import create_api_application
from app.server import ServiceServer, server_create
from conftest import FixedMetricsProbe, build_settings


class _ExitCalled(Exception):
    """Raised by the fake `os._exit` to stop the handler."""


def _install_exit_spy(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    exit_codes: list[int] = []

    def _fake_exit(code: int) -> None:
        exit_codes.append(code)
        raise _ExitCalled()

    monkeypatch.setattr(server_module.os, "_exit", _fake_exit)
    monkeypatch.setattr(server_module.logging, "shutdown", lambda *_: None)
    return exit_codes


def test_server_create_binds_configured_address() -> None:
    """Build a server bound to configured host and port without uvicorn access logs.

    Returns:
        None: Assertions validate server configuration.

    Raises:
        AssertionError: Raised when configuration is wrong.
    """

    settings = build_settings(host="127.0.0.1", port=8123)
    server = server_create(create_api_application(settings, FixedMetricsProbe()), settings)

    assert isinstance(server, ServiceServer)
    assert server.config.host == "127.0.0.1"
    assert server.config.port == 8123
    assert server.config.access_log is False
    assert server.config.server_header is False


def test_server_signal_exits_immediately_with_status_zero(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Log the signal and exit the process with code 0 without draining.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate immediate exit.

    Raises:
        AssertionError: Raised when the shutdown policy is wrong.
    """

    exit_codes = _install_exit_spy(monkeypatch)
    server = ServiceServer(uvicorn.Config(app=lambda *_: None), graceful_shutdown=False)

    with caplog.at_level(logging.INFO, logger="app.server"), pytest.raises(_ExitCalled):
        server.handle_exit(signal.SIGTERM, None)

    assert exit_codes == [0]
    assert "Received SIGTERM, shutting down..." in caplog.text
    assert server.should_exit is False


def test_server_signal_drains_when_graceful_shutdown_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """Delegate to uvicorn's draining shutdown when enabled.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate graceful path.

    Raises:
        AssertionError: Raised when the process exits immediately.
    """

    exit_codes = _install_exit_spy(monkeypatch)
    server = ServiceServer(uvicorn.Config(app=lambda *_: None), graceful_shutdown=True)

    server.handle_exit(signal.SIGINT, None)

    assert exit_codes == []
    assert server.should_exit is True


def test_main_exits_nonzero_on_invalid_configuration(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Exit with status 1 when startup configuration is invalid.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate startup failure handling.

    Raises:
        AssertionError: Raised when invalid configuration starts the server.
    """

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main_module, "config_configure_logging", lambda _level: None)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["--port", "70000"])

    assert exit_info.value.code == 1


def test_main_runs_server_with_cli_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Start the server with host and port taken from the command line.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate CLI wiring.

    Raises:
        AssertionError: Raised when overrides are not applied.
    """

    monkeypatch.chdir(tmp_path)
    captured: dict[str, object] = {}

    class _ServerStub:
        def run(self) -> None:
            captured["ran"] = True

    def _fake_server_create(application: object, settings: object) -> _ServerStub:
        captured["settings"] = settings
        return _ServerStub()

    monkeypatch.setattr(main_module, "bootstrap_create_application", lambda settings: object())
    monkeypatch.setattr(main_module, "server_create", _fake_server_create)

    main_module.main(["--host", "127.0.0.1", "--port", "4000"])

    assert captured["ran"] is True
    assert captured["settings"].host == "127.0.0.1"
    assert captured["settings"].port == 4000
