"""Tests for the cpuguard entry point."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cpuguard import main as entry
from cpuguard.runtime.base_client import RuntimeClientError


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Run from an empty directory with a valid environment."""
    monkeypatch.chdir(tmp_path)  # no stray .env
    monkeypatch.setenv("TRACKED_CONTAINER", "web")
    monkeypatch.setenv("RESTARTED_CONTAINER", "worker")
    monkeypatch.setenv("SLEEP_INTERVAL", "0")
    monkeypatch.setenv("CPU_THRESHOLD", "50")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def _no_logger_setup():
    """Leave loguru's sinks alone during tests."""
    with patch.object(entry, "setup_logger"):
        yield


@pytest.mark.parametrize("missing", ["TRACKED_CONTAINER", "RESTARTED_CONTAINER"])
def test_missing_name_exits_1_without_runtime_call(
    _env: pytest.MonkeyPatch, missing: str
) -> None:
    """An empty name fragment exits with status 1 before touching Docker."""
    _env.setenv(missing, "")

    with patch.object(entry, "DockerRuntimeClient") as client_cls:
        with pytest.raises(SystemExit) as exc_info:
            entry.run()

    assert exc_info.value.code == 1
    client_cls.assert_not_called()


def test_unset_name_exits_1(_env: pytest.MonkeyPatch) -> None:
    """An unset name fragment is treated like an empty one."""
    _env.delenv("TRACKED_CONTAINER")

    with patch.object(entry, "DockerRuntimeClient") as client_cls:
        with pytest.raises(SystemExit) as exc_info:
            entry.run()

    assert exc_info.value.code == 1
    client_cls.assert_not_called()


def test_invalid_interval_does_not_exit(_env: pytest.MonkeyPatch) -> None:
    """A garbage SLEEP_INTERVAL is not a startup error."""
    _env.setenv("SLEEP_INTERVAL", "soon")
    settings = entry.load_settings()
    assert settings.SLEEP_INTERVAL == 0


def test_client_failure_exits_1() -> None:
    """A Docker client that cannot be built exits with status 1."""
    client = MagicMock()
    client.connect = AsyncMock(side_effect=RuntimeClientError("no daemon"))

    with patch.object(entry, "DockerRuntimeClient", return_value=client), \
            patch.object(entry, "MonitorLoop") as loop_cls:
        with pytest.raises(SystemExit) as exc_info:
            entry.run()

    assert exc_info.value.code == 1
    loop_cls.assert_not_called()


def test_run_starts_monitor_and_closes_client() -> None:
    """A clean stop of the loop closes the client and exits 0."""
    client = MagicMock()
    client.connect = AsyncMock()
    client.close = AsyncMock()
    monitor = MagicMock()
    monitor.run = AsyncMock()

    with patch.object(entry, "DockerRuntimeClient", return_value=client), \
            patch.object(entry, "MonitorLoop", return_value=monitor) as loop_cls:
        with pytest.raises(SystemExit) as exc_info:
            entry.run()

    assert exc_info.value.code == 0
    settings, runtime = loop_cls.call_args.args
    assert settings.TRACKED_CONTAINER == "web"
    assert settings.CPU_THRESHOLD == 50.0
    assert runtime is client
    monitor.run.assert_awaited_once_with()
    client.close.assert_awaited_once()


def test_client_closed_when_loop_raises() -> None:
    """The client is closed even if the loop dies."""
    client = MagicMock()
    client.connect = AsyncMock()
    client.close = AsyncMock()
    monitor = MagicMock()
    monitor.run = AsyncMock(side_effect=RuntimeError("boom"))

    with patch.object(entry, "DockerRuntimeClient", return_value=client), \
            patch.object(entry, "MonitorLoop", return_value=monitor):
        with pytest.raises(RuntimeError, match="boom"):
            entry.run()

    client.close.assert_awaited_once()
