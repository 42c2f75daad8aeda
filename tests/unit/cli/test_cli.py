"""Tests for the CLI entry point (typer app).

Validates the default ``check`` action, option and env-var resolution,
exit codes, and an end-to-end run against a fake collector. All network
traffic is mocked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from otel_doctor import __version__
from otel_doctor.cli import EXIT_CONFIG_ERROR, app
from otel_doctor.models.checks import CheckResult
from otel_doctor.models.config import ProbeConfig

runner = CliRunner()

ORIGIN = "http://localhost:5173"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to CliRunner's temporary streams."""
    root = logging.getLogger()
    original_level = root.level
    original_handlers = root.handlers[:]
    yield
    root.setLevel(original_level)
    root.handlers = original_handlers


def _passing() -> list[CheckResult]:
    return [CheckResult(name=f"check {i}", ok=True) for i in range(4)]


def _patch_client(handler: Callable[[httpx.Request], httpx.Response]) -> Any:
    """Route the runner's own AsyncClient through a MockTransport."""
    real_client = httpx.AsyncClient

    def _factory(**kwargs: object) -> httpx.AsyncClient:
        return real_client(transport=httpx.MockTransport(handler), timeout=kwargs.get("timeout"))

    return patch("otel_doctor.services.runner.httpx.AsyncClient", side_effect=_factory)


# ---------------------------------------------------------------------------
# Command registration
# ---------------------------------------------------------------------------


class TestCommandRegistration:
    """Tests that the expected commands and options are exposed."""

    def test_top_level_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for option in ("--collector-health", "--otlp-traces", "--otlp-logs", "--origin"):
            assert option in result.output
        assert "--app-config" in result.output

    def test_check_command_exists(self) -> None:
        result = runner.invoke(app, ["check", "--help"])
        assert result.exit_code == 0
        assert "Run all checks" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    """Tests for the default check action with a mocked runner."""

    def test_no_args_runs_check(self) -> None:
        """Running with no verb defaults to check."""
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=_passing())) as mock_run:
            result = runner.invoke(app, [])

        assert mock_run.called
        assert result.exit_code == 0
        assert "All checks passed" in result.output

    def test_explicit_check(self) -> None:
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=_passing())) as mock_run:
            result = runner.invoke(app, ["check"])

        assert mock_run.call_count == 1
        assert result.exit_code == 0

    def test_failure_exits_nonzero(self) -> None:
        results = [*_passing()[:3], CheckResult(name="guard", ok=False, details="x", fix="y")]
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=results)):
            result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "1 check(s) failed." in result.output

    def test_options_flow_into_config(self, tmp_path: Path) -> None:
        app_config = tmp_path / "embrace.ts"
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=_passing())) as mock_run:
            runner.invoke(
                app,
                [
                    "--collector-health",
                    "http://127.0.0.1:13133/",
                    "--otlp-traces",
                    "http://127.0.0.1:4318/v1/traces",
                    "--otlp-logs",
                    "http://127.0.0.1:4318/v1/logs",
                    "--origin",
                    "http://localhost:3000",
                    "--app-config",
                    str(app_config),
                    "--timeout",
                    "1.5",
                    "--sequential",
                    "check",
                ],
            )

        config: ProbeConfig = mock_run.call_args.args[0]
        assert config.collector_health_url == "http://127.0.0.1:13133/"
        assert config.otlp_traces_url == "http://127.0.0.1:4318/v1/traces"
        assert config.otlp_logs_url == "http://127.0.0.1:4318/v1/logs"
        assert config.origin == "http://localhost:3000"
        assert config.app_config_path == app_config
        assert config.timeout == 1.5
        assert mock_run.call_args.kwargs["concurrent"] is False

    def test_env_vars_supply_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTEL_DOCTOR_ORIGIN", "http://localhost:8080")
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=_passing())) as mock_run:
            runner.invoke(app, [])

        config: ProbeConfig = mock_run.call_args.args[0]
        assert config.origin == "http://localhost:8080"
        assert mock_run.call_args.kwargs["concurrent"] is True

    def test_invalid_url_exits_config_error(self) -> None:
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=_passing())) as mock_run:
            result = runner.invoke(app, ["--otlp-logs", "not-a-url"])

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Invalid configuration" in result.output
        assert not mock_run.called

    def test_verbose_shows_passing_details(self) -> None:
        results = [CheckResult(name="Collector health endpoint reachable", ok=True, details="HTTP 200")]
        with patch("otel_doctor.cli.run_all", AsyncMock(return_value=results)):
            result = runner.invoke(app, ["--verbose"])

        assert "Details: HTTP 200" in result.output


# ---------------------------------------------------------------------------
# End to end against a fake collector
# ---------------------------------------------------------------------------


class TestEndToEnd:
    """Full runs through the real runner with a mocked transport."""

    def test_healthy_lab(self, guarded_config_file: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, text="{}")
            return httpx.Response(204, headers={"Access-Control-Allow-Origin": ORIGIN})

        with _patch_client(handler):
            result = runner.invoke(app, ["--app-config", str(guarded_config_file)])

        assert result.exit_code == 0
        assert result.output.count("✔") == 4
        assert "All checks passed" in result.output

    def test_collector_down(self, guarded_config_file: Path) -> None:
        """Connection refused: all four checks reported, exit non-zero."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        with _patch_client(handler):
            result = runner.invoke(app, ["--app-config", str(guarded_config_file), "--sequential"])

        assert result.exit_code == 1
        assert "✖ Collector health endpoint reachable" in result.output
        assert "✖ CORS preflight passes for /v1/traces" in result.output
        assert "✖ CORS preflight passes for /v1/logs" in result.output
        assert "✔ Embrace config includes ignoreUrls for OTLP endpoints" in result.output
        assert "Connection refused" in result.output
        assert "3 check(s) failed." in result.output
