"""CLI entry point for otel-doctor.

Provides the ``otel-doctor`` command. Running it with no subcommand runs
``check``, which verifies the browser SDK -> OTLP/HTTP -> OTel Collector
wiring and exits non-zero if anything is broken.

This is the ONLY module where terminal output outside ``reporting`` is
allowed. Async internals are bridged to typer's synchronous interface via
``asyncio.run()``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from otel_doctor import __version__
from otel_doctor.logging_config import configure_logging
from otel_doctor.models.config import (
    DEFAULT_APP_CONFIG_PATH,
    DEFAULT_COLLECTOR_HEALTH_URL,
    DEFAULT_ORIGIN,
    DEFAULT_OTLP_LOGS_URL,
    DEFAULT_OTLP_TRACES_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ProbeConfig,
)
from otel_doctor.reporting.terminal import render_results
from otel_doctor.services.runner import run_all
from otel_doctor.utils.exceptions import InvalidProbeConfigError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="otel-doctor",
    help="Integration checks for Embrace Web SDK -> OTLP/HTTP -> OTel Collector -> Jaeger",
)

# Rich console for error output
console = Console()

EXIT_CONFIG_ERROR: int = 2
ENV_PREFIX: str = "OTEL_DOCTOR_"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"otel-doctor {__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Global options (shared by every subcommand)
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    collector_health: Annotated[
        str,
        typer.Option(
            "--collector-health",
            help="Collector health endpoint",
            envvar=f"{ENV_PREFIX}COLLECTOR_HEALTH",
        ),
    ] = DEFAULT_COLLECTOR_HEALTH_URL,
    otlp_traces: Annotated[
        str,
        typer.Option(
            "--otlp-traces", help="OTLP traces endpoint", envvar=f"{ENV_PREFIX}OTLP_TRACES"
        ),
    ] = DEFAULT_OTLP_TRACES_URL,
    otlp_logs: Annotated[
        str,
        typer.Option("--otlp-logs", help="OTLP logs endpoint", envvar=f"{ENV_PREFIX}OTLP_LOGS"),
    ] = DEFAULT_OTLP_LOGS_URL,
    origin: Annotated[
        str,
        typer.Option(
            "--origin", help="Browser origin for CORS preflight", envvar=f"{ENV_PREFIX}ORIGIN"
        ),
    ] = DEFAULT_ORIGIN,
    app_config: Annotated[
        str,
        typer.Option(
            "--app-config",
            help="Path to app/src/embrace.ts",
            envvar=f"{ENV_PREFIX}APP_CONFIG",
        ),
    ] = DEFAULT_APP_CONFIG_PATH,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout", help="Per-request timeout in seconds", envvar=f"{ENV_PREFIX}TIMEOUT"
        ),
    ] = DEFAULT_TIMEOUT_SECONDS,
    sequential: Annotated[
        bool, typer.Option("--sequential", help="Run checks one at a time")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = False,
) -> None:
    """Integration checks for the local telemetry lab."""
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        config = ProbeConfig.from_options(
            collector_health_url=collector_health,
            otlp_traces_url=otlp_traces,
            otlp_logs_url=otlp_logs,
            origin=origin,
            app_config_path=app_config,
            timeout=timeout,
        )
    except InvalidProbeConfigError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True, highlight=False)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    ctx.obj = {"config": config, "concurrent": not sequential, "verbose": verbose}

    if ctx.invoked_subcommand is None:
        _run_check(ctx)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@app.command()
def check(ctx: typer.Context) -> None:
    """Run all checks."""
    _run_check(ctx)


def _run_check(ctx: typer.Context) -> None:
    config: ProbeConfig = ctx.obj["config"]
    logger.debug("Running checks with %s", config.model_dump(mode="json"))

    results = asyncio.run(run_all(config, concurrent=ctx.obj["concurrent"]))
    exit_code = render_results(results, show_details=ctx.obj["verbose"])
    raise typer.Exit(code=exit_code)
