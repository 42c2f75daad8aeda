"""Check registry and runner.

Builds the fixed, ordered list of checks for a ProbeConfig and executes each
one to completion. A failing or crashing check never prevents the others from
running, and results always come back in registry order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Final
from urllib.parse import urlsplit

import httpx

from otel_doctor.models.checks import CheckResult, CorsProbeResult
from otel_doctor.models.config import ProbeConfig
from otel_doctor.services.config_guard import CONFIG_GUARD_CHECK_NAME, check_config_guard
from otel_doctor.services.probes import build_timeout, probe_cors, probe_http

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Check names and remediation text
# ---------------------------------------------------------------------------

HEALTH_CHECK_NAME: Final[str] = "Collector health endpoint reachable"
HEALTH_FIX: Final[str] = "Ensure the collector is running: cd otel && docker compose up -d"
COLLECTOR_CONFIG_PATH: Final[str] = "otel/otel-collector-config.yaml"
MISSING_HEADER: Final[str] = "(missing)"

CheckFn = Callable[[httpx.AsyncClient], Awaitable[CheckResult]]


@dataclass(frozen=True)
class RegisteredCheck:
    """One entry in the check registry."""

    name: str
    run: CheckFn


def cors_check_name(url: str) -> str:
    """Label a CORS check by the URL path it targets, e.g. ``/v1/traces``."""
    return f"CORS preflight passes for {urlsplit(url).path or url}"


def cors_fix(origin: str) -> str:
    return (
        f"In {COLLECTOR_CONFIG_PATH} set cors.allowed_origins to include {origin}\n"
        "Then restart: cd otel && docker compose restart otel-collector"
    )


def _cors_details(result: CorsProbeResult) -> str:
    if result.error is not None:
        return result.error
    return f"HTTP {result.status}, allow-origin={result.allow_origin or MISSING_HEADER}"


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


async def check_collector_health(config: ProbeConfig, client: httpx.AsyncClient) -> CheckResult:
    """GET the collector's health_check extension endpoint."""
    probe = await probe_http(
        config.collector_health_url, client=client, timeout=config.timeout
    )
    details = probe.error if probe.error is not None else f"HTTP {probe.status}"
    if probe.ok:
        return CheckResult(name=HEALTH_CHECK_NAME, ok=True, details=details)
    return CheckResult(name=HEALTH_CHECK_NAME, ok=False, details=details, fix=HEALTH_FIX)


async def check_cors(
    url: str,
    config: ProbeConfig,
    client: httpx.AsyncClient,
) -> CheckResult:
    """Preflight one OTLP endpoint; the collector may apply CORS per route."""
    name = cors_check_name(url)
    probe = await probe_cors(url, config.origin, client=client, timeout=config.timeout)
    details = _cors_details(probe)
    if probe.ok:
        return CheckResult(name=name, ok=True, details=details)
    return CheckResult(name=name, ok=False, details=details, fix=cors_fix(config.origin))


async def check_ignore_urls(config: ProbeConfig) -> CheckResult:
    """Run the static config guard off the event loop."""
    return await asyncio.to_thread(
        check_config_guard,
        config.app_config_path,
        config.otlp_traces_url,
        config.otlp_logs_url,
    )


def build_registry(config: ProbeConfig) -> list[RegisteredCheck]:
    """Return the ordered checks for *config*.

    Order: collector health, CORS for traces, CORS for logs, config guard.
    """
    return [
        RegisteredCheck(
            name=HEALTH_CHECK_NAME,
            run=lambda client: check_collector_health(config, client),
        ),
        RegisteredCheck(
            name=cors_check_name(config.otlp_traces_url),
            run=lambda client: check_cors(config.otlp_traces_url, config, client),
        ),
        RegisteredCheck(
            name=cors_check_name(config.otlp_logs_url),
            run=lambda client: check_cors(config.otlp_logs_url, config, client),
        ),
        RegisteredCheck(
            name=CONFIG_GUARD_CHECK_NAME,
            run=lambda _client: check_ignore_urls(config),
        ),
    ]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class DoctorService:
    """Execute every registered check for one run.

    Usage::

        service = DoctorService(config)
        try:
            results = await service.run_all()
        finally:
            await service.aclose()
    """

    def __init__(
        self,
        config: ProbeConfig,
        *,
        concurrent: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._concurrent = concurrent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=build_timeout(config.timeout))
        self._registry = build_registry(config)

        logger.info(
            "DoctorService initialized with %d checks (concurrent=%s).",
            len(self._registry),
            concurrent,
        )

    async def run_all(self) -> list[CheckResult]:
        """Run all checks and return one result per check, in registry order."""
        outcomes: list[CheckResult | BaseException] = []
        if self._concurrent:
            # gather preserves argument order, not completion order
            outcomes.extend(
                await asyncio.gather(
                    *(check.run(self._client) for check in self._registry),
                    return_exceptions=True,
                )
            )
        else:
            for check in self._registry:
                try:
                    outcomes.append(await check.run(self._client))
                except Exception as exc:  # noqa: BLE001
                    outcomes.append(exc)

        results = [
            self._coerce(check, outcome)
            for check, outcome in zip(self._registry, outcomes, strict=True)
        ]

        failed = sum(1 for result in results if not result.ok)
        logger.info("Checks complete: %d run, %d failed.", len(results), failed)
        return results

    async def aclose(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _coerce(check: RegisteredCheck, outcome: CheckResult | BaseException) -> CheckResult:
        """Turn an escaped exception into a failed result for that check."""
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error("Check %r raised unexpectedly.", check.name, exc_info=outcome)
            return CheckResult(
                name=check.name,
                ok=False,
                details=f"Check crashed: {type(outcome).__name__}: {outcome}",
                fix="Re-run with --verbose and report the traceback.",
            )
        return outcome


async def run_all(config: ProbeConfig, *, concurrent: bool = True) -> list[CheckResult]:
    """Run every registered check for *config* with a run-scoped HTTP client."""
    service = DoctorService(config, concurrent=concurrent)
    try:
        return await service.run_all()
    finally:
        await service.aclose()
