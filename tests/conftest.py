"""Shared test fixtures for the otel-doctor test suite.

Provides sample configs, config artifacts, check results, and a factory for
httpx clients backed by ``httpx.MockTransport`` so no test touches the
network.
"""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from otel_doctor.models import (
    DEFAULT_OTLP_LOGS_URL,
    DEFAULT_OTLP_TRACES_URL,
    CheckResult,
    ProbeConfig,
)

Handler = Callable[[httpx.Request], httpx.Response]

GUARDED_EMBRACE_TS: str = f"""import {{ initSDK }} from "@embrace-io/web-sdk";

const OTLP_TRACES_URL = "{DEFAULT_OTLP_TRACES_URL}";
const OTLP_LOGS_URL = "{DEFAULT_OTLP_LOGS_URL}";

export function startEmbrace() {{
  initSDK({{
    appID: "local-lab",
    defaultInstrumentationConfig: {{
      network: {{
        ignoreUrls: [OTLP_TRACES_URL, OTLP_LOGS_URL],
      }},
    }},
  }});
}}
"""


@pytest.fixture()
def guarded_config_file(tmp_path: Path) -> Path:
    """An embrace.ts that excludes both OTLP endpoints from instrumentation."""
    path = tmp_path / "embrace.ts"
    path.write_text(GUARDED_EMBRACE_TS, encoding="utf-8")
    return path


@pytest.fixture()
def sample_probe_config(guarded_config_file: Path) -> ProbeConfig:
    """Default local-lab config pointing at the guarded artifact."""
    return ProbeConfig(app_config_path=guarded_config_file, timeout=1.0)


@pytest.fixture()
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for AsyncClients that route every request to *handler*."""

    def _make(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture()
def sample_results() -> list[CheckResult]:
    """One passing and one failing check, in registry order."""
    return [
        CheckResult(
            name="Collector health endpoint reachable",
            ok=True,
            details="HTTP 200",
        ),
        CheckResult(
            name="CORS preflight passes for /v1/traces",
            ok=False,
            details="HTTP 204, allow-origin=http://other",
            fix="In otel/otel-collector-config.yaml set cors.allowed_origins\n"
            "Then restart: cd otel && docker compose restart otel-collector",
        ),
    ]
