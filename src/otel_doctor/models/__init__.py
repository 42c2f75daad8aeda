"""Pydantic v2 models for check results and run configuration.

Re-exports all public models so consumers can import directly:
    from otel_doctor.models import CheckResult, ProbeConfig
"""

from otel_doctor.models.checks import (
    CheckResult,
    CorsProbeResult,
    HttpProbeResult,
    ReportSummary,
)
from otel_doctor.models.config import (
    DEFAULT_APP_CONFIG_PATH,
    DEFAULT_COLLECTOR_HEALTH_URL,
    DEFAULT_ORIGIN,
    DEFAULT_OTLP_LOGS_URL,
    DEFAULT_OTLP_TRACES_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ProbeConfig,
)

__all__ = [
    # Results
    "CheckResult",
    "CorsProbeResult",
    "HttpProbeResult",
    "ReportSummary",
    # Config
    "DEFAULT_APP_CONFIG_PATH",
    "DEFAULT_COLLECTOR_HEALTH_URL",
    "DEFAULT_ORIGIN",
    "DEFAULT_OTLP_LOGS_URL",
    "DEFAULT_OTLP_TRACES_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "ProbeConfig",
]
