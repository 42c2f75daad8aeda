"""Resolved run configuration for the diagnostic checks."""

from __future__ import annotations

from pathlib import Path
from typing import Final
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from otel_doctor.utils.exceptions import InvalidProbeConfigError

# ---------------------------------------------------------------------------
# Defaults for a local-only lab deployment
# ---------------------------------------------------------------------------

DEFAULT_COLLECTOR_HEALTH_URL: Final[str] = "http://localhost:13133/"
DEFAULT_OTLP_TRACES_URL: Final[str] = "http://localhost:4318/v1/traces"
DEFAULT_OTLP_LOGS_URL: Final[str] = "http://localhost:4318/v1/logs"
DEFAULT_ORIGIN: Final[str] = "http://localhost:5173"
DEFAULT_APP_CONFIG_PATH: Final[str] = "app/src/embrace.ts"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 5.0

_ALLOWED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})


class ProbeConfig(BaseModel):
    """URLs, origin and artifact path every check runs against.

    Built once per run by the CLI layer and passed explicitly to each
    check; never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    collector_health_url: str = DEFAULT_COLLECTOR_HEALTH_URL
    otlp_traces_url: str = DEFAULT_OTLP_TRACES_URL
    otlp_logs_url: str = DEFAULT_OTLP_LOGS_URL
    origin: str = DEFAULT_ORIGIN
    app_config_path: Path = Path(DEFAULT_APP_CONFIG_PATH)
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("collector_health_url", "otlp_traces_url", "otlp_logs_url")
    @classmethod
    def _validate_http_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in _ALLOWED_SCHEMES or not parts.netloc:
            msg = f"expected an http(s) URL with a host, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("origin")
    @classmethod
    def _validate_origin(cls, value: str) -> str:
        if not value.strip():
            msg = "origin must be non-empty"
            raise ValueError(msg)
        return value

    @classmethod
    def from_options(
        cls,
        *,
        collector_health_url: str,
        otlp_traces_url: str,
        otlp_logs_url: str,
        origin: str,
        app_config_path: str | Path,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> ProbeConfig:
        """Build a config from raw option values.

        Raises:
            InvalidProbeConfigError: If any value fails validation.
        """
        try:
            return cls(
                collector_health_url=collector_health_url,
                otlp_traces_url=otlp_traces_url,
                otlp_logs_url=otlp_logs_url,
                origin=origin,
                app_config_path=Path(app_config_path),
                timeout=timeout,
            )
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidProbeConfigError(
                f"Invalid configuration: {problems}",
                target="options",
            ) from exc
