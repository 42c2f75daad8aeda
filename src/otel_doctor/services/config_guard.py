"""Static tripwire for the telemetry SDK export loop.

The SDK's network instrumentation would otherwise capture the exporter's own
requests to the collector. This guard reads the SDK init file as plain text
and looks for the ``ignoreUrls`` marker plus both literal OTLP URLs. It never
parses the file, so an exclusion written through a variable is reported as
missing: a known false negative.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from otel_doctor.models.checks import CheckResult
from otel_doctor.utils.exceptions import ArtifactReadError

logger = logging.getLogger(__name__)

CONFIG_GUARD_CHECK_NAME: Final[str] = "Embrace config includes ignoreUrls for OTLP endpoints"
IGNORE_URLS_MARKER: Final[str] = "ignoreUrls"


def read_config_artifact(path: str | Path) -> str:
    """Read the SDK configuration artifact as UTF-8 text.

    Raises:
        ArtifactReadError: If the file is missing, unreadable, not UTF-8, or
            the path itself is invalid (e.g. contains a NUL byte).
    """
    artifact = Path(path)
    try:
        return artifact.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise ArtifactReadError(
            f"Could not read {artifact}",
            target=str(artifact),
            reason=str(exc) or type(exc).__name__,
        ) from exc


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def check_config_guard(
    path: str | Path,
    traces_url: str,
    logs_url: str,
    *,
    marker: str = IGNORE_URLS_MARKER,
) -> CheckResult:
    """Verify the SDK config excludes both OTLP endpoints from instrumentation.

    Three independent substring tests: the exclusion marker, the literal
    traces URL, the literal logs URL. All three must be present.
    """
    try:
        content = read_config_artifact(path)
    except ArtifactReadError as exc:
        logger.warning("Config guard could not read %s: %s", exc.target, exc.reason)
        return CheckResult(
            name=CONFIG_GUARD_CHECK_NAME,
            ok=False,
            details=f"{exc}: {exc.reason}",
            fix="Pass the correct path: --app-config path/to/embrace.ts",
        )

    has_marker = marker in content
    has_traces = traces_url in content
    has_logs = logs_url in content

    if has_marker and has_traces and has_logs:
        return CheckResult(
            name=CONFIG_GUARD_CHECK_NAME,
            ok=True,
            details=f"{marker} lists {traces_url} and {logs_url}",
        )

    logger.debug(
        "Config guard failed for %s: marker=%s traces=%s logs=%s",
        path,
        has_marker,
        has_traces,
        has_logs,
    )
    return CheckResult(
        name=CONFIG_GUARD_CHECK_NAME,
        ok=False,
        details=(
            f"Found {marker}: {_bool_text(has_marker)}, "
            f"traces URL present: {_bool_text(has_traces)}, "
            f"logs URL present: {_bool_text(has_logs)}"
        ),
        fix=(
            f"In {path} ensure:\n"
            f'defaultInstrumentationConfig: {{ network: {{ {marker}: ["{traces_url}", "{logs_url}"] }} }}'
        ),
    )
