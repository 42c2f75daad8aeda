"""Centralized logging configuration for the CLI entry point."""

from __future__ import annotations

import logging
import os

LOG_FORMAT: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DEFAULT_LEVEL: str = "WARNING"

_MODULE_LOGGERS: dict[str, str] = {
    "SERVICES": "otel_doctor.services",
    "REPORTING": "otel_doctor.reporting",
    "CLI": "otel_doctor.cli",
}


def configure_logging(
    *,
    level: str = "",
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure root logger for the CLI.

    Priority: verbose > quiet > level param > LOG_LEVEL env > WARNING default.
    Records go to stderr; the report itself is written to stdout.
    Reads LOG_LEVEL_{MODULE} env vars for per-module overrides.
    """
    if verbose:
        effective = logging.DEBUG
    elif quiet:
        effective = logging.ERROR
    elif level:
        effective = getattr(logging, level.upper(), logging.WARNING)
    else:
        env_level = os.environ.get("LOG_LEVEL", DEFAULT_LEVEL)
        effective = getattr(logging, env_level.upper(), logging.WARNING)

    logging.basicConfig(level=effective, format=LOG_FORMAT, force=True)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Apply per-module overrides from env vars
    for key, logger_name in _MODULE_LOGGERS.items():
        env_key = f"LOG_LEVEL_{key}"
        module_level = os.environ.get(env_key)
        if module_level:
            resolved = getattr(logging, module_level.upper(), None)
            if resolved is not None:
                logging.getLogger(logger_name).setLevel(resolved)
