"""Reporting module: formatting helpers and terminal output.

Re-exports all public functions so consumers can import directly:
    from otel_doctor.reporting import render_results, summarize
"""

from otel_doctor.reporting.formatters import (
    ALL_PASSED_MESSAGE,
    indent_continuation,
    summarize,
    summary_message,
)
from otel_doctor.reporting.terminal import render_results

__all__ = [
    # Formatters
    "ALL_PASSED_MESSAGE",
    "indent_continuation",
    "summarize",
    "summary_message",
    # Terminal
    "render_results",
]
