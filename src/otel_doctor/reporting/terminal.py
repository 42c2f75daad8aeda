"""Rich-based terminal output for check results.

Uses ``rich.console.Console`` on stdout. Color scheme:
green = pass, red = fail, yellow = fix hint, dim = details.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from otel_doctor.models.checks import CheckResult
from otel_doctor.reporting.formatters import (
    indent_continuation,
    status_marker,
    summarize,
    summary_message,
)

logger = logging.getLogger(__name__)

# Shared console instance for terminal output
console = Console()

# --- Color scheme ---
COLOR_PASS: str = "green"
COLOR_FAIL: str = "red"
COLOR_FIX: str = "yellow"
COLOR_MUTED: str = "dim"

DETAILS_PREFIX: str = "  Details: "
FIX_PREFIX: str = "  Fix: "


def _print(text: str) -> None:
    console.print(text, soft_wrap=True, highlight=False)


def _render_result(result: CheckResult, *, show_details: bool) -> None:
    color = COLOR_PASS if result.ok else COLOR_FAIL
    _print(f"[{color}]{status_marker(result)}[/{color}] {escape(result.name)}")

    if result.details and (show_details or not result.ok):
        details = escape(indent_continuation(result.details, " " * len(DETAILS_PREFIX)))
        _print(f"[{COLOR_MUTED}]{DETAILS_PREFIX}{details}[/{COLOR_MUTED}]")
    if not result.ok and result.fix:
        fix = escape(indent_continuation(result.fix, " " * len(FIX_PREFIX)))
        _print(f"[{COLOR_FIX}]{FIX_PREFIX}{fix}[/{COLOR_FIX}]")


def render_results(results: Sequence[CheckResult], *, show_details: bool = False) -> int:
    """Render every result followed by a summary line.

    Args:
        results: Check results in registry order.
        show_details: Also print details for passing checks.

    Returns:
        The process exit code: 0 when all checks passed, 1 otherwise.
    """
    for result in results:
        _render_result(result, show_details=show_details)

    summary = summarize(results)
    console.print()
    color = COLOR_PASS if summary.all_passed else COLOR_FAIL
    _print(f"[{color}]{escape(summary_message(summary))}[/{color}]")

    logger.debug("Rendered %d results, %d failed.", summary.total, summary.failed)
    return summary.exit_code
