"""Pure formatting helpers for check reports.

No I/O here: these build strings and summaries that the terminal renderer
prints.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from otel_doctor.models.checks import CheckResult, ReportSummary

PASS_MARKER: Final[str] = "✔"
FAIL_MARKER: Final[str] = "✖"
CONTINUATION_INDENT: Final[str] = "  "

ALL_PASSED_MESSAGE: Final[str] = "All checks passed. Your local Embrace + OTel lab looks healthy."


def summarize(results: Sequence[CheckResult]) -> ReportSummary:
    """Count passed and failed checks."""
    failed = sum(1 for result in results if not result.ok)
    return ReportSummary(total=len(results), passed=len(results) - failed, failed=failed)


def status_marker(result: CheckResult) -> str:
    return PASS_MARKER if result.ok else FAIL_MARKER


def indent_continuation(text: str, indent: str = CONTINUATION_INDENT) -> str:
    """Indent every line after the first so multi-line hints stay aligned."""
    first, *rest = text.splitlines() or [""]
    return "\n".join([first, *(f"{indent}{line}" for line in rest)])


def failure_message(summary: ReportSummary) -> str:
    return f"{summary.failed} check(s) failed."


def summary_message(summary: ReportSummary) -> str:
    """Closing line of the report."""
    if summary.all_passed:
        return ALL_PASSED_MESSAGE
    return failure_message(summary)
