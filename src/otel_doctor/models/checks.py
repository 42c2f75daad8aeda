"""Check and probe result models.

``CheckResult`` is the uniform record every registered check produces.
``HttpProbeResult`` and ``CorsProbeResult`` are the raw outcomes of the two
network probes, before they are turned into check results.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, model_validator


class CheckResult(BaseModel):
    """Outcome of a single diagnostic check.

    ``details`` explains why the check passed or failed (status code, header
    value, error message). ``fix`` is a remediation hint and is only ever set
    on a failed check.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    ok: bool
    details: str | None = None
    fix: str | None = None

    @model_validator(mode="after")
    def _validate_fields(self) -> Self:
        if not self.name.strip():
            msg = "name must be non-empty"
            raise ValueError(msg)
        if self.ok and self.fix is not None:
            msg = "fix must not be set on a passing check"
            raise ValueError(msg)
        return self


class HttpProbeResult(BaseModel):
    """Result of a plain GET probe.

    On transport failure only ``error`` is populated.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    status: int | None = None
    body: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _validate_error_exclusive(self) -> Self:
        if self.error is not None and (self.status is not None or self.body is not None):
            msg = "status/body must be absent when error is set"
            raise ValueError(msg)
        return self


class CorsProbeResult(BaseModel):
    """Result of a CORS preflight (OPTIONS) probe."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    status: int | None = None
    allow_origin: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _validate_error_exclusive(self) -> Self:
        if self.error is not None and (self.status is not None or self.allow_origin is not None):
            msg = "status/allow_origin must be absent when error is set"
            raise ValueError(msg)
        return self


class ReportSummary(BaseModel):
    """Aggregate pass/fail counts for one run."""

    model_config = ConfigDict(frozen=True)

    total: int
    passed: int
    failed: int

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 when every check passed, 1 otherwise."""
        return 0 if self.all_passed else 1
