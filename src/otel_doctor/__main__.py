"""Allow ``python -m otel_doctor``."""

from otel_doctor.cli import app

app()
