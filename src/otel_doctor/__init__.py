"""otel-doctor: integration checks for a browser telemetry SDK feeding a local OTel Collector."""

__version__ = "0.1.0"
