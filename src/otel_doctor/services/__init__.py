"""Probe, config-guard, and runner services.

Re-exports the public entry points so consumers can import directly:
    from otel_doctor.services import DoctorService, probe_cors
"""

from otel_doctor.services.config_guard import check_config_guard, read_config_artifact
from otel_doctor.services.probes import probe_cors, probe_http
from otel_doctor.services.runner import DoctorService, RegisteredCheck, build_registry, run_all

__all__ = [
    # Probes
    "probe_cors",
    "probe_http",
    # Config guard
    "check_config_guard",
    "read_config_artifact",
    # Runner
    "DoctorService",
    "RegisteredCheck",
    "build_registry",
    "run_all",
]
