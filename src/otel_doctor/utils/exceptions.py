"""Custom exception hierarchy for otel-doctor.

All domain-specific exceptions inherit from DoctorError, which records the
target (URL, path, or option set) the failure relates to. None of these
escape a check run: checks convert them into failed results.
"""


class DoctorError(Exception):
    """Base exception for all otel-doctor failures.

    Attributes:
        target: The URL, file path, or option set involved in the failure.
    """

    def __init__(self, message: str, *, target: str) -> None:
        self.target = target
        super().__init__(message)


class ArtifactReadError(DoctorError):
    """Raised when the SDK configuration artifact cannot be read.

    Attributes:
        reason: The underlying OS or decoding error message.
    """

    def __init__(self, message: str, *, target: str, reason: str) -> None:
        self.reason = reason
        super().__init__(message, target=target)


class InvalidProbeConfigError(DoctorError):
    """Raised when CLI options do not form a valid ProbeConfig."""
