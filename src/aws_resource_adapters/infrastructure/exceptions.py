from typing import Any, List, Optional, Tuple


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class RemoteError(InfrastructureError):
    """Raised when an AWS API call fails for any reason other than not found."""
    def __init__(self, resource_type: str, operation: str, resource_id: str, cause: BaseException):
        super().__init__(f"{operation} {resource_type} ({resource_id}): {cause}", details=cause)
        self.resource_type = resource_type
        self.operation = operation
        self.resource_id = resource_id
        self.cause = cause


class OperationCancelledError(InfrastructureError):
    """Raised when an operation's deadline passed or it was cancelled."""
    def __init__(self, operation: str, reason: str = "cancelled"):
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason


class ConfigurationError(InfrastructureError):
    """Raised when there's an issue with configuration."""
    pass


class CredentialsError(ConfigurationError):
    """Raised when there's an issue with credentials."""
    pass


class WaitTimeoutError(InfrastructureError):
    """Raised when a convergence wait reaches its timeout."""
    def __init__(self, timeout: float, last_status: str, target: List[str]):
        super().__init__(
            f"timeout while waiting for state to become {target!r} "
            f"(last state: {last_status!r}, timeout: {timeout}s)"
        )
        self.timeout = timeout
        self.last_status = last_status
        self.target = target


class UnexpectedStateError(InfrastructureError):
    """Raised when a polled status is neither pending nor target."""
    def __init__(self, status: str, expected: List[str]):
        super().__init__(f"unexpected state {status!r}, wanted one of {expected!r}")
        self.status = status
        self.expected = expected


class SweepError(InfrastructureError):
    """Raised after a sweep pass when one or more deletions failed."""
    def __init__(self, failures: List[Tuple[str, str, BaseException]]):
        summary = "; ".join(f"{rtype} ({rid}): {err}" for rtype, rid, err in failures)
        super().__init__(f"{len(failures)} sweep deletion(s) failed: {summary}", details=failures)
        self.failures = failures
