# src/aws_resource_adapters/domain/core/exceptions.py
from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when a desired state record fails validation before any remote call."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ResourceNotFoundError(DomainException):
    """Raised when the remote object does not exist."""
    def __init__(self, resource_type: str, resource_id: str, last_error: Optional[BaseException] = None):
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.last_error = last_error


class EmptyOutputError(DomainException):
    """Raised when a remote call succeeded but returned no usable payload."""
    def __init__(self, resource_type: str, operation: str, resource_id: str):
        super().__init__(f"{operation} {resource_type} ({resource_id}): empty output")
        self.resource_type = resource_type
        self.operation = operation
        self.resource_id = resource_id
