"""Exception hierarchy shared by adapters, services and the CLI."""

from __future__ import annotations


class AzLogicError(Exception):
    """Base class for all azlogic errors."""
    pass


class InvalidIdentifierError(AzLogicError, ValueError):
    """Raised when a stored resource ID cannot be parsed."""
    pass


class ValidationError(AzLogicError, ValueError):
    """Raised when a resource configuration does not match its schema."""
    pass


class TagValidationError(ValidationError):
    pass


class RemoteError(AzLogicError):
    """A failure reported by the remote ARM API.

    Not-found responses are handled by the adapters and never reach callers
    as RemoteError, except where a missing object is itself the failure.
    """

    def __init__(
        self,
        operation: str,
        name: str,
        resource_group: str,
        cause: Exception | str,
    ):
        self.operation = operation
        self.name = name
        self.resource_group = resource_group
        self.cause = cause
        super().__init__(
            f'Error {operation} Logic App Workflow "{name}" '
            f'(Resource Group "{resource_group}"): {cause}'
        )


class ConfigurationError(AzLogicError):
    """Raised when required settings (subscription, credentials) are missing."""
    pass
