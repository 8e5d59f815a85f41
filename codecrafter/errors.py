"""
Exception taxonomy for the component generation pipeline.
"""

from typing import Optional


class CodeCrafterError(Exception):
    """Base class for all CodeCrafter errors."""
    pass


class ValidationError(CodeCrafterError):
    """Raised when user input cannot be acted on (empty prompt, nothing to export)."""
    pass


class UnknownFramework(CodeCrafterError):
    """Raised when a framework id is not in the catalog."""

    def __init__(self, framework_id: str):
        super().__init__(f"Unknown framework: {framework_id!r}")
        self.framework_id = framework_id


class ServiceError(CodeCrafterError):
    """A failure reported by the generation service."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class TransientServiceError(ServiceError):
    """The service is temporarily overloaded; the call may succeed on retry."""
    pass


class FatalServiceError(ServiceError):
    """The service rejected the call; retrying the same request will not help."""
    pass
