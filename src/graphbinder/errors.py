from typing import Optional

__all__ = [
    "BinderError",
    "ConfigurationError",
    "DocumentError",
    "ActivationError",
    "UsageError",
    "UnboundInstanceError",
]


class BinderError(Exception):
    """Base class for all errors raised by the binder."""

    pass


class ConfigurationError(BinderError):
    """Raised when the graph or environment cannot produce a working binder."""

    pass


class DocumentError(ConfigurationError):
    """Raised when a configuration document is not a readable node document."""

    pass


class ActivationError(BinderError):
    """Raised when an implementation cannot be instantiated.

    Attributes:
        implementation: The qualified name that failed to activate.
    """

    def __init__(self, implementation: str, message: Optional[str] = None):
        super().__init__(message or f"Error instantiating {implementation}")
        self.implementation = implementation


class UsageError(BinderError):
    """Raised when the binder is queried in a way its contract does not allow."""

    pass


class UnboundInstanceError(UsageError):
    """Raised when an instance is not bound to any entity of this binder."""

    def __init__(self, instance):
        super().__init__(f"Instance {instance!r} is not bound")
        self.instance = instance
