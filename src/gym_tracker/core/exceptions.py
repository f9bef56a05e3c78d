class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFound(DomainError):
    """Raised when an update/delete targets an entity that does not exist."""


class StoreUnavailable(DomainError):
    """Raised when a backend read or write fails during a specific call.

    The original backend exception is kept as ``__cause__``. Callers own the
    retry policy; every store operation is safe to re-issue.
    """


class ConfigurationError(DomainError):
    """Raised while probing the remote store at startup.

    Never surfaced per call: the backend selector turns it into a permanent
    fallback decision.
    """
