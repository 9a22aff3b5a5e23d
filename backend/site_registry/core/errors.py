"""
Error kinds raised by the site registry.

Callers map these to their own presentation layer; nothing here is retried.
"""


class SiteRegistryError(Exception):
    """Base class for every registry failure."""


class ValidationError(SiteRegistryError):
    """Raised when required fields are missing or malformed on create/update."""


class SiteNotFound(SiteRegistryError):
    """Raised when an id does not resolve to a non-deleted site."""


class InvariantViolation(SiteRegistryError):
    """Raised when a lifecycle transition is not allowed (e.g. purging an active site)."""


class InvalidArgument(SiteRegistryError):
    """Raised for unusable query input such as an empty candidate id set."""


class StorageFailure(SiteRegistryError):
    """Raised when the storage layer fails. The original error is kept as __cause__."""
