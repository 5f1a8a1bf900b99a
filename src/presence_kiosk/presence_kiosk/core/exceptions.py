class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an identifier does not resolve to a known student."""


class StorageError(Exception):
    """Raised when the underlying persistence operation fails."""


class ConcurrentScanError(StorageError):
    """Raised when a scan keeps losing the compare-and-append race."""
