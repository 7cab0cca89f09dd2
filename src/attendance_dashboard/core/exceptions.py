from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class InputDiscoveryError(DomainError):
    """Raised when the input directory yields nothing to convert."""

    def __init__(self, message: str, *, path: str, warnings: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.warnings = list(warnings or [])


class InputDirectoryError(InputDiscoveryError):
    """Raised when the input directory itself cannot be listed."""


class NoInputFilesError(InputDiscoveryError):
    """Raised when no usable input file remains after filtering."""


class LockHeldError(DomainError):
    """Raised when another process holds the publish lock."""


class DatasetReadError(DomainError):
    """Raised when a published JSON document is missing or unreadable."""


class ResourceNotFoundError(DomainError):
    """Raised when a group, member or session id is not in the published index."""
