"""Error types raised while packaging an HTML bundle."""

from typing import Optional


class PackagingError(RuntimeError):
    """Base class for packaging failures attributable to one bundle."""

    def __init__(self, message: str, bundle_id: Optional[str] = None):
        super().__init__(message)
        self.bundle_id = bundle_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.bundle_id:
            return f"{message} (bundle: {self.bundle_id})"
        return message


class PreconditionViolation(PackagingError):
    """Raised when an HTML bundle does not contain exactly one asset."""


class MissingBundleFieldError(PackagingError):
    """Raised when a referenced bundle lacks the target or name needed for its URL."""


class ManifestError(PackagingError):
    """Raised when a bundle graph manifest references unknown ids."""
