"""Exception classes for moddex-bootstrap operations."""


class BootstrapError(Exception):
    """Base exception for moddex-bootstrap operations."""

    error_prefix: str = "Bootstrap failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed (URL, path).

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class ToolMissingError(BootstrapError):
    """Raised when a required transport or archive backend is unavailable."""

    error_prefix = "Missing required tool"


class ResolutionError(BootstrapError):
    """Raised when no release version can be determined."""

    error_prefix = "Version resolution failed"


class TransportError(BootstrapError):
    """Raised when a download or HTTP request fails."""

    error_prefix = "Download failed"

    def __init__(
        self, message: str, url: str | None = None, status: int | None = None
    ) -> None:
        """Initialize transport error.

        Args:
            message: Error message describing the failure.
            url: URL that was being fetched.
            status: HTTP status code, when the server answered.

        """
        super().__init__(message, target=url)
        self.url = url
        self.status = status


class IntegrityError(BootstrapError):
    """Raised when a checksum is missing, unavailable or mismatched."""

    error_prefix = "Integrity check failed"

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        actual: str | None = None,
        target: str | None = None,
    ) -> None:
        """Initialize integrity error.

        Args:
            message: Short reason ("mismatch", "no matching entry", ...).
            expected: Digest listed in the manifest, if any.
            actual: Digest computed from the downloaded bytes, if any.
            target: Artifact filename.

        """
        super().__init__(message, target=target)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        """Return formatted error message including digests if known."""
        base = super().__str__()
        if self.expected and self.actual:
            return f"{base} (expected {self.expected}, got {self.actual})"
        return base


class MaterializationError(BootstrapError):
    """Raised when the bundle cannot be extracted or has no entry point."""

    error_prefix = "Bundle materialization failed"


class ConfigurationError(BootstrapError):
    """Raised when configuration values are invalid."""

    error_prefix = "Invalid configuration"
