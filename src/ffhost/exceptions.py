"""ffhost exceptions."""

from pathlib import Path
from typing import Any


class FFHostError(Exception):
    """Base exception for ffhost errors."""


class ConfigError(FFHostError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Provisioning Exceptions
# =============================================================================


class ProvisionError(FFHostError):
    """Base exception for binary bundle provisioning.

    Attributes:
        platform: The platform tag being provisioned.
    """

    def __init__(self, message: str, *, platform: str) -> None:
        """Initialize with error message and platform context."""
        super().__init__(message)
        self.platform: str = platform


class ExtractionError(ProvisionError):
    """Raised when the archive extraction tool fails.

    Attributes:
        archive: Path to the archive that could not be extracted.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        platform: str,
        archive: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and archive context."""
        super().__init__(message, platform=platform)
        self.archive: Path = archive
        self.cause: Exception | None = cause


class VerificationError(ProvisionError):
    """Raised when required binaries are missing after provisioning.

    Attributes:
        missing: Paths of the required binaries that do not exist.
    """

    def __init__(
        self,
        message: str,
        *,
        platform: str,
        missing: tuple[Path, ...],
    ) -> None:
        """Initialize with error message and the missing paths."""
        super().__init__(message, platform=platform)
        self.missing: tuple[Path, ...] = missing


# =============================================================================
# Supervisor Exceptions
# =============================================================================


class SupervisorError(FFHostError):
    """Base exception for engine supervision errors."""


class SupervisorNotRunningError(SupervisorError):
    """Raised when an operation needs the supervision loop but it is not active."""


class EngineSpawnError(SupervisorError):
    """Raised when the engine child process cannot be spawned."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        """Initialize with error message and underlying cause."""
        super().__init__(message)
        self.cause: Exception | None = cause
