"""
Centralized exception hierarchy for AndroidSdkKit.

This module defines all custom exceptions used across the codebase
to provide clear exception semantics for callers of a resolution pass.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class AndroidSdkKitError(Exception):
    """Base exception for all AndroidSdkKit errors."""

    pass


# ============================================================================
# SDK Location Exceptions
# ============================================================================


class InconsistentStateError(AndroidSdkKitError):
    """
    Raised when a recorded SDK location does not exist on disk.

    A stale record is treated as a misconfiguration, the SDK is never
    re-downloaded silently over it.
    """

    def __init__(self, sdk_dir: str, source: str):
        self.sdk_dir = sdk_dir
        self.source = source
        super().__init__(
            f"Specified SDK directory '{sdk_dir}' in '{source}' is not found."
        )


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallationFailureError(AndroidSdkKitError):
    """Raised when an SDK download or package installation fails."""

    def __init__(
        self,
        message: str,
        package: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        self.package = package
        self.exit_code = exit_code
        super().__init__(message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(AndroidSdkKitError):
    """Build manifest parsing or validation error."""

    pass


# ============================================================================
# Transfer and Archive Exceptions
# ============================================================================


class DownloadError(AndroidSdkKitError):
    """Exception raised when download fails."""

    pass


class ArchiveExtractionError(AndroidSdkKitError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass
