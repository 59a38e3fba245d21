"""
Core functionality for AndroidSdkKit.

This package contains the foundational modules that other components depend on.
"""

from .environment import (
    ANDROID_HOME_ENV,
    EnvironmentSnapshot,
    capture_environment,
)

from .platform import (
    detect_os_family,
    clear_platform_cache,
)

from .properties import (
    LOCAL_PROPERTIES_FILE,
    SDK_DIR_PROPERTY,
    LocalProperties,
    parse_properties,
)

from .exceptions import (
    AndroidSdkKitError,
    InconsistentStateError,
    InstallationFailureError,
    ConfigError,
    DownloadError,
    ArchiveExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
)

__all__ = [
    "ANDROID_HOME_ENV",
    "EnvironmentSnapshot",
    "capture_environment",
    "detect_os_family",
    "clear_platform_cache",
    "LOCAL_PROPERTIES_FILE",
    "SDK_DIR_PROPERTY",
    "LocalProperties",
    "parse_properties",
    "AndroidSdkKitError",
    "InconsistentStateError",
    "InstallationFailureError",
    "ConfigError",
    "DownloadError",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
]
