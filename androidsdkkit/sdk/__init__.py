"""
Android SDK location and provisioning.

Available Components:
--------------------
- SdkLocator: Ordered search for an SDK installation
- LocatorContext: Inputs of one location pass
- SdkDownloader: Downloads and extracts the SDK archive

Example Usage:
-------------
    from pathlib import Path
    from androidsdkkit.sdk import locate_sdk

    sdk_root = locate_sdk(Path('/path/to/project'))
"""

from androidsdkkit.sdk.downloader import (
    Downloader,
    SdkDownloader,
)
from androidsdkkit.sdk.locator import (
    DEFAULT_SOURCES,
    EnvironmentVariable,
    FreshDownload,
    LocatorContext,
    PersistedLocation,
    SdkLocator,
    SdkSource,
    UserHomeDirectory,
    locate_sdk,
)

__all__ = [
    "Downloader",
    "SdkDownloader",
    "DEFAULT_SOURCES",
    "EnvironmentVariable",
    "FreshDownload",
    "LocatorContext",
    "PersistedLocation",
    "SdkLocator",
    "SdkSource",
    "UserHomeDirectory",
    "locate_sdk",
]
