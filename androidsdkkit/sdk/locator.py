"""
Android SDK locator.

Finds the Android SDK for a build and records its location in
``local.properties`` so later build steps read the same path. The SDK is
downloaded only when no installation is found.

Sources are tried in order, the first available one wins:

1. ``sdk.dir`` in ``local.properties`` (never rewritten)
2. The ``ANDROID_HOME`` environment variable
3. An existing ``~/.android-sdk`` directory
4. A fresh download into ``~/.android-sdk``

Example:
    >>> from pathlib import Path
    >>> from androidsdkkit.sdk.locator import locate_sdk
    >>>
    >>> sdk_root = locate_sdk(Path('/path/to/project'))
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from androidsdkkit.core.environment import (
    ANDROID_HOME_ENV,
    EnvironmentSnapshot,
    capture_environment,
)
from androidsdkkit.core.exceptions import InconsistentStateError
from androidsdkkit.core.properties import (
    LOCAL_PROPERTIES_FILE,
    SDK_DIR_PROPERTY,
    LocalProperties,
)
from androidsdkkit.sdk.downloader import Downloader, SdkDownloader

logger = logging.getLogger(__name__)

USER_SDK_FOLDER = ".android-sdk"


@dataclass(frozen=True)
class LocatorContext:
    """
    Inputs of one location pass.

    Attributes:
        build_root: Root directory of the build
        environment: Snapshot of user home, variables and OS family
        downloader: Provisions an SDK when none is found
    """

    build_root: Path
    environment: EnvironmentSnapshot
    downloader: Downloader = field(compare=False)

    @property
    def properties(self) -> LocalProperties:
        return LocalProperties(self.build_root)

    @property
    def user_sdk_dir(self) -> Path:
        return self.environment.user_home / USER_SDK_FOLDER

    def persist(self, sdk_dir: Path) -> None:
        """Record sdk_dir in local.properties."""
        self.properties.write_sdk_dir(str(sdk_dir))

    def download_and_persist(self, target: Path) -> Path:
        """Download an SDK into target, record it and return it."""
        logger.info("Android SDK not found. Downloading...")
        self.downloader.download(target)
        logger.info(
            f"SDK extracted at '{target}'. Writing to {LOCAL_PROPERTIES_FILE}."
        )
        self.persist(target)
        return target


class SdkSource(ABC):
    """One candidate location for the SDK."""

    name: str = "source"

    @abstractmethod
    def is_available(self, context: LocatorContext) -> bool:
        """Check whether this source can supply the SDK location."""
        pass

    @abstractmethod
    def materialize(self, context: LocatorContext) -> Path:
        """
        Produce the SDK root from this source.

        Raises:
            InconsistentStateError: If the source points at a missing SDK
            InstallationFailureError: If provisioning fails
        """
        pass


class PersistedLocation(SdkSource):
    """``sdk.dir`` already recorded in local.properties."""

    name = LOCAL_PROPERTIES_FILE

    def is_available(self, context: LocatorContext) -> bool:
        properties = context.properties
        if not properties.exists():
            logger.debug(f"Missing {LOCAL_PROPERTIES_FILE}.")
            return False

        logger.debug(f"Found {LOCAL_PROPERTIES_FILE} at '{properties.path}'.")
        if properties.sdk_dir() is None:
            logger.debug(f"Missing {SDK_DIR_PROPERTY} in {LOCAL_PROPERTIES_FILE}.")
            return False
        return True

    def materialize(self, context: LocatorContext) -> Path:
        sdk_dir_path = context.properties.sdk_dir()
        logger.debug(f"Found {SDK_DIR_PROPERTY} of '{sdk_dir_path}'.")

        # An empty value would name the working directory
        sdk_dir = Path(sdk_dir_path)
        if not sdk_dir_path.strip() or not sdk_dir.is_dir():
            raise InconsistentStateError(sdk_dir_path, LOCAL_PROPERTIES_FILE)
        return sdk_dir


class EnvironmentVariable(SdkSource):
    """The ANDROID_HOME environment variable."""

    name = ANDROID_HOME_ENV

    def is_available(self, context: LocatorContext) -> bool:
        if context.environment.android_home is None:
            logger.debug(f"Missing {ANDROID_HOME_ENV}.")
            return False
        return True

    def materialize(self, context: LocatorContext) -> Path:
        android_home = context.environment.android_home
        sdk_dir = Path(android_home)

        if sdk_dir.exists():
            logger.debug(
                f"Found {ANDROID_HOME_ENV} at '{android_home}'. "
                f"Writing to {LOCAL_PROPERTIES_FILE}."
            )
            context.properties.write_sdk_dir(android_home)
            return sdk_dir

        logger.debug(
            f"Found {ANDROID_HOME_ENV} at '{android_home}' but directory is missing."
        )
        return context.download_and_persist(sdk_dir)


class UserHomeDirectory(SdkSource):
    """An SDK previously installed at ~/.android-sdk."""

    name = USER_SDK_FOLDER

    def is_available(self, context: LocatorContext) -> bool:
        return context.user_sdk_dir.exists()

    def materialize(self, context: LocatorContext) -> Path:
        user_sdk_dir = context.user_sdk_dir.absolute()
        logger.debug(
            f"Found existing SDK at '{user_sdk_dir}'. "
            f"Writing to {LOCAL_PROPERTIES_FILE}."
        )
        context.persist(user_sdk_dir)
        return user_sdk_dir


class FreshDownload(SdkSource):
    """Download a new SDK into ~/.android-sdk."""

    name = "download"

    def is_available(self, context: LocatorContext) -> bool:
        return True

    def materialize(self, context: LocatorContext) -> Path:
        return context.download_and_persist(context.user_sdk_dir.absolute())


DEFAULT_SOURCES: Sequence[SdkSource] = (
    PersistedLocation(),
    EnvironmentVariable(),
    UserHomeDirectory(),
    FreshDownload(),
)


class SdkLocator:
    """
    Resolves the SDK root by trying each source in order.

    Attributes:
        context: Inputs of this pass
        sources: Ordered candidate sources
    """

    def __init__(
        self,
        context: LocatorContext,
        sources: Sequence[SdkSource] = DEFAULT_SOURCES,
    ):
        self.context = context
        self.sources = tuple(sources)

    def locate(self) -> Path:
        """
        Locate the SDK, downloading it if necessary.

        Returns:
            The SDK root directory

        Raises:
            InconsistentStateError: If local.properties points at a missing SDK
            InstallationFailureError: If the SDK download fails
            LookupError: If no source is available
        """
        for source in self.sources:
            if source.is_available(self.context):
                logger.debug(f"Resolving SDK from {source.name}")
                return source.materialize(self.context)

        raise LookupError("No Android SDK source available")


def locate_sdk(
    build_root: Path,
    environment: Optional[EnvironmentSnapshot] = None,
    downloader: Optional[Downloader] = None,
) -> Path:
    """
    Locate the Android SDK for a build root.

    Args:
        build_root: Root directory of the build
        environment: Environment snapshot (captured from the process if None)
        downloader: SDK downloader (downloads from Google if None)

    Returns:
        The SDK root directory
    """
    environment = environment or capture_environment()
    downloader = downloader or SdkDownloader(environment.os_family)
    context = LocatorContext(Path(build_root), environment, downloader)
    return SdkLocator(context).locate()
