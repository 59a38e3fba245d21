"""
SDK manager orchestration.

Runs a full provisioning pass for a build: locate the SDK eagerly, then
resolve packages once the build's requirements are complete. Offline
builds skip the whole pass.

Example:
    >>> from pathlib import Path
    >>> from androidsdkkit.config import parse_manifest
    >>> from androidsdkkit.manager import SdkManager
    >>>
    >>> root = Path('/path/to/project')
    >>> manager = SdkManager(root, parse_manifest(root / 'androidsdkkit.yaml'))
    >>> result = manager.sync()
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from androidsdkkit.core.environment import EnvironmentSnapshot, capture_environment
from androidsdkkit.packages.android_command import AndroidCommand, SdkAndroidCommand
from androidsdkkit.packages.requirements import BuildRequirements
from androidsdkkit.packages.resolver import PackageResolver, ResolutionReport
from androidsdkkit.sdk.downloader import Downloader, SdkDownloader
from androidsdkkit.sdk.locator import LocatorContext, SdkLocator

logger = logging.getLogger(__name__)


@contextmanager
def timed(name: str):
    """Log how long the enclosed block took, in milliseconds."""
    before = time.perf_counter()
    try:
        yield
    finally:
        took = (time.perf_counter() - before) * 1000
        logger.info(f"{name} took {took:.0f} ms.")


@dataclass
class SyncResult:
    """Outcome of a sync pass."""

    sdk_root: Path
    report: Optional[ResolutionReport] = None


class SdkManager:
    """
    Locates the SDK and resolves packages for one build.

    Attributes:
        build_root: Root directory of the build
        requirements: Declared build requirements
        environment: Environment snapshot used by the locator
    """

    def __init__(
        self,
        build_root: Path,
        requirements: BuildRequirements,
        environment: Optional[EnvironmentSnapshot] = None,
        downloader: Optional[Downloader] = None,
        command_factory: Optional[Callable[[Path], AndroidCommand]] = None,
    ):
        """
        Initialize the manager.

        Args:
            build_root: Root directory of the build
            requirements: Declared build requirements
            environment: Environment snapshot (captured if None)
            downloader: SDK downloader (downloads from Google if None)
            command_factory: Builds the package manager for an SDK root
                (the SDK's android tool if None)
        """
        self.build_root = Path(build_root)
        self.requirements = requirements
        self.environment = environment or capture_environment()
        self.downloader = downloader or SdkDownloader(self.environment.os_family)
        self.command_factory = command_factory or (
            lambda sdk_root: SdkAndroidCommand(sdk_root, self.environment.os_family)
        )

    def locate(self) -> Path:
        """Locate the SDK, downloading it if necessary."""
        context = LocatorContext(self.build_root, self.environment, self.downloader)
        with timed("SDK resolve"):
            return SdkLocator(context).locate()

    def resolve(self, sdk_root: Path) -> ResolutionReport:
        """Resolve the build's packages against sdk_root."""
        resolver = PackageResolver(
            sdk_root, self.requirements, self.command_factory(sdk_root)
        )
        with timed("Package resolve"):
            return resolver.resolve()

    def sync(self) -> Optional[SyncResult]:
        """
        Run the full pass.

        Returns:
            SyncResult, or None for offline builds

        Raises:
            InconsistentStateError: If local.properties points at a missing SDK
            InstallationFailureError: If a download or install fails
        """
        if self.requirements.offline:
            logger.debug("Offline build. Skipping package resolution.")
            return None

        sdk_root = self.locate()

        if not self.requirements.has_android_plugin:
            logger.debug("No Android plugin detected. Skipping package resolution.")
            return SyncResult(sdk_root)

        return SyncResult(sdk_root, self.resolve(sdk_root))
