"""
SDK package resolver.

Resolves, verifies and installs (if missing) the SDK packages a build
needs: build tools (1), platform tools, compile target (1), the support
library repository and the Google Play Services repository.

(1): only resolved when the build declares a target platform.

Every install goes through an ``AndroidCommand``. A nonzero exit status
aborts the whole pass, since a partially provisioned SDK must not be used.

Example:
    >>> from androidsdkkit.packages.resolver import resolve_packages
    >>> report = resolve_packages(sdk_root, requirements)
    >>> report.installed
    ['platform-tools']
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from androidsdkkit.core.exceptions import ConfigError, InstallationFailureError
from androidsdkkit.core.filesystem import folder_exists
from androidsdkkit.packages.android_command import AndroidCommand, SdkAndroidCommand
from androidsdkkit.packages.repository import LocalMavenProbe
from androidsdkkit.packages.requirements import (
    BuildRequirements,
    Dependency,
    SdkFolder,
    compile_target_components,
)

logger = logging.getLogger(__name__)

BUILD_TOOLS_FOLDER = "build-tools"
PLATFORM_TOOLS_FOLDER = "platform-tools"
EXTRAS_FOLDER = "extras"
M2_REPOSITORY_FOLDER = "m2repository"

SUPPORT_LIBRARY_GROUP = "com.android.support"
PLAY_SERVICES_GROUP = "com.google.android.gms"

PLATFORM_TOOLS_PACKAGE = "platform-tools"
SUPPORT_REPOSITORY_PACKAGE = "extra-android-m2repository"
GOOGLE_REPOSITORY_PACKAGE = "extra-google-m2repository"


@dataclass
class ResolutionReport:
    """
    What one resolution pass did.

    Attributes:
        installed: Package filters installed successfully, in order
        repositories: Local repositories registered for the build
        skipped: Names of sub-resolutions that were not applicable
    """

    installed: List[str] = field(default_factory=list)
    repositories: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def register_repository(self, path: Path) -> None:
        if path not in self.repositories:
            self.repositories.append(path)


class PackageResolver:
    """
    Resolves SDK packages for a build.

    Attributes:
        sdk_root: SDK root directory
        requirements: Declared build requirements
        android_command: Package manager gateway
        probe: Local repository availability probe
    """

    def __init__(
        self,
        sdk_root: Path,
        requirements: BuildRequirements,
        android_command: AndroidCommand,
        probe: Optional[LocalMavenProbe] = None,
    ):
        self.sdk_root = Path(sdk_root)
        self.requirements = requirements
        self.android_command = android_command
        self.probe = probe or LocalMavenProbe()

        self.build_tools_dir = self.sdk_root / BUILD_TOOLS_FOLDER
        self.platform_tools_dir = self.sdk_root / PLATFORM_TOOLS_FOLDER
        self.folders = {
            SdkFolder.PLATFORMS: self.sdk_root / SdkFolder.PLATFORMS.value,
            SdkFolder.ADD_ONS: self.sdk_root / SdkFolder.ADD_ONS.value,
        }

        extras_dir = self.sdk_root / EXTRAS_FOLDER
        self.android_repository_dir = extras_dir / "android" / M2_REPOSITORY_FOLDER
        self.google_repository_dir = extras_dir / "google" / M2_REPOSITORY_FOLDER

        self.report = ResolutionReport()

    def steps(self) -> Sequence[Tuple[str, bool, Callable[[], None]]]:
        """Sub-resolutions as (name, requires android, action), in order."""
        return (
            ("build-tools", True, self.resolve_build_tools),
            ("platform-tools", False, self.resolve_platform_tools),
            ("compile-version", True, self.resolve_compile_version),
            ("support-library", False, self.resolve_support_library_repository),
            ("play-services", False, self.resolve_play_services_repository),
        )

    def resolve(self) -> ResolutionReport:
        """
        Resolve everything that can be resolved and skip what can't.

        Returns:
            Report of installs, registered repositories and skipped steps

        Raises:
            InstallationFailureError: If any install fails
            ConfigError: If a required declaration is missing
        """
        for name, requires_android, action in self.steps():
            if requires_android and not self.requirements.has_android_plugin:
                logger.debug(f"Skipping: {name}, no android plugin detected")
                self.report.skipped.append(name)
                continue

            logger.debug(f"Resolving: {name}")
            action()

        return self.report

    # ------------------------------------------------------------------ tools

    def resolve_build_tools(self) -> None:
        """Install the declared build tools revision if missing."""
        revision = self.requirements.build_tools_revision
        if not revision:
            raise ConfigError("android.build_tools_revision is required")
        logger.debug(f"Build tools version: {revision}")

        if folder_exists(self.build_tools_dir / revision):
            logger.debug("Build tools found!")
            return

        logger.info(f"Build tools {revision} missing. Downloading...")
        self._install(f"build-tools-{revision}", f"Build tools {revision}")

    def resolve_platform_tools(self) -> None:
        """Install the platform tools if missing."""
        if folder_exists(self.platform_tools_dir):
            logger.debug("Platform tools found!")
            return

        logger.info("Platform tools missing. Downloading...")
        self._install(PLATFORM_TOOLS_PACKAGE, "Platform tools")

    # --------------------------------------------------------- compile target

    def resolve_compile_version(self) -> None:
        """Install the compile target, and the base platform of add-ons."""
        compile_version = self.requirements.compile_sdk_version
        if not compile_version:
            raise ConfigError("android.compile_sdk_version is required")
        logger.debug(f"Compile API version: {compile_version}")

        for folder, package in compile_target_components(compile_version):
            self.install_if_missing(self.folders[folder], package)

    def install_if_missing(self, base_dir: Path, version: str) -> None:
        """
        Install a compilation API if its folder under base_dir is missing.

        Args:
            base_dir: Where compilation APIs of this kind are stored
            version: Package name, also the folder name
        """
        if folder_exists(base_dir / version):
            logger.debug(f"Compilation API {version} found!")
            return

        logger.info(f"Compilation API {version} missing. Downloading...")
        self._install(version, f"Compilation API {version}")

    # ---------------------------------------------------------- repositories

    def resolve_support_library_repository(self) -> None:
        """
        Resolve the support library repository if the build depends on it.

        The repository is registered for the build and installed when
        missing or unable to satisfy the requested versions.
        """
        deps = self.requirements.dependencies_with_group(SUPPORT_LIBRARY_GROUP)
        if not deps:
            logger.debug("No support library dependency found.")
            return

        logger.debug(f"Found support library dependencies: {_format(deps)}")
        self.report.register_repository(self.android_repository_dir)

        self._update_repository(
            self.android_repository_dir,
            deps,
            SUPPORT_REPOSITORY_PACKAGE,
            "Support library repository",
        )

    def resolve_play_services_repository(self) -> None:
        """
        Resolve the Google Play Services repository if the build depends on it.

        Play Services artifacts depend on the support library, so both
        repositories are registered.
        """
        deps = self.requirements.dependencies_with_group(PLAY_SERVICES_GROUP)
        if not deps:
            logger.debug("No Google Play Services dependency found.")
            return

        logger.debug(f"Found Google Play Services dependencies: {_format(deps)}")
        self.report.register_repository(self.android_repository_dir)
        self.report.register_repository(self.google_repository_dir)

        self._update_repository(
            self.google_repository_dir,
            deps,
            GOOGLE_REPOSITORY_PACKAGE,
            "Google Play Services repository",
        )

    def _update_repository(
        self,
        repository_dir: Path,
        deps: List[Dependency],
        package: str,
        description: str,
    ) -> None:
        if not folder_exists(repository_dir):
            logger.info(f"{description} missing. Downloading...")
        elif not self.probe.probe(deps, self.report.repositories).is_available:
            logger.info(f"{description} outdated. Downloading update...")
        else:
            logger.debug(f"{description} found!")
            return

        self._install(package, description)

    # ---------------------------------------------------------------- helpers

    def _install(self, package: str, description: str) -> None:
        """
        Run the package manager for package.

        Raises:
            InstallationFailureError: On nonzero exit status
        """
        code = self.android_command.update(package)
        if code != 0:
            raise InstallationFailureError(
                f"{description} download failed with code {code}.",
                package=package,
                exit_code=code,
            )
        self.report.installed.append(package)


def _format(deps: List[Dependency]) -> str:
    return ", ".join(str(dep) for dep in deps)


def resolve_packages(
    sdk_root: Path,
    requirements: BuildRequirements,
    android_command: Optional[AndroidCommand] = None,
) -> ResolutionReport:
    """
    Resolve packages for a build against the SDK at sdk_root.

    Args:
        sdk_root: SDK root directory
        requirements: Declared build requirements
        android_command: Package manager (the SDK's android tool if None)

    Returns:
        Report of what the pass did
    """
    android_command = android_command or SdkAndroidCommand(sdk_root)
    return PackageResolver(sdk_root, requirements, android_command).resolve()
