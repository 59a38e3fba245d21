"""
Android SDK downloader.

Downloads the standalone Android SDK tools archive for the current OS
family and extracts it into a target directory.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from androidsdkkit.core.download import DownloadProgress, download_file
from androidsdkkit.core.exceptions import (
    ArchiveExtractionError,
    DownloadError,
    InstallationFailureError,
)
from androidsdkkit.core.filesystem import (
    extract_archive,
    make_tree_executable,
    safe_rmtree,
    temporary_directory,
)
from androidsdkkit.core.platform import LINUX, MACOS, WINDOWS, detect_os_family

logger = logging.getLogger(__name__)

SDK_REVISION = "24.4.1"
SDK_BASE_URL = "https://dl.google.com/android"

# OS family -> (archive platform suffix, archive extension)
SDK_ARCHIVES = {
    LINUX: ("linux", "tgz"),
    MACOS: ("macosx", "zip"),
    WINDOWS: ("windows", "zip"),
}

# Folders whose contents must be launchable after extraction
EXECUTABLE_FOLDERS = ("tools", "platform-tools")


class Downloader(ABC):
    """Downloads an Android SDK into a destination directory."""

    @abstractmethod
    def download(self, target: Path) -> None:
        """
        Download and extract an Android SDK to target.

        Args:
            target: Directory that will hold the SDK

        Raises:
            InstallationFailureError: If the SDK could not be provisioned
        """
        pass


class SdkDownloader(Downloader):
    """
    Downloads the SDK archive from Google and extracts it.

    Attributes:
        os_family: OS family selecting the archive
        revision: SDK tools revision
        base_url: Base URL the archive is fetched from

    Example:
        downloader = SdkDownloader()
        downloader.download(Path.home() / '.android-sdk')
    """

    def __init__(
        self,
        os_family: Optional[str] = None,
        revision: str = SDK_REVISION,
        base_url: str = SDK_BASE_URL,
    ):
        self.os_family = os_family or detect_os_family()
        self.revision = revision
        self.base_url = base_url.rstrip("/")

        if self.os_family not in SDK_ARCHIVES:
            raise InstallationFailureError(
                f"No Android SDK archive available for OS: {self.os_family}"
            )

    @property
    def archive_name(self) -> str:
        suffix, extension = SDK_ARCHIVES[self.os_family]
        return f"android-sdk_r{self.revision}-{suffix}.{extension}"

    @property
    def extracted_folder_name(self) -> str:
        """Name of the single top-level folder inside the archive."""
        return f"android-sdk-{SDK_ARCHIVES[self.os_family][0]}"

    def get_download_url(self) -> str:
        return f"{self.base_url}/{self.archive_name}"

    def download(self, target: Path) -> None:
        target = Path(target)
        url = self.get_download_url()

        if target.exists() and (not target.is_dir() or any(target.iterdir())):
            raise InstallationFailureError(
                f"Refusing to download Android SDK into non-empty path '{target}'"
            )

        existed = target.exists()
        try:
            with temporary_directory(prefix="androidsdkkit_download_") as work_dir:
                archive_path = download_file(
                    url, work_dir / self.archive_name, progress_callback=_log_progress
                )

                extract_dir = work_dir / "extracted"
                logger.info(f"Extracting {archive_path.name}...")
                extract_archive(archive_path, extract_dir)

                sdk_dir = self._find_extracted_dir(extract_dir)
                target.parent.mkdir(parents=True, exist_ok=True)
                if target.exists():
                    target.rmdir()
                shutil.move(str(sdk_dir), str(target))

            for folder in EXECUTABLE_FOLDERS:
                make_tree_executable(target / folder)

        except (DownloadError, ArchiveExtractionError, OSError) as e:
            self._discard_partial(target, existed)
            logger.error(f"Failed to download Android SDK: {e}")
            raise InstallationFailureError(
                f"Android SDK download to '{target}' failed: {e}"
            ) from e

    def _discard_partial(self, target: Path, existed: bool) -> None:
        """Remove whatever a failed download left at target."""
        if not target.exists():
            return

        logger.debug(f"Removing partial Android SDK at '{target}'")
        safe_rmtree(target)
        if existed:
            target.mkdir()

    def _find_extracted_dir(self, extract_dir: Path) -> Path:
        """
        Find the extracted SDK directory.

        Raises:
            ArchiveExtractionError: If the archive layout is unexpected
        """
        expected = extract_dir / self.extracted_folder_name
        if expected.is_dir():
            return expected

        folders = [item for item in extract_dir.iterdir() if item.is_dir()]
        if len(folders) == 1:
            return folders[0]

        raise ArchiveExtractionError(
            f"Expected a single '{self.extracted_folder_name}' folder in the SDK archive"
        )


def _log_progress(progress: DownloadProgress) -> None:
    logger.debug(f"Android SDK: {progress}")
