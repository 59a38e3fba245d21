"""
SDK package manager command.

Installs SDK packages by running the SDK's own ``android`` tool in
unattended mode. The resolver only depends on the abstract
``AndroidCommand`` so tests can substitute a recording fake.

Classes:
    AndroidCommand: Abstract gateway to the package manager
    SdkAndroidCommand: Runs ``<sdk>/tools/android update sdk``
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from androidsdkkit.core.exceptions import InstallationFailureError
from androidsdkkit.core.filesystem import make_executable
from androidsdkkit.core.platform import WINDOWS, detect_os_family

logger = logging.getLogger(__name__)

TOOLS_FOLDER = "tools"
LICENSE_ACCEPT = "y\n"


class AndroidCommand(ABC):
    """
    Abstract gateway to the SDK package manager.

    Example:
        class EchoCommand(AndroidCommand):
            def update(self, package_filter: str) -> int:
                print(package_filter)
                return 0
    """

    @abstractmethod
    def update(self, package_filter: str) -> int:
        """
        Install or update the packages matching a filter.

        Args:
            package_filter: Package name (e.g. 'platform-tools', 'android-19')

        Returns:
            Exit status of the package manager (0 on success)
        """
        pass


class SdkAndroidCommand(AndroidCommand):
    """
    Runs the ``android`` tool shipped in the SDK's ``tools`` folder.

    Attributes:
        sdk_root: SDK the command operates on
        executable: Path to the android tool
    """

    def __init__(self, sdk_root: Path, os_family: Optional[str] = None):
        """
        Initialize the command.

        Args:
            sdk_root: SDK root directory
            os_family: OS family (auto-detected if None)
        """
        self.sdk_root = Path(sdk_root)
        os_family = os_family or detect_os_family()
        executable_name = "android.bat" if os_family == WINDOWS else "android"
        self.executable = self.sdk_root / TOOLS_FOLDER / executable_name

    def build_command(self, package_filter: str) -> List[str]:
        """
        Build the argument list for an update.

        ``-a`` includes all packages, ``-u`` suppresses the UI and ``-t``
        restricts the update to the filter.
        """
        return [
            str(self.executable),
            "update",
            "sdk",
            "-a",
            "-u",
            "-t",
            package_filter,
        ]

    def update(self, package_filter: str) -> int:
        """
        Run the update and answer the license prompt.

        Raises:
            InstallationFailureError: If the tool cannot be launched
        """
        if not self.executable.exists():
            raise InstallationFailureError(
                f"SDK package manager not found at {self.executable}",
                package=package_filter,
            )

        cmd = self.build_command(package_filter)
        logger.debug(f"$ {' '.join(cmd)}")

        try:
            make_executable(self.executable)
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise InstallationFailureError(
                f"Failed to execute {self.executable}: {e}\n"
                f"Command: {' '.join(cmd)}",
                package=package_filter,
            ) from e

        # Accept the license prompt, then close stdin so the tool cannot block on it
        try:
            process.stdin.write(LICENSE_ACCEPT)
            process.stdin.close()
        except BrokenPipeError:
            logger.debug("Package manager closed stdin before license prompt")

        for line in process.stdout:
            logger.debug(line.rstrip())

        return process.wait()
