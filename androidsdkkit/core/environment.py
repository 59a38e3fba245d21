"""
Environment probe for AndroidSdkKit.

Captures the ambient inputs the SDK locator depends on (user home, process
environment variables and OS family) into one immutable value. Components
receive the snapshot explicitly instead of reading ``os.environ`` or
``Path.home()`` themselves, which keeps them deterministic under test.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from androidsdkkit.core.platform import WINDOWS, detect_os_family

ANDROID_HOME_ENV = "ANDROID_HOME"


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """
    Read-only view of the process environment.

    Attributes:
        user_home: The user's home directory
        variables: Environment variables at capture time
        os_family: 'windows', 'macos' or 'linux'
    """

    user_home: Path
    variables: Mapping[str, str] = field(default_factory=dict)
    os_family: str = "linux"

    def __post_init__(self):
        if not isinstance(self.user_home, Path):
            raise TypeError(f"user_home must be Path, got {type(self.user_home)}")
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def getenv(self, name: str) -> Optional[str]:
        """Return an environment variable, or None when unset."""
        return self.variables.get(name)

    @property
    def android_home(self) -> Optional[str]:
        """Value of ANDROID_HOME, or None when unset or blank."""
        value = self.getenv(ANDROID_HOME_ENV)
        if value is None or not value.strip():
            return None
        return value

    @property
    def is_windows(self) -> bool:
        return self.os_family == WINDOWS


def capture_environment() -> EnvironmentSnapshot:
    """
    Capture the current process environment.

    Returns:
        EnvironmentSnapshot for this process

    Example:
        >>> env = capture_environment()
        >>> env.android_home
        '/opt/android-sdk'
    """
    return EnvironmentSnapshot(
        user_home=Path.home(),
        variables=dict(os.environ),
        os_family=detect_os_family(),
    )
