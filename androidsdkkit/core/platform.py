"""
Platform detection for AndroidSdkKit.

Only the operating system family matters here: it selects the SDK archive
to download, the name of the package-manager executable, and whether paths
written to ``local.properties`` need their separators escaped.

Usage:
    from androidsdkkit.core.platform import detect_os_family

    if detect_os_family() == "windows":
        ...
"""

import functools
import platform

WINDOWS = "windows"
MACOS = "macos"
LINUX = "linux"

SUPPORTED_OS_FAMILIES = (WINDOWS, MACOS, LINUX)


@functools.lru_cache(maxsize=1)
def detect_os_family() -> str:
    """
    Detect the operating system family.

    This function is cached - it only runs detection once per process.

    Returns:
        Normalized OS family: 'windows', 'macos' or 'linux'

    Raises:
        RuntimeError: If OS is not supported

    Example:
        >>> detect_os_family()
        'linux'
    """
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys")):
        return WINDOWS
    elif system == "darwin":
        return MACOS
    elif system == "linux":
        return LINUX
    else:
        raise RuntimeError(f"Unsupported operating system: {system}")


def clear_platform_cache() -> None:
    """Clear the cached OS family (for testing)."""
    detect_os_family.cache_clear()
