"""
Sync command implementation.

Locates the Android SDK and installs the packages the build needs.
"""

import logging

from androidsdkkit.cli.utils import format_report, load_requirements, resolve_project_root
from androidsdkkit.manager import SdkManager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the sync command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    project_root = resolve_project_root(args.project_root)
    requirements = load_requirements(args, offline=args.offline)

    result = SdkManager(project_root, requirements).sync()
    if result is None:
        print("Offline build. Nothing to do.")
        return 0

    details = {"SDK": result.sdk_root}
    if result.report is not None:
        details["Installed"] = ", ".join(result.report.installed) or "nothing"
        details["Repositories"] = (
            ", ".join(str(path) for path in result.report.repositories) or "none"
        )

    print(format_report("Android SDK ready", details))
    return 0
