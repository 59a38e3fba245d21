"""
Locate command implementation.

Finds the Android SDK for the project, downloading it when no SDK is
available, and prints its root directory.
"""

import logging

from androidsdkkit.cli.utils import resolve_project_root
from androidsdkkit.manager import SdkManager
from androidsdkkit.packages.requirements import BuildRequirements

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    project_root = resolve_project_root(args.project_root)
    manager = SdkManager(project_root, BuildRequirements())

    print(manager.locate())
    return 0
