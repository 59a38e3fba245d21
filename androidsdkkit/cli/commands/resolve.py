"""
Resolve command implementation.

Installs the SDK packages the build manifest needs into an SDK.
"""

import logging

from androidsdkkit.cli.utils import format_report, load_requirements, resolve_project_root
from androidsdkkit.manager import SdkManager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Resolves against --sdk when given, otherwise against the located SDK.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    project_root = resolve_project_root(args.project_root)
    requirements = load_requirements(args)
    manager = SdkManager(project_root, requirements)

    sdk_root = args.sdk.resolve() if args.sdk else manager.locate()
    report = manager.resolve(sdk_root)

    print(
        format_report(
            "SDK packages resolved",
            {
                "SDK": sdk_root,
                "Installed": ", ".join(report.installed) or "nothing",
                "Skipped": ", ".join(report.skipped) or "nothing",
            },
        )
    )
    return 0
