"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from androidsdkkit.config.parser import find_manifest, parse_manifest
from androidsdkkit.packages.requirements import BuildRequirements

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_requirements(args, offline: bool = False) -> BuildRequirements:
    """
    Load the build manifest named by the parsed arguments.

    Args:
        args: Parsed arguments with project_root and config
        offline: Whether this is an offline build

    Returns:
        Parsed build requirements

    Raises:
        ConfigError: If the manifest is invalid

    Example:
        >>> requirements = load_requirements(args)
        >>> requirements.compile_sdk_version
        'android-19'
    """
    project_root = resolve_project_root(getattr(args, "project_root", None))
    manifest = find_manifest(project_root, getattr(args, "config", None))

    if manifest.exists():
        logger.debug(f"Loading build manifest from {manifest}")
    else:
        logger.debug(f"Build manifest not found (optional): {manifest}")

    return parse_manifest(manifest, offline=offline)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def format_report(title: str, details: Dict[str, Any], width: int = 70) -> str:
    """
    Format a standardized summary block.

    Args:
        title: Summary title
        details: Key-value pairs to display
        width: Width of the title rule

    Returns:
        Formatted message string
    """
    lines = []
    lines.append("=" * width)
    lines.append(title)
    lines.append("=" * width)

    for key, value in details.items():
        lines.append(f"{key}: {value}")

    lines.append("")
    return "\n".join(lines)


# ============================================================================
# Path Utilities
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Path(path).resolve()
