"""YAML build manifest parser for AndroidSdkKit.

This module turns ``androidsdkkit.yaml`` into the ``BuildRequirements`` the
package resolver consumes.

Example manifest::

    android:
      compile_sdk_version: 19
      build_tools_revision: "19.0.3"
    dependencies:
      compile:
        - com.android.support:support-v4:19.1.0
        - group: com.google.android.gms
          name: play-services
          version: 4.3.23
"""

from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from androidsdkkit.core.exceptions import ConfigError
from androidsdkkit.packages.requirements import (
    BuildRequirements,
    Dependency,
    normalize_compile_sdk_version,
)

MANIFEST_FILE = "androidsdkkit.yaml"


def parse_manifest(manifest_path: Path, offline: bool = False) -> BuildRequirements:
    """
    Parse an androidsdkkit.yaml build manifest.

    A missing manifest describes a build with no target platform and no
    dependencies.

    Args:
        manifest_path: Path to androidsdkkit.yaml
        offline: Whether this is an offline build

    Returns:
        Parsed build requirements

    Raises:
        ConfigError: If the manifest is invalid
    """
    if not manifest_path.exists():
        return BuildRequirements(offline=offline)

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {manifest_path}: {e}")

    if data is None:
        return BuildRequirements(offline=offline)

    if not isinstance(data, dict):
        raise ConfigError(f"{manifest_path}: top level must be a mapping")

    try:
        return _parse_and_validate(data, offline)
    except ConfigError as e:
        raise ConfigError(f"{manifest_path}: {e}") from e


def _parse_and_validate(data: dict, offline: bool) -> BuildRequirements:
    """Parse and validate manifest data."""
    android = data.get("android")
    has_android = android is not None
    build_tools_revision, compile_sdk_version = _parse_android(android or {})

    if has_android and not build_tools_revision:
        raise ConfigError("Missing required field: android.build_tools_revision")
    if has_android and not compile_sdk_version:
        raise ConfigError("Missing required field: android.compile_sdk_version")

    return BuildRequirements(
        has_android_plugin=has_android,
        build_tools_revision=build_tools_revision,
        compile_sdk_version=compile_sdk_version,
        configurations=_parse_dependencies(data.get("dependencies") or {}),
        offline=offline or bool(data.get("offline", False)),
    )


def _parse_android(data: dict) -> Tuple[Optional[str], Optional[str]]:
    """Parse the android section."""
    if not isinstance(data, dict):
        raise ConfigError("android must be a mapping")

    revision = data.get("build_tools_revision")
    compile_version = data.get("compile_sdk_version")

    # YAML reads 19.10 as the float 19.1
    if revision is not None and not isinstance(revision, str):
        raise ConfigError(
            f"android.build_tools_revision must be a quoted string, got {revision!r}"
        )

    return (
        revision.strip() if revision is not None else None,
        normalize_compile_sdk_version(compile_version)
        if compile_version is not None
        else None,
    )


def _parse_dependencies(data: dict) -> Dict[str, Tuple[Dependency, ...]]:
    """Parse dependencies grouped by configuration."""
    if not isinstance(data, dict):
        raise ConfigError("dependencies must map configuration names to lists")

    configurations = {}
    for name, entries in data.items():
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ConfigError(f"dependencies.{name} must be a list")
        configurations[str(name)] = tuple(
            _parse_dependency(name, entry) for entry in entries
        )
    return configurations


def _parse_dependency(configuration: str, entry) -> Dependency:
    """Parse one dependency from notation or a mapping."""
    if isinstance(entry, str):
        try:
            return Dependency.parse(entry)
        except ValueError as e:
            raise ConfigError(f"dependencies.{configuration}: {e}")

    if isinstance(entry, dict):
        if "name" not in entry:
            raise ConfigError(
                f"dependencies.{configuration}: dependency missing required field: name"
            )
        version = entry.get("version")
        return Dependency(
            group=entry.get("group"),
            name=str(entry["name"]),
            version=str(version) if version is not None else None,
        )

    raise ConfigError(
        f"dependencies.{configuration}: unsupported dependency entry {entry!r}"
    )


def find_manifest(project_root: Path, config_file: Optional[Path] = None) -> Path:
    """Return the manifest path: the explicit one, or the default in project_root."""
    if config_file:
        return Path(config_file)
    return Path(project_root) / MANIFEST_FILE
