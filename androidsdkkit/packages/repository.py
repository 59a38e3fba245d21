"""
Local Maven repository probe.

The SDK ships the support library and Google Play Services as local Maven
repositories under ``extras/``. A repository that exists can still be too
old for the versions a build requests, so before trusting it the resolver
asks this probe whether every requested artifact can actually be found.

The probe is a heuristic: any error while looking is reported as
INDETERMINATE, which callers treat the same as UNAVAILABLE.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from packaging.version import InvalidVersion, Version

from androidsdkkit.packages.requirements import Dependency

logger = logging.getLogger(__name__)

ARTIFACT_EXTENSIONS = (".pom", ".aar", ".jar")


class ProbeResult(Enum):
    """Outcome of a local availability probe."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    INDETERMINATE = "indeterminate"

    @property
    def is_available(self) -> bool:
        return self is ProbeResult.AVAILABLE


def _version_key(version: str):
    """Sort key ordering parseable versions above unparseable ones."""
    try:
        return (1, Version(version), version)
    except InvalidVersion:
        return (0, Version("0"), version)


def matches_version(requested: Optional[str], candidate: str) -> bool:
    """
    Check a candidate version against a requested one.

    Example:
        >>> matches_version("19.+", "19.1.0")
        True
        >>> matches_version("+", "21.0.0")
        True
    """
    if not requested or requested == "+":
        return True
    if requested.endswith("+"):
        return candidate.startswith(requested[:-1])
    return candidate == requested


class LocalMavenProbe:
    """
    Checks declared dependencies against Maven-layout directories.

    Example:
        probe = LocalMavenProbe()
        result = probe.probe(deps, [sdk / 'extras/android/m2repository'])
        if not result.is_available:
            ...
    """

    def probe(
        self, dependencies: Iterable[Dependency], repositories: Sequence[Path]
    ) -> ProbeResult:
        """
        Probe whether every dependency resolves from the repositories.

        Args:
            dependencies: Dependencies to look up
            repositories: Local repository roots, searched in order

        Returns:
            AVAILABLE if all resolve, UNAVAILABLE if any does not,
            INDETERMINATE if the lookup itself failed
        """
        try:
            for dependency in dependencies:
                if self.find_artifact(dependency, repositories) is None:
                    logger.debug(f"Dependency {dependency} not found locally")
                    return ProbeResult.UNAVAILABLE
            return ProbeResult.AVAILABLE
        except Exception as e:
            logger.debug(f"Dependency probe failed, treating as unavailable: {e}")
            return ProbeResult.INDETERMINATE

    def find_artifact(
        self, dependency: Dependency, repositories: Sequence[Path]
    ) -> Optional[Path]:
        """
        Find the version directory providing a dependency.

        Returns:
            The newest matching version directory, or None
        """
        if not dependency.group:
            raise ValueError(f"Dependency {dependency} has no group")

        for repository in repositories:
            artifact_dir = Path(repository).joinpath(
                *dependency.group.split("."), dependency.name
            )
            if not artifact_dir.is_dir():
                continue

            for version in self._candidate_versions(artifact_dir, dependency):
                version_dir = artifact_dir / version
                if self._has_artifact(version_dir, dependency.name, version):
                    return version_dir
        return None

    def _candidate_versions(
        self, artifact_dir: Path, dependency: Dependency
    ) -> List[str]:
        versions = [
            item.name
            for item in artifact_dir.iterdir()
            if item.is_dir() and matches_version(dependency.version, item.name)
        ]
        return sorted(versions, key=_version_key, reverse=True)

    def _has_artifact(self, version_dir: Path, name: str, version: str) -> bool:
        stem = f"{name}-{version}"
        return any(
            (version_dir / f"{stem}{extension}").is_file()
            for extension in ARTIFACT_EXTENSIONS
        )
