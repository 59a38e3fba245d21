"""
Pytest configuration and shared fixtures for AndroidSdkKit tests.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from androidsdkkit.core.environment import EnvironmentSnapshot
from androidsdkkit.packages.android_command import AndroidCommand
from androidsdkkit.sdk.downloader import Downloader


# ============================================================================
# Test Doubles
# ============================================================================


class RecordingAndroidCommand(AndroidCommand):
    """
    Package manager fake.

    Records every requested filter and returns a configurable exit status.
    When install_into is set, a successful update creates a non-empty folder
    at install_into[filter], mimicking a real installation.
    """

    def __init__(
        self,
        exit_codes: Optional[Dict[str, int]] = None,
        install_into: Optional[Dict[str, Path]] = None,
    ):
        self.requested: List[str] = []
        self.exit_codes = exit_codes or {}
        self.install_into = install_into or {}

    def update(self, package_filter: str) -> int:
        self.requested.append(package_filter)
        code = self.exit_codes.get(package_filter, 0)
        target = self.install_into.get(package_filter)
        if code == 0 and target is not None:
            target.mkdir(parents=True, exist_ok=True)
            (target / "source.properties").write_text("Pkg.Revision=1\n")
        return code


class RecordingDownloader(Downloader):
    """Downloader fake that writes a minimal SDK layout into the target."""

    def __init__(self, fail_with: Optional[Exception] = None):
        self.targets: List[Path] = []
        self.fail_with = fail_with

    def download(self, target: Path) -> None:
        self.targets.append(Path(target))
        if self.fail_with is not None:
            raise self.fail_with
        (target / "tools").mkdir(parents=True, exist_ok=True)
        (target / "tools" / "android").write_text("#!/bin/sh\n")


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def recording_command() -> RecordingAndroidCommand:
    """Package manager fake returning 0 for every filter."""
    return RecordingAndroidCommand()


@pytest.fixture
def recording_downloader() -> RecordingDownloader:
    """Downloader fake that always succeeds."""
    return RecordingDownloader()


@pytest.fixture
def build_root(tmp_path: Path) -> Path:
    """Empty build root directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def user_home(tmp_path: Path) -> Path:
    """Isolated user home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def make_environment(user_home: Path):
    """Factory for environment snapshots rooted at the isolated home."""

    def factory(android_home: Optional[str] = None, os_family: str = "linux"):
        variables = {}
        if android_home is not None:
            variables["ANDROID_HOME"] = android_home
        return EnvironmentSnapshot(
            user_home=user_home, variables=variables, os_family=os_family
        )

    return factory


@pytest.fixture
def sdk_root(tmp_path: Path) -> Path:
    """Bare SDK root directory with no packages installed."""
    root = tmp_path / "sdk"
    root.mkdir()
    return root


@pytest.fixture
def populate():
    """Return a helper creating a path as a non-empty directory."""

    def create(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        (path / "source.properties").write_text("Pkg.Revision=1\n")
        return path

    return create


@pytest.fixture
def command_class():
    """The recording package manager class, for tests needing custom codes."""
    return RecordingAndroidCommand


@pytest.fixture
def downloader_class():
    """The recording downloader class, for tests needing failures."""
    return RecordingDownloader
