"""
SDK package resolution for AndroidSdkKit.

This package decides which SDK components a build is missing and installs
them through the SDK's package manager.

Available Components:
--------------------
- BuildRequirements: Declared build configuration
- Dependency: A declared library dependency
- AndroidCommand: Abstract package manager gateway
- SdkAndroidCommand: Runs the SDK's ``android`` tool
- LocalMavenProbe: Availability check against local repositories
- PackageResolver: Runs the five sub-resolutions

Example Usage:
-------------
    from androidsdkkit.packages import BuildRequirements, resolve_packages

    requirements = BuildRequirements(
        has_android_plugin=True,
        build_tools_revision='19.0.3',
        compile_sdk_version='android-19',
    )
    report = resolve_packages(sdk_root, requirements)
"""

from androidsdkkit.packages.android_command import (
    AndroidCommand,
    SdkAndroidCommand,
)
from androidsdkkit.packages.repository import (
    LocalMavenProbe,
    ProbeResult,
)
from androidsdkkit.packages.requirements import (
    BuildRequirements,
    Dependency,
    SdkFolder,
    TargetKind,
    classify_compile_target,
    compile_target_components,
)
from androidsdkkit.packages.resolver import (
    PackageResolver,
    ResolutionReport,
    resolve_packages,
)

__all__ = [
    "AndroidCommand",
    "SdkAndroidCommand",
    "LocalMavenProbe",
    "ProbeResult",
    "BuildRequirements",
    "Dependency",
    "SdkFolder",
    "TargetKind",
    "classify_compile_target",
    "compile_target_components",
    "PackageResolver",
    "ResolutionReport",
    "resolve_packages",
]
