"""
Declared build requirements.

A read-only view of what the consuming build declares: build tools
revision, compile target and library dependencies grouped by configuration.
It is computed fresh for each resolution pass and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

PLATFORM_PREFIX = "android-"
GOOGLE_API_PREFIX = "Google Inc.:Google APIs:"
GOOGLE_GDK_PREFIX = "Google Inc.:Glass Development Kit Preview:"

GOOGLE_APIS_ADDON_PREFIX = "addon-google_apis-google-"
GOOGLE_GDK_ADDON_PREFIX = "addon-google_gdk-google-"


@dataclass(frozen=True)
class Dependency:
    """
    A declared library dependency.

    Attributes:
        group: Publisher group (e.g. 'com.android.support')
        name: Artifact name (e.g. 'support-v4')
        version: Requested version, possibly dynamic ('19.+'), or None
    """

    group: Optional[str]
    name: str
    version: Optional[str] = None

    @classmethod
    def parse(cls, notation: str) -> "Dependency":
        """
        Parse ``group:name[:version][@extension]`` notation.

        Raises:
            ValueError: If notation has fewer than two or more than three parts
        """
        coordinates = notation.strip().split("@", 1)[0]
        parts = coordinates.split(":")
        if len(parts) < 2 or len(parts) > 3 or not parts[1]:
            raise ValueError(f"Invalid dependency notation: {notation!r}")

        group = parts[0] or None
        version = parts[2] if len(parts) == 3 and parts[2] else None
        return cls(group=group, name=parts[1], version=version)

    def __str__(self) -> str:
        coordinates = f"{self.group or ''}:{self.name}"
        if self.version:
            coordinates += f":{self.version}"
        return coordinates


@dataclass(frozen=True)
class BuildRequirements:
    """
    Build configuration consumed by the package resolver.

    Attributes:
        has_android_plugin: Whether the build declares a target platform at all
        build_tools_revision: Build tools revision (e.g. '19.0.3')
        compile_sdk_version: Compile target (e.g. 'android-19')
        configurations: Configuration name -> declared dependencies
        offline: Whether this is an offline build
    """

    has_android_plugin: bool = False
    build_tools_revision: Optional[str] = None
    compile_sdk_version: Optional[str] = None
    configurations: Mapping[str, Tuple[Dependency, ...]] = field(default_factory=dict)
    offline: bool = False

    def __post_init__(self):
        frozen = {name: tuple(deps) for name, deps in self.configurations.items()}
        object.__setattr__(self, "configurations", MappingProxyType(frozen))

    def all_dependencies(self) -> Iterable[Dependency]:
        for dependencies in self.configurations.values():
            yield from dependencies

    def dependencies_with_group(self, group: str) -> List[Dependency]:
        """
        Find all dependencies in all configurations that have group.

        Args:
            group: The publisher group to match on

        Returns:
            Matching dependencies in declaration order
        """
        return [dep for dep in self.all_dependencies() if dep.group == group]


# =============================================================================
# Compile Target Classification
# =============================================================================


class TargetKind(Enum):
    """Dependency group a compile target belongs to."""

    PLATFORM = "platform"
    GOOGLE_APIS = "google-apis"
    GLASS_PREVIEW = "glass-preview"
    UNCLASSIFIED = "unclassified"


class SdkFolder(Enum):
    """SDK folder a compile-target component is installed into."""

    PLATFORMS = "platforms"
    ADD_ONS = "add-ons"


def classify_compile_target(identifier: str) -> TargetKind:
    """
    Classify a compile target identifier by prefix.

    Example:
        >>> classify_compile_target("Google Inc.:Google APIs:19")
        <TargetKind.GOOGLE_APIS: 'google-apis'>
    """
    if identifier.startswith(GOOGLE_API_PREFIX):
        return TargetKind.GOOGLE_APIS
    if identifier.startswith(GOOGLE_GDK_PREFIX):
        return TargetKind.GLASS_PREVIEW
    if identifier.startswith(PLATFORM_PREFIX):
        return TargetKind.PLATFORM
    return TargetKind.UNCLASSIFIED


def compile_target_components(identifier: str) -> List[Tuple[SdkFolder, str]]:
    """
    Derive the SDK components a compile target needs, in install order.

    Vendor add-ons need their base platform, but the SDK manager does not
    follow that dependency by itself, so the base platform comes first.

    Args:
        identifier: Compile target identifier

    Returns:
        List of (folder, package name) pairs

    Example:
        >>> compile_target_components("Google Inc.:Google APIs:19")
        [(<SdkFolder.PLATFORMS: 'platforms'>, 'android-19'),
         (<SdkFolder.ADD_ONS: 'add-ons'>, 'addon-google_apis-google-19')]
    """
    kind = classify_compile_target(identifier)

    if kind is TargetKind.GOOGLE_APIS:
        api = identifier[len(GOOGLE_API_PREFIX) :]
        return [
            (SdkFolder.PLATFORMS, PLATFORM_PREFIX + api),
            (SdkFolder.ADD_ONS, GOOGLE_APIS_ADDON_PREFIX + api),
        ]
    if kind is TargetKind.GLASS_PREVIEW:
        api = identifier[len(GOOGLE_GDK_PREFIX) :]
        return [(SdkFolder.ADD_ONS, GOOGLE_GDK_ADDON_PREFIX + api)]
    return [(SdkFolder.PLATFORMS, identifier)]


def normalize_compile_sdk_version(value: Union[int, str]) -> str:
    """
    Normalize a compile target declaration.

    A bare API level (``19`` or ``"19"``) means the ``android-19`` platform.
    """
    text = str(value).strip()
    if text.isdigit():
        return f"{PLATFORM_PREFIX}{text}"
    return text


def group_dependencies(
    configurations: Mapping[str, Iterable[Union[str, Dependency]]],
) -> Dict[str, Tuple[Dependency, ...]]:
    """Convert notation strings to Dependency objects per configuration."""
    return {
        name: tuple(
            dep if isinstance(dep, Dependency) else Dependency.parse(dep)
            for dep in deps
        )
        for name, deps in configurations.items()
    }
