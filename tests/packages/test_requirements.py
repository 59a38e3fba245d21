"""
Unit tests for build requirements and compile target classification.
"""

import pytest

from androidsdkkit.packages.requirements import (
    BuildRequirements,
    Dependency,
    SdkFolder,
    TargetKind,
    classify_compile_target,
    compile_target_components,
    group_dependencies,
    normalize_compile_sdk_version,
)


class TestDependency:
    """Test dependency notation parsing."""

    def test_full_notation(self):
        dep = Dependency.parse("com.android.support:support-v4:19.1.0")
        assert dep == Dependency("com.android.support", "support-v4", "19.1.0")

    def test_without_version(self):
        dep = Dependency.parse("com.google.android.gms:play-services")
        assert dep.version is None

    def test_extension_is_dropped(self):
        dep = Dependency.parse("com.android.support:appcompat-v7:19.1.0@aar")
        assert dep.version == "19.1.0"

    def test_empty_group(self):
        assert Dependency.parse(":local-lib:1.0").group is None

    @pytest.mark.parametrize("notation", ["junit", "a:b:c:d", "group::1.0"])
    def test_invalid(self, notation):
        with pytest.raises(ValueError, match="Invalid dependency notation"):
            Dependency.parse(notation)

    def test_str(self):
        assert str(Dependency("g", "n", "1")) == "g:n:1"
        assert str(Dependency("g", "n")) == "g:n"


class TestBuildRequirements:
    """Test BuildRequirements queries."""

    def test_dependencies_with_group_spans_configurations(self):
        support = Dependency("com.android.support", "support-v4", "19.1.0")
        appcompat = Dependency("com.android.support", "appcompat-v7", "19.+")
        requirements = BuildRequirements(
            configurations={
                "compile": [support, Dependency("junit", "junit", "4.11")],
                "debugCompile": [appcompat],
            }
        )

        assert requirements.dependencies_with_group("com.android.support") == [
            support,
            appcompat,
        ]
        assert requirements.dependencies_with_group("com.example") == []

    def test_configurations_are_read_only(self):
        requirements = BuildRequirements(configurations={"compile": []})
        with pytest.raises(TypeError):
            requirements.configurations["other"] = ()

    def test_defaults(self):
        requirements = BuildRequirements()
        assert requirements.has_android_plugin is False
        assert list(requirements.all_dependencies()) == []


class TestClassification:
    """Test compile target classification."""

    @pytest.mark.parametrize(
        "identifier,kind",
        [
            ("android-19", TargetKind.PLATFORM),
            ("Google Inc.:Google APIs:19", TargetKind.GOOGLE_APIS),
            ("Google Inc.:Glass Development Kit Preview:19", TargetKind.GLASS_PREVIEW),
            ("Vendor:Thing:19", TargetKind.UNCLASSIFIED),
        ],
    )
    def test_classify(self, identifier, kind):
        assert classify_compile_target(identifier) is kind

    def test_google_apis_needs_base_platform_first(self):
        assert compile_target_components("Google Inc.:Google APIs:19") == [
            (SdkFolder.PLATFORMS, "android-19"),
            (SdkFolder.ADD_ONS, "addon-google_apis-google-19"),
        ]

    def test_glass_preview_addon_only(self):
        assert compile_target_components(
            "Google Inc.:Glass Development Kit Preview:19"
        ) == [(SdkFolder.ADD_ONS, "addon-google_gdk-google-19")]

    def test_platform_verbatim(self):
        assert compile_target_components("android-21") == [
            (SdkFolder.PLATFORMS, "android-21")
        ]

    def test_unclassified_treated_as_platform(self):
        assert compile_target_components("android-L") == [
            (SdkFolder.PLATFORMS, "android-L")
        ]
        assert compile_target_components("Vendor:Thing:19") == [
            (SdkFolder.PLATFORMS, "Vendor:Thing:19")
        ]


class TestHelpers:
    """Test normalization helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [(19, "android-19"), ("19", "android-19"), ("android-19", "android-19")],
    )
    def test_normalize_compile_sdk_version(self, value, expected):
        assert normalize_compile_sdk_version(value) == expected

    def test_group_dependencies(self):
        grouped = group_dependencies(
            {"compile": ["com.android.support:support-v4:19.1.0"]}
        )
        assert grouped["compile"][0].name == "support-v4"
