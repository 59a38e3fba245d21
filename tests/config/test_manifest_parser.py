"""
Unit tests for the build manifest parser.
"""

import pytest

from androidsdkkit.config.parser import find_manifest, parse_manifest
from androidsdkkit.core.exceptions import ConfigError
from androidsdkkit.packages.requirements import Dependency


def write_manifest(directory, content):
    path = directory / "androidsdkkit.yaml"
    path.write_text(content)
    return path


class TestParseManifest:
    """Test parse_manifest."""

    def test_full_manifest(self, tmp_path):
        path = write_manifest(
            tmp_path,
            """
android:
  compile_sdk_version: 19
  build_tools_revision: 19.0.3
dependencies:
  compile:
    - com.android.support:support-v4:19.1.0
    - group: com.google.android.gms
      name: play-services
      version: 4.3.23
  testCompile:
    - junit:junit:4.11
""",
        )

        requirements = parse_manifest(path)

        assert requirements.has_android_plugin is True
        assert requirements.compile_sdk_version == "android-19"
        assert requirements.build_tools_revision == "19.0.3"
        assert requirements.configurations["compile"] == (
            Dependency("com.android.support", "support-v4", "19.1.0"),
            Dependency("com.google.android.gms", "play-services", "4.3.23"),
        )
        assert requirements.configurations["testCompile"][0].group == "junit"
        assert requirements.offline is False

    def test_string_compile_target(self, tmp_path):
        path = write_manifest(
            tmp_path,
            """
android:
  compile_sdk_version: "Google Inc.:Google APIs:19"
  build_tools_revision: "19.0.3"
""",
        )
        assert parse_manifest(path).compile_sdk_version == "Google Inc.:Google APIs:19"

    def test_missing_manifest(self, tmp_path):
        requirements = parse_manifest(tmp_path / "androidsdkkit.yaml")
        assert requirements.has_android_plugin is False
        assert dict(requirements.configurations) == {}

    def test_empty_manifest(self, tmp_path):
        assert not parse_manifest(write_manifest(tmp_path, "")).has_android_plugin

    def test_dependencies_without_android(self, tmp_path):
        path = write_manifest(
            tmp_path,
            "dependencies:\n  compile:\n    - com.android.support:support-v4:19.1.0\n",
        )
        requirements = parse_manifest(path)
        assert requirements.has_android_plugin is False
        assert len(requirements.dependencies_with_group("com.android.support")) == 1

    def test_offline_flag(self, tmp_path):
        path = write_manifest(tmp_path, "offline: true\n")
        assert parse_manifest(path).offline is True
        assert parse_manifest(tmp_path / "missing.yaml", offline=True).offline is True

    def test_missing_build_tools_revision(self, tmp_path):
        path = write_manifest(tmp_path, "android:\n  compile_sdk_version: 19\n")
        with pytest.raises(ConfigError, match="android.build_tools_revision"):
            parse_manifest(path)

    def test_missing_compile_sdk_version(self, tmp_path):
        path = write_manifest(tmp_path, "android:\n  build_tools_revision: 19.0.3\n")
        with pytest.raises(ConfigError, match="android.compile_sdk_version"):
            parse_manifest(path)

    @pytest.mark.parametrize("revision", ["19.10", "21", "true"])
    def test_unquoted_revision_rejected(self, tmp_path, revision):
        """Test revisions YAML would not read as text are refused."""
        path = write_manifest(
            tmp_path,
            f"android:\n  compile_sdk_version: 19\n  build_tools_revision: {revision}\n",
        )
        with pytest.raises(ConfigError, match="must be a quoted string"):
            parse_manifest(path)

    def test_quoted_revision_kept_verbatim(self, tmp_path):
        path = write_manifest(
            tmp_path,
            'android:\n  compile_sdk_version: 19\n  build_tools_revision: "19.10"\n',
        )
        assert parse_manifest(path).build_tools_revision == "19.10"

    def test_invalid_yaml(self, tmp_path):
        path = write_manifest(tmp_path, "android: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML syntax"):
            parse_manifest(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = write_manifest(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigError, match="top level must be a mapping"):
            parse_manifest(path)

    def test_error_names_file(self, tmp_path):
        path = write_manifest(tmp_path, "dependencies:\n  compile: nope\n")
        with pytest.raises(ConfigError) as exc_info:
            parse_manifest(path)
        assert str(path) in str(exc_info.value)
        assert "dependencies.compile must be a list" in str(exc_info.value)

    def test_invalid_notation(self, tmp_path):
        path = write_manifest(tmp_path, "dependencies:\n  compile:\n    - junit\n")
        with pytest.raises(ConfigError, match="Invalid dependency notation"):
            parse_manifest(path)

    def test_mapping_requires_name(self, tmp_path):
        path = write_manifest(
            tmp_path, "dependencies:\n  compile:\n    - group: com.example\n"
        )
        with pytest.raises(ConfigError, match="missing required field: name"):
            parse_manifest(path)


class TestFindManifest:
    """Test find_manifest."""

    def test_default_location(self, tmp_path):
        assert find_manifest(tmp_path) == tmp_path / "androidsdkkit.yaml"

    def test_explicit_file(self, tmp_path):
        custom = tmp_path / "ci.yaml"
        assert find_manifest(tmp_path, custom) == custom
