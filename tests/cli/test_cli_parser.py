"""
Unit tests for the CLI parser and command dispatch.
"""

from unittest.mock import patch

import pytest

from androidsdkkit.cli.parser import CLI
from androidsdkkit.core.exceptions import InconsistentStateError
from androidsdkkit.manager import SyncResult
from androidsdkkit.packages.resolver import ResolutionReport


class TestArgumentParsing:
    """Test argument parsing."""

    def test_global_options(self, tmp_path):
        args = CLI().parse_args(
            ["-v", "--project-root", str(tmp_path), "--config", "ci.yaml", "locate"]
        )
        assert args.verbose is True
        assert args.project_root == tmp_path
        assert str(args.config) == "ci.yaml"
        assert args.command == "locate"

    def test_resolve_sdk_option(self, tmp_path):
        args = CLI().parse_args(["resolve", "--sdk", str(tmp_path)])
        assert args.sdk == tmp_path

    def test_sync_offline(self):
        assert CLI().parse_args(["sync", "--offline"]).offline is True
        assert CLI().parse_args(["sync"]).offline is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "AndroidSdkKit" in capsys.readouterr().out


class TestRun:
    """Test CLI.run exit codes."""

    def test_no_command_prints_help(self, capsys):
        assert CLI().run([]) == 1
        assert "usage: sdkkit" in capsys.readouterr().out

    def test_locate_prints_sdk_root(self, tmp_path, capsys):
        sdk = tmp_path / "sdk"
        with patch("androidsdkkit.manager.SdkManager.locate", return_value=sdk):
            code = CLI().run(["--project-root", str(tmp_path), "locate"])

        assert code == 0
        assert str(sdk) in capsys.readouterr().out

    def test_domain_error_exit_code(self, tmp_path):
        error = InconsistentStateError("/missing", "local.properties")
        with patch("androidsdkkit.manager.SdkManager.locate", side_effect=error):
            assert CLI().run(["--project-root", str(tmp_path), "locate"]) == 1

    def test_keyboard_interrupt(self, tmp_path):
        with patch(
            "androidsdkkit.manager.SdkManager.locate", side_effect=KeyboardInterrupt
        ):
            assert CLI().run(["--project-root", str(tmp_path), "locate"]) == 130

    def test_resolve_with_explicit_sdk(self, tmp_path, capsys):
        (tmp_path / "androidsdkkit.yaml").write_text(
            "android:\n  compile_sdk_version: 19\n  build_tools_revision: 19.0.3\n"
        )
        sdk = tmp_path / "sdk"
        sdk.mkdir()
        report = ResolutionReport(installed=["platform-tools"])

        with patch(
            "androidsdkkit.manager.SdkManager.resolve", return_value=report
        ) as resolve, patch("androidsdkkit.manager.SdkManager.locate") as locate:
            code = CLI().run(
                ["--project-root", str(tmp_path), "resolve", "--sdk", str(sdk)]
            )

        assert code == 0
        locate.assert_not_called()
        resolve.assert_called_once_with(sdk.resolve())
        assert "platform-tools" in capsys.readouterr().out

    def test_invalid_manifest(self, tmp_path):
        (tmp_path / "androidsdkkit.yaml").write_text("android: [unclosed\n")
        assert CLI().run(["--project-root", str(tmp_path), "sync"]) == 1

    def test_sync_offline(self, tmp_path, capsys):
        with patch("androidsdkkit.manager.SdkManager.locate") as locate:
            code = CLI().run(["--project-root", str(tmp_path), "sync", "--offline"])

        assert code == 0
        locate.assert_not_called()
        assert "Offline build" in capsys.readouterr().out

    def test_sync_reports_result(self, tmp_path, capsys):
        sdk = tmp_path / "sdk"
        result = SyncResult(sdk, ResolutionReport(installed=["android-19"]))
        with patch("androidsdkkit.manager.SdkManager.sync", return_value=result):
            code = CLI().run(["--project-root", str(tmp_path), "sync"])

        assert code == 0
        output = capsys.readouterr().out
        assert "Android SDK ready" in output
        assert "android-19" in output
