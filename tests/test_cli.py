"""Tests for aws_lc_sys_builder.cli."""

from pathlib import Path
from unittest.mock import patch

import pytest


class TestMain:
    def test_no_command_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        from aws_lc_sys_builder.cli.main import main

        with patch("sys.argv", ["aws-lc-sys-builder"]), pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "Usage: aws-lc-sys-builder" in capsys.readouterr().err

    def test_unknown_command_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        from aws_lc_sys_builder.cli.main import main

        with patch("sys.argv", ["aws-lc-sys-builder", "nope"]), pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "Unknown command: nope" in capsys.readouterr().err


class TestRunBuildArgv:
    def test_passes_manifest_dir_and_exits_with_status(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.cli.build import run_build_argv

        with patch("aws_lc_sys_builder.cli.build.run_build", return_value=0) as m:
            with pytest.raises(SystemExit) as exc:
                run_build_argv(["--manifest-dir", str(tmp_path)])
        assert exc.value.code == 0
        m.assert_called_once_with(manifest_dir=tmp_path)

    def test_failure_status_propagates(self) -> None:
        from aws_lc_sys_builder.cli.build import run_build_argv

        with patch("aws_lc_sys_builder.cli.build.run_build", return_value=1):
            with pytest.raises(SystemExit) as exc:
                run_build_argv([])
        assert exc.value.code == 1
