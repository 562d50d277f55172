"""Tests for aws_lc_sys_builder.publish (include staging and cargo directives)."""

import io
import logging
from pathlib import Path

import pytest


def _contents(root: Path) -> dict[str, str]:
    return {str(p.relative_to(root)): p.read_text() for p in root.rglob("*") if p.is_file()}


class TestSetupIncludePaths:
    def test_earlier_file_wins(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.publish import setup_include_paths

        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "a.h").write_text("first")
        (second / "a.h").write_text("second")
        (second / "b.h").write_text("only-second")

        staged = setup_include_paths(tmp_path / "out", [first, second])
        assert staged == tmp_path / "out" / "include"
        assert _contents(staged) == {"a.h": "first", "b.h": "only-second"}

    def test_nested_directories_merge_with_earliest_winning(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.publish import setup_include_paths

        first, second = tmp_path / "first" / "openssl", tmp_path / "second" / "openssl"
        first.mkdir(parents=True)
        second.mkdir(parents=True)
        (first / "base.h").write_text("rust")
        (second / "base.h").write_text("vendored")
        (second / "aes.h").write_text("aes")

        staged = setup_include_paths(tmp_path / "out", [first.parent, second.parent])
        assert _contents(staged) == {"openssl/base.h": "rust", "openssl/aes.h": "aes"}

    def test_idempotent(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.publish import setup_include_paths

        first, second = tmp_path / "first", tmp_path / "second"
        (first / "sub").mkdir(parents=True)
        second.mkdir()
        (first / "sub" / "x.h").write_text("1")
        (second / "x.h").write_text("2")
        staged = setup_include_paths(tmp_path / "out", [first, second])
        once = _contents(staged)
        setup_include_paths(tmp_path / "out", [first, second])
        assert _contents(staged) == once

    def test_missing_roots_skipped(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.publish import setup_include_paths

        staged = setup_include_paths(tmp_path / "out", [tmp_path / "nope"])
        assert staged.is_dir()
        assert list(staged.iterdir()) == []

    def test_broken_symlink_skipped_and_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        from aws_lc_sys_builder.publish import setup_include_paths

        root = tmp_path / "root"
        root.mkdir()
        (root / "a.h").write_text("a")
        (root / "dangling.h").symlink_to(tmp_path / "missing.h")

        with caplog.at_level(logging.DEBUG, logger="aws_lc_sys_builder.publish.includes"):
            staged = setup_include_paths(tmp_path / "out", [root])
        assert _contents(staged) == {"a.h": "a"}
        assert "not a file or directory" in caplog.text

    def test_file_directory_clash_raises_configuration_error(self, tmp_path: Path) -> None:
        from aws_lc_sys_builder.errors import ConfigurationError
        from aws_lc_sys_builder.publish import setup_include_paths

        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        (second / "openssl").mkdir(parents=True)
        (first / "openssl").write_text("not a directory")
        (second / "openssl" / "base.h").write_text("base")

        with pytest.raises(ConfigurationError, match="Failed to stage include paths"):
            setup_include_paths(tmp_path / "out", [first, second])

    def test_include_path_set_order(self, manifest_dir: Path) -> None:
        from aws_lc_sys_builder.layout import resolve_layout
        from aws_lc_sys_builder.publish import include_path_set

        paths = include_path_set(manifest_dir, resolve_layout(None), (Path("/extra/a"),))
        assert paths == [
            manifest_dir / "include",
            manifest_dir / "generated-include",
            manifest_dir / "aws-lc" / "include",
            Path("/extra/a"),
        ]


class TestDirectiveSink:
    def test_writes_and_records(self) -> None:
        from aws_lc_sys_builder.publish import DirectiveSink

        stream = io.StringIO()
        sink = DirectiveSink(stream)
        sink.rustc_cfg("linux_x86_64")
        sink.rerun_if_env_changed("AWS_LC_SYS_STATIC")
        assert stream.getvalue() == (
            "cargo:rustc-cfg=linux_x86_64\ncargo:rerun-if-env-changed=AWS_LC_SYS_STATIC\n"
        )
        assert sink.values("rustc-cfg") == ["linux_x86_64"]


class TestLinkDirectives:
    def test_libname(self) -> None:
        from aws_lc_sys_builder.publish import LibraryUnit

        assert LibraryUnit.CRYPTO.libname("aws_lc_0_14_1") == "aws_lc_0_14_1_crypto"
        assert LibraryUnit.RUST_WRAPPER.libname() == "rust_wrapper"

    def test_without_ssl(self) -> None:
        from aws_lc_sys_builder.probe import LinkageMode
        from aws_lc_sys_builder.publish import DirectiveSink, emit_link_directives

        sink = DirectiveSink(io.StringIO())
        names = emit_link_directives(sink, Path("/out/build/artifacts"), LinkageMode.STATIC, "p", False)
        assert names == ["p_crypto", "p_rust_wrapper"]
        assert sink.values("rustc-link-search") == ["native=/out/build/artifacts"]
        assert sink.values("rustc-link-lib") == ["static=p_crypto", "static=p_rust_wrapper"]

    def test_with_ssl_dynamic(self) -> None:
        from aws_lc_sys_builder.probe import LinkageMode
        from aws_lc_sys_builder.publish import DirectiveSink, emit_link_directives

        sink = DirectiveSink(io.StringIO())
        emit_link_directives(sink, Path("/o"), LinkageMode.DYNAMIC, "p", True)
        assert sink.values("rustc-link-lib") == ["dylib=p_crypto", "dylib=p_ssl", "dylib=p_rust_wrapper"]


class TestIncludeDirectives:
    def test_rand_extra_only_when_given(self) -> None:
        from aws_lc_sys_builder.publish import DirectiveSink, emit_include_directives

        sink = DirectiveSink(io.StringIO())
        emit_include_directives(sink, Path("/out/include"), None, None)
        assert sink.values("include") == ["/out/include"]

        sink = DirectiveSink(io.StringIO())
        emit_include_directives(
            sink, Path("/out/include"), Path("/crate/aws-lc/crypto/rand_extra"), [Path("/x")]
        )
        assert sink.values("include") == [
            "/out/include",
            "/crate/aws-lc/crypto/rand_extra",
            "/x",
        ]

    def test_rerun_triggers(self) -> None:
        from aws_lc_sys_builder.publish import DirectiveSink, emit_rerun_triggers

        sink = DirectiveSink(io.StringIO())
        emit_rerun_triggers(sink, "AWS_LC_SYS_STATIC")
        assert sink.lines == [
            "cargo:rerun-if-changed=builder/",
            "cargo:rerun-if-changed=aws-lc/",
            "cargo:rerun-if-env-changed=AWS_LC_SYS_STATIC",
        ]
