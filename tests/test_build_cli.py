"""
Tests for the bundler invocation and the build entrypoint.
"""

import subprocess

import pytest

from monobase.build import bundler, cli
from monobase.build.bundler import PRODUCTION_DEFINE, build_binary, build_command
from monobase.build.constants import BuildConstants, parse_define_args

CONSTANTS = BuildConstants(
    build_version="1.2.3",
    build_time="October 18, 2026 at 12:00:05 PM UTC",
    build_timestamp="2026-10-18T12:00:05.113Z",
    git_commit="0123456789abcdef",
    git_branch="main",
    compiler_version="1.1.30",
)


class TestBuildCommand:
    def test_fixed_flags_then_constants(self, make_settings):
        settings = make_settings()

        command = build_command(CONSTANTS, settings)

        assert command[:7] == [
            "bun", "build", "--compile", "--minify", "--sourcemap", "--define", PRODUCTION_DEFINE,
        ]
        assert command[7:14] == [
            "--external", "ajv",
            "--external", "ajv-draft-04",
            "src/index.ts", "--outfile", "dist/server",
        ]
        assert len(command) == 14 + 12

    def test_defines_parse_back_to_constants(self, make_settings):
        defines = parse_define_args(build_command(CONSTANTS, make_settings()))

        assert defines.pop("process.env.NODE_ENV") == "production"
        assert BuildConstants.from_defines(defines) == CONSTANTS

    def test_uses_configured_bundler_and_paths(self, make_settings):
        settings = make_settings(
            bundler="/opt/bun/bin/bun",
            build_entry_point="src/main.ts",
            build_outfile="out/api",
            build_externals="sharp",
        )

        command = build_command(CONSTANTS, settings)

        assert command[0] == "/opt/bun/bin/bun"
        assert command[7:12] == ["--external", "sharp", "src/main.ts", "--outfile", "out/api"]


class TestBuildBinary:
    def test_success(self, monkeypatch, make_settings, tmp_path, capsys):
        calls = []

        def fake_run(command, **kwargs):
            calls.append((command, kwargs))
            return subprocess.CompletedProcess(command, 0, stdout="bundled 42 modules", stderr="")

        monkeypatch.setattr(bundler.subprocess, "run", fake_run)

        assert build_binary(CONSTANTS, make_settings(), cwd=tmp_path) is True

        command, kwargs = calls[0]
        assert command == build_command(CONSTANTS, make_settings())
        assert kwargs["cwd"] == tmp_path
        out = capsys.readouterr().out
        assert "bundled 42 modules" in out
        assert "Git: 0123456 (main)" in out

    def test_non_zero_exit_fails(self, monkeypatch, make_settings, capsys):
        monkeypatch.setattr(
            bundler.subprocess,
            "run",
            lambda command, **kwargs: subprocess.CompletedProcess(command, 1, stdout="", stderr="error: oops"),
        )

        assert build_binary(CONSTANTS, make_settings()) is False
        assert "error: oops" in capsys.readouterr().err

    def test_missing_bundler_fails(self, make_settings):
        settings = make_settings(bundler="monobase-test-missing-bundler")

        assert build_binary(CONSTANTS, settings) is False


class TestBuildEntrypoint:
    """Exit codes of the build script."""

    @pytest.fixture
    def fake_generate(self, monkeypatch):
        async def _generate(settings):
            return CONSTANTS

        monkeypatch.setattr(cli, "generate_build_constants", _generate)

    def test_exit_zero_on_success(self, monkeypatch, fake_generate):
        monkeypatch.setattr(cli, "build_binary", lambda constants, settings: True)

        assert cli.main([]) == 0

    def test_exit_one_on_failed_build(self, monkeypatch, fake_generate):
        monkeypatch.setattr(cli, "build_binary", lambda constants, settings: False)

        assert cli.main([]) == 1

    def test_exit_one_on_unexpected_error(self, monkeypatch, capsys):
        async def broken(settings):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(cli, "generate_build_constants", broken)

        assert cli.main([]) == 1
        assert "disk on fire" in capsys.readouterr().err

    def test_run_exits_with_main_status(self, monkeypatch):
        monkeypatch.setattr(cli, "main", lambda: 1)

        with pytest.raises(SystemExit) as exc:
            cli.run()

        assert exc.value.code == 1

    def test_without_git_or_bundler(self, monkeypatch, tmp_path):
        """Metadata falls back to sentinels; only the missing bundler fails the build."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BUNDLER", "monobase-test-missing-bundler")

        assert cli.main([]) == 1

    def test_invalid_configuration_exits_one(self, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        assert cli.main([]) == 1
        assert "LOG_LEVEL" in capsys.readouterr().err
