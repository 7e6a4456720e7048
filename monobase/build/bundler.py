"""Standalone binary compilation through the external bundler."""

import subprocess
import sys
from pathlib import Path

from monobase.config import Settings, get_settings
from monobase.logging import build_logger

from .constants import BuildConstants, constants_to_define_args

PRODUCTION_DEFINE = 'process.env.NODE_ENV="production"'


def build_command(constants: BuildConstants, settings: Settings) -> list[str]:
    """Full bundler command line, fixed flags first and build constants last."""
    command = [
        settings.bundler,
        "build",
        "--compile",
        "--minify",
        "--sourcemap",
        "--define",
        PRODUCTION_DEFINE,
    ]
    for name in settings.build_externals_list:
        command.extend(["--external", name])
    command.extend([settings.build_entry_point, "--outfile", settings.build_outfile])
    command.extend(constants_to_define_args(constants))
    return command


def build_binary(
    constants: BuildConstants,
    settings: Settings | None = None,
    *,
    cwd: Path | None = None,
) -> bool:
    """
    Run the bundler and report whether the build succeeded.

    Bundler output is echoed. A non-zero exit or a failure to start the
    bundler returns False.
    """
    settings = settings or get_settings()
    command = build_command(constants, settings)

    print("\nBuilding standalone binary...")
    print(f"Bundler: {settings.bundler} {constants.compiler_version}")
    print(f"Build constants: {len(constants.as_defines())} defined")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            cwd=cwd or Path.cwd(),
        )
    except (OSError, subprocess.SubprocessError) as e:
        build_logger.error("build_failed", error=str(e), error_type=type(e).__name__)
        print(f"Build failed: {e}")
        return False

    if result.stdout:
        print(result.stdout)
    if result.stderr:
        print(result.stderr, file=sys.stderr)

    if result.returncode != 0:
        build_logger.error("build_failed", exit_code=result.returncode)
        print("Build failed")
        return False

    print("Build successful!")
    print(f"Output: {settings.build_outfile}")
    print(f"Version: {constants.build_version}")
    print(f"Git: {constants.short_commit} ({constants.git_branch})")
    return True
