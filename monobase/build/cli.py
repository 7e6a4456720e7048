"""
Monobase API build script.

Compiles the API into a standalone binary with build-time constants injected.

Usage:
    monobase-build
    python -m monobase.build
"""

import argparse
import asyncio
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from monobase.config import get_settings
from monobase.logging import create_logger

from .bundler import build_binary
from .constants import generate_build_constants


def main(argv: list[str] | None = None) -> int:
    """Generate constants, run the bundler, and return the process exit code."""
    parser = argparse.ArgumentParser(
        prog="monobase-build",
        description="Build the Monobase API standalone binary",
    )
    parser.parse_args(argv)

    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    logger = create_logger(settings, name="build")

    print(f"\n{'=' * 60}\nMonobase API Build\n{'=' * 60}\n")

    try:
        print("Generating build constants...")
        constants = asyncio.run(generate_build_constants(settings))
        print("Build constants generated:")
        print(f"   Version: {constants.build_version}")
        print(f"   Git: {constants.short_commit} ({constants.git_branch})")
        print(f"   Compiler: {settings.bundler} {constants.compiler_version}")
        print(f"   Built: {constants.build_time}")

        success = build_binary(constants, settings)
    except Exception as e:
        logger.error("build_fatal_error", error=str(e), error_type=type(e).__name__)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    print(f"\n{'=' * 60}")
    if not success:
        return 1

    print("Build complete!\n")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
