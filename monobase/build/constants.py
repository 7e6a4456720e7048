"""
Build-time constants.

Derives version, timestamp and git metadata for a build and serializes it
into bundler `--define` arguments. Every lookup degrades to a sentinel value
instead of failing the build.
"""

import asyncio
import json
import tomllib
from collections.abc import Sequence
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from monobase.config import Settings, get_settings
from monobase.constants import DEFAULT_VERSION, UNKNOWN
from monobase.logging import build_logger

DEFINE_FLAG = "--define"


class GitQueryError(RuntimeError):
    """A git command exited with a non-zero status."""


@dataclass(frozen=True)
class BuildConstants:
    """Snapshot of build metadata. Define keys are the upper-cased field names."""

    build_version: str
    build_time: str
    build_timestamp: str
    git_commit: str
    git_branch: str
    compiler_version: str

    @property
    def short_commit(self) -> str:
        return self.git_commit[:7]

    def as_defines(self) -> dict[str, str]:
        return {field.name.upper(): getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_defines(cls, defines: dict[str, Any]) -> "BuildConstants":
        return cls(**{field.name: defines[field.name.upper()] for field in fields(cls)})


def get_current_timestamp(now: datetime) -> str:
    """ISO 8601 UTC timestamp with millisecond precision, e.g. 2026-10-18T09:15:02.113Z."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_build_time(now: datetime) -> str:
    """Human-readable local build time, e.g. October 18, 2026 at 09:15:02 AM UTC."""
    local = now.astimezone()
    return f"{local:%B} {local.day}, {local:%Y} at {local:%I:%M:%S %p} {local.tzname()}"


def get_package_version(manifest_path: Path) -> str:
    """
    Read the declared version from a package manifest.

    `package.json` is read as JSON; a `.toml` manifest is read from
    `[project].version`. Returns DEFAULT_VERSION when the manifest is missing
    or unreadable, or the version is absent, empty or not a string.
    """
    try:
        if manifest_path.suffix == ".toml":
            with manifest_path.open("rb") as f:
                data = tomllib.load(f)
            project = data.get("project")
            version = project.get("version") if isinstance(project, dict) else None
        else:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
            version = data.get("version") if isinstance(data, dict) else None
    except (OSError, ValueError) as e:
        build_logger.warning("package_version_unreadable", path=str(manifest_path), error=str(e))
        return DEFAULT_VERSION

    if not isinstance(version, str) or not version.strip():
        build_logger.warning("package_version_missing", path=str(manifest_path))
        return DEFAULT_VERSION
    return version.strip()


async def _run_git(*args: str, cwd: Path) -> str:
    process = await asyncio.create_subprocess_exec(
        "git",
        *args,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        message = stderr.decode(errors="replace").strip()
        raise GitQueryError(message or f"git exited with status {process.returncode}")
    return stdout.decode(errors="replace").strip()


async def _git_value(field: str, args: tuple[str, ...], cwd: Path) -> str:
    if not (cwd / ".git").exists():
        return UNKNOWN
    try:
        return await _run_git(*args, cwd=cwd) or UNKNOWN
    except (OSError, GitQueryError) as e:
        build_logger.warning("git_query_failed", field=field, error=str(e))
        return UNKNOWN


async def get_git_commit(cwd: Path) -> str:
    """Full commit hash of HEAD, or UNKNOWN."""
    return await _git_value("commit", ("rev-parse", "HEAD"), cwd)


async def get_git_branch(cwd: Path) -> str:
    """Current branch name, or UNKNOWN."""
    return await _git_value("branch", ("rev-parse", "--abbrev-ref", "HEAD"), cwd)


async def get_compiler_version(bundler: str) -> str:
    """Version string reported by the bundler, or UNKNOWN."""
    try:
        process = await asyncio.create_subprocess_exec(
            bundler,
            "--version",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
    except OSError as e:
        build_logger.warning("compiler_version_unavailable", bundler=bundler, error=str(e))
        return UNKNOWN
    if process.returncode != 0:
        message = stderr.decode(errors="replace").strip()
        build_logger.warning(
            "compiler_version_unavailable",
            bundler=bundler,
            error=message or f"{bundler} exited with status {process.returncode}",
        )
        return UNKNOWN
    return stdout.decode(errors="replace").strip() or UNKNOWN


async def generate_build_constants(
    settings: Settings | None = None,
    *,
    cwd: Path | None = None,
    now: datetime | None = None,
) -> BuildConstants:
    """
    Generate all build constants.

    The git and bundler lookups run concurrently. No lookup failure escapes;
    each falls back to its sentinel.
    """
    settings = settings or get_settings()
    cwd = cwd or Path.cwd()
    now = now or datetime.now(timezone.utc)

    git_commit, git_branch, compiler_version = await asyncio.gather(
        get_git_commit(cwd),
        get_git_branch(cwd),
        get_compiler_version(settings.bundler),
    )

    return BuildConstants(
        build_version=get_package_version(cwd / settings.package_manifest),
        build_time=get_build_time(now),
        build_timestamp=get_current_timestamp(now),
        git_commit=git_commit,
        git_branch=git_branch,
        compiler_version=compiler_version,
    )


def constants_to_define_args(constants: BuildConstants) -> list[str]:
    """Convert build constants to `--define KEY=JSON` argument pairs."""
    args: list[str] = []
    for key, value in constants.as_defines().items():
        args.extend([DEFINE_FLAG, f"{key}={json.dumps(value)}"])
    return args


def parse_define_args(args: Sequence[str]) -> dict[str, Any]:
    """Parse `--define KEY=JSON` pairs back into a dict. Other arguments are ignored."""
    defines: dict[str, Any] = {}
    index = 0
    while index < len(args):
        if args[index] != DEFINE_FLAG:
            index += 1
            continue
        if index + 1 >= len(args):
            raise ValueError(f"{DEFINE_FLAG} without a value")
        key, sep, raw = args[index + 1].partition("=")
        if not sep or not key:
            raise ValueError(f"Malformed define: {args[index + 1]!r}")
        defines[key] = json.loads(raw)
        index += 2
    return defines
