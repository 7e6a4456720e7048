"""
Build tooling.

Usage:
    from monobase.build import generate_build_constants, build_binary

    constants = asyncio.run(generate_build_constants())
    ok = build_binary(constants)
"""

from .bundler import build_binary, build_command
from .constants import (
    BuildConstants,
    constants_to_define_args,
    generate_build_constants,
    parse_define_args,
)

__all__ = [
    "BuildConstants",
    "build_binary",
    "build_command",
    "constants_to_define_args",
    "generate_build_constants",
    "parse_define_args",
]
