"""ambit Linker module.

Applies resolved link pairs to the filesystem: path configuration, the
filesystem capability, wildcard matching and the planner itself.
"""
from __future__ import annotations

from ambit.linker.errors import LinkError, LinkErrorKind
from ambit.linker.filesystem import Filesystem, LocalFilesystem
from ambit.linker.paths import CONFIG_NAME, AmbitPaths
from ambit.linker.planner import LinkAction, LinkOutcome, LinkPlanner, LinkReport

__all__ = [
    "AmbitPaths",
    "CONFIG_NAME",
    "Filesystem",
    "LocalFilesystem",
    "LinkPlanner",
    "LinkReport",
    "LinkOutcome",
    "LinkAction",
    "LinkError",
    "LinkErrorKind",
]
