"""Runtime facts that match expressions are evaluated against.

An ``EvaluationContext`` is built once per run, at the program boundary,
and passed explicitly to the expander.  Nothing in the evaluation path
reads the platform or environment on its own, so expansion stays a pure
function of (document, context).
"""
from __future__ import annotations

import socket
import sys
from dataclasses import dataclass
from typing import Final

# OS identifiers as produced by ``EvaluationContext.from_system``.
LINUX: Final[str] = "linux"
MACOS: Final[str] = "macos"
WINDOWS: Final[str] = "windows"

_BSDS: Final[frozenset[str]] = frozenset({"freebsd", "netbsd", "openbsd", "dragonfly"})

# Condition values that stand for a whole family of OS identifiers.
OS_FAMILIES: Final[dict[str, frozenset[str]]] = {
    "bsd": _BSDS,
    "unix": frozenset({LINUX, MACOS, "android", "bsd"}) | _BSDS,
}

_PLATFORM_PREFIXES: Final[tuple[tuple[str, str], ...]] = (
    ("linux", LINUX),
    ("darwin", MACOS),
    ("win32", WINDOWS),
    ("cygwin", WINDOWS),
    ("freebsd", "freebsd"),
    ("netbsd", "netbsd"),
    ("openbsd", "openbsd"),
    ("dragonfly", "dragonfly"),
)


def normalize_os(platform: str) -> str:
    """Map a ``sys.platform`` string to an ambit OS identifier.

    Unknown platforms are returned unchanged so that ``os(<platform>)``
    still works for them.

    >>> normalize_os("darwin")
    'macos'
    >>> normalize_os("freebsd13")
    'freebsd'
    """
    for prefix, os_id in _PLATFORM_PREFIXES:
        if platform.startswith(prefix):
            return os_id
    return platform


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Current OS identifier and hostname.

    Parameters
    ----------
    os_id:
        Normalized OS identifier, e.g. ``"linux"`` or ``"macos"``.
    hostname:
        The machine's hostname.
    """

    os_id: str
    hostname: str

    @classmethod
    def from_system(cls, os_id: str | None = None, hostname: str | None = None) -> "EvaluationContext":
        """Build a context from the running system, with optional overrides."""
        return cls(
            os_id=os_id or normalize_os(sys.platform),
            hostname=hostname or socket.gethostname(),
        )

    def os_is(self, value: str) -> bool:
        """Return True if ``value`` names this OS or a family containing it."""
        if value == self.os_id:
            return True
        return self.os_id in OS_FAMILIES.get(value, frozenset())

    def host_is(self, value: str) -> bool:
        """Return True if ``value`` is the hostname or its first label."""
        return value == self.hostname or value == self.hostname.split(".", 1)[0]
