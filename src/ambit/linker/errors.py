"""Errors surfaced while creating or removing links."""
from __future__ import annotations

from enum import Enum
from pathlib import Path

from ambit.core.errors import AmbitError


class LinkErrorKind(Enum):
    """Why a link could not be created or removed."""

    CONFLICT = "conflict"
    MISSING_SOURCE = "missing-source"
    MISSING_ROOT = "missing-root"
    PATTERN = "pattern"
    PERMISSION = "permission"
    OS = "os"


class LinkError(AmbitError):
    """A filesystem fault for one link (or for a whole root directory).

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    kind:
        Machine-readable category.
    path:
        The filesystem path the error concerns, when known.
    """

    def __init__(self, message: str, kind: LinkErrorKind = LinkErrorKind.OS, path: Path | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path) -> "LinkError":
        """Wrap an ``OSError`` raised while touching ``path``."""
        kind = LinkErrorKind.PERMISSION if isinstance(exc, PermissionError) else LinkErrorKind.OS
        return cls(f"{path}: {exc.strerror or exc}", kind=kind, path=path)
