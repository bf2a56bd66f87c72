"""Filesystem capability consumed by the link planner.

The planner never calls ``os`` directly: it talks to a ``Filesystem``.
``LocalFilesystem`` is the real implementation; tests and dry runs can
substitute their own.
"""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from ambit.linker.errors import LinkError

logger = logging.getLogger(__name__)


class Filesystem(ABC):
    """Operations the link planner needs from the host filesystem."""

    @abstractmethod
    def lexists(self, path: Path) -> bool:
        """Return True if anything, including a dangling symlink, is at ``path``."""

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Return True if ``path`` is (or links to) a regular file."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Return True if ``path`` is (or links to) a directory."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """Return the entries of directory ``path`` in sorted order."""

    @abstractmethod
    def is_symlink(self, path: Path) -> bool:
        """Return True if ``path`` itself is a symlink, dangling or not."""

    @abstractmethod
    def is_symlinked(self, link: Path, target: Path) -> bool:
        """Return True if ``link`` is a symlink whose target is exactly ``target``."""

    @abstractmethod
    def create_symlink(self, target: Path, link: Path) -> None:
        """Create ``link -> target``, creating missing parent directories.

        Raises
        ------
        LinkError
            If the link cannot be created.
        """

    @abstractmethod
    def remove_symlink(self, link: Path) -> None:
        """Remove the symlink at ``link``.

        Raises
        ------
        LinkError
            If the link cannot be removed.
        """

    @abstractmethod
    def move_file(self, source: Path, destination: Path) -> None:
        """Rename ``source`` to ``destination``, creating missing parent directories.

        Raises
        ------
        LinkError
            If the file cannot be moved.
        """


class LocalFilesystem(Filesystem):
    """``Filesystem`` backed by the operating system."""

    def lexists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path) -> list[Path]:
        try:
            return sorted(path.iterdir())
        except OSError as exc:
            raise LinkError.from_os_error(exc, path) from exc

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def is_symlinked(self, link: Path, target: Path) -> bool:
        try:
            return Path(os.readlink(link)) == target
        except OSError:
            # Not a symlink, or nothing there.
            return False

    def create_symlink(self, target: Path, link: Path) -> None:
        try:
            link.parent.mkdir(parents=True, exist_ok=True)
            link.symlink_to(target)
        except OSError as exc:
            raise LinkError.from_os_error(exc, link) from exc
        logger.debug("Linked %s -> %s", link, target)

    def remove_symlink(self, link: Path) -> None:
        if not link.is_symlink():
            raise LinkError(f"{link} is not a symlink", path=link)
        try:
            link.unlink()
        except OSError as exc:
            raise LinkError.from_os_error(exc, link) from exc
        logger.debug("Removed %s", link)

    def move_file(self, source: Path, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            source.rename(destination)
        except OSError as exc:
            raise LinkError.from_os_error(exc, source) from exc
        logger.debug("Moved %s to %s", source, destination)
