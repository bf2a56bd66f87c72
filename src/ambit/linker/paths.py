"""Filesystem roots used by the link planner.

``AmbitPaths`` is an explicit value passed into the planner at startup.
The only place that reads environment variables is ``from_env``, which
the CLI calls once.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

CONFIG_NAME: Final[str] = "config.ambit"

ENV_HOME: Final[str] = "AMBIT_HOME_PATH"
ENV_REPO: Final[str] = "AMBIT_REPO_PATH"
ENV_CONFIG: Final[str] = "AMBIT_CONFIG_PATH"


@dataclass(frozen=True, slots=True)
class AmbitPaths:
    """Home directory, dotfile repository, and configuration file.

    Parameters
    ----------
    home:
        Root that home-side paths are resolved against.
    repo:
        Root of the dotfile repository; repository-side paths are
        resolved against it.
    config:
        Path of the configuration document.
    """

    home: Path
    repo: Path
    config: Path

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AmbitPaths":
        """Build paths from ``AMBIT_*_PATH`` variables, with XDG-style defaults.

        Defaults are ``~``, ``~/.config/ambit/repo`` and
        ``~/.config/ambit/config.ambit``.
        """
        env = os.environ if environ is None else environ
        home = Path(env.get(ENV_HOME) or Path.home()).expanduser().absolute()
        base = Path.home() / ".config" / "ambit"
        repo = Path(env.get(ENV_REPO) or base / "repo").expanduser().absolute()
        config = Path(env.get(ENV_CONFIG) or base / CONFIG_NAME).expanduser().absolute()
        logger.debug("Using home=%s repo=%s config=%s", home, repo, config)
        return cls(home=home, repo=repo, config=config)

    def with_config(self, config: Path) -> "AmbitPaths":
        """Return a copy using a different configuration file."""
        return replace(self, config=config)

    def find_repo_config(self) -> Path | None:
        """Return the first ``config.ambit`` inside the repository, if any.

        The walk is sorted and skips ``.git`` so the result is stable.
        """
        for dirpath, dirnames, filenames in os.walk(self.repo):
            dirnames[:] = sorted(d for d in dirnames if d != ".git")
            if CONFIG_NAME in filenames:
                found = Path(dirpath) / CONFIG_NAME
                logger.debug("Found repository configuration at %s", found)
                return found
        return None
