"""Shared test fixtures for ambit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from ambit.expander.context import EvaluationContext
from ambit.linker.paths import AmbitPaths


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "ambit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def linux_context() -> EvaluationContext:
    """The reference machine used throughout the expansion tests."""
    return EvaluationContext(os_id="linux", hostname="plamorg")


@pytest.fixture()
def ambit_paths(tmp_path: Path) -> AmbitPaths:
    """An empty repository and home directory under ``tmp_path``."""
    repo = tmp_path / "repo"
    home = tmp_path / "home"
    repo.mkdir()
    home.mkdir()
    return AmbitPaths(home=home, repo=repo, config=tmp_path / "config.ambit")
