"""Core domain logic.

Foundational pieces shared by every other sub-package: the exception
root and logging setup. Submodules in core/ should not import from
linker/ or cli/.
"""
from __future__ import annotations

from ambit.core.errors import AmbitError

__all__ = ["AmbitError"]
