"""ambit Expander module.

Turns a parsed ``Document`` plus an ``EvaluationContext`` into an
ordered list of ``ResolvedLink`` pairs.
"""
from __future__ import annotations

from ambit.expander.context import OS_FAMILIES, EvaluationContext, normalize_os
from ambit.expander.expander import (
    DEFAULT_MAX_EXPANSIONS,
    ExpansionError,
    ExpansionLimitError,
    ExpansionMismatchError,
    Expander,
    ResolvedLink,
    resolve,
)

__all__ = [
    "EvaluationContext",
    "normalize_os",
    "OS_FAMILIES",
    "Expander",
    "resolve",
    "ResolvedLink",
    "DEFAULT_MAX_EXPANSIONS",
    "ExpansionError",
    "ExpansionMismatchError",
    "ExpansionLimitError",
]
