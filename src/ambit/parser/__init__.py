"""ambit Parser module.

Exports the ``Parser`` class, the ``parse`` convenience function, and
parse error types.
"""
from __future__ import annotations

from ambit.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy
from ambit.parser.parser import DEFAULT_MAX_DEPTH, Parser, parse

__all__ = [
    "Parser",
    "parse",
    "DEFAULT_MAX_DEPTH",
    "ParseError",
    "ParseErrorCollection",
    "RecoveryStrategy",
]
