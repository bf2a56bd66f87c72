"""ambit grammar module.

Exports token definitions and formal grammar constants.
"""
from __future__ import annotations

from ambit.grammar.grammar import (
    FULL_GRAMMAR,
    GRAMMAR_DOCUMENT,
    GRAMMAR_MATCH,
    GRAMMAR_PATH,
)
from ambit.grammar.tokens import CONDITION_KEYWORDS, KEYWORDS, PUNCTUATION, Token, TokenType

__all__ = [
    # Token types
    "TokenType",
    "Token",
    "KEYWORDS",
    "PUNCTUATION",
    "CONDITION_KEYWORDS",
    # Grammar constants
    "FULL_GRAMMAR",
    "GRAMMAR_DOCUMENT",
    "GRAMMAR_PATH",
    "GRAMMAR_MATCH",
]
