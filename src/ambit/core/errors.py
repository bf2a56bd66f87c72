"""Root of the ambit exception taxonomy.

Component errors live next to the component that raises them
(``ambit.lexer.LexError``, ``ambit.parser.ParseError``,
``ambit.expander.ExpansionError``, ``ambit.linker.LinkError``); they all
derive from ``AmbitError`` so callers can catch every configuration or
linking fault with a single ``except`` clause.
"""
from __future__ import annotations


class AmbitError(Exception):
    """Base class for every error raised by ambit."""
