"""ambit: dotfile manager driven by a small path-mapping language.

A configuration document lists which files of a dotfile repository are
linked into the home directory::

    .config/[nvim/init.vim, kitty/[kitty.conf, theme.conf]];
    {os(linux): .Xresources};
    {os(macos): .config/nvim/init.vim, default: .vimrc} => .vimrc;

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import ambit

    document = ambit.parse("a/[b, c];")
    links = ambit.resolve(document, ambit.EvaluationContext("linux", "box"))

    ambit.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ambit.convenience import AmbitConfig
from ambit.core.errors import AmbitError
from ambit.expander.context import EvaluationContext
from ambit.expander.expander import DEFAULT_MAX_EXPANSIONS

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from ambit.ast.nodes import Document
    from ambit.expander.expander import ResolvedLink


def parse(source: str) -> "Document":
    """Parse configuration text into a ``Document`` AST.

    Parameters
    ----------
    source:
        Complete configuration text.

    Raises
    ------
    ambit.lexer.LexError
        If the source contains invalid characters.
    ambit.parser.ParseErrorCollection
        If the source contains syntactic errors.
    """
    from ambit.parser.parser import parse as _parse

    return _parse(source)


def resolve(
    document: "Document",
    context: EvaluationContext,
    max_expansions: int = DEFAULT_MAX_EXPANSIONS,
) -> list["ResolvedLink"]:
    """Resolve a ``Document`` into ordered ``ResolvedLink`` pairs.

    Parameters
    ----------
    document:
        A parsed configuration.
    context:
        OS identifier and hostname that match expressions test.
    max_expansions:
        Upper bound on the paths any one expression may expand to.

    Raises
    ------
    ambit.expander.ExpansionMismatchError
        If a statement's two sides expand to different counts.
    ambit.expander.ExpansionLimitError
        If a statement exceeds ``max_expansions``.
    """
    from ambit.expander.expander import resolve as _resolve

    return _resolve(document, context, max_expansions=max_expansions)


__all__ = [
    "__version__",
    "parse",
    "resolve",
    "AmbitConfig",
    "AmbitError",
    "EvaluationContext",
]
