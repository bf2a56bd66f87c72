"""AST node definitions for the ambit configuration language.

Every node produced by the parser is a frozen dataclass so that AST
trees are immutable and hashable.  The ``PathExpression`` union is a
closed set of four node kinds; downstream code dispatches on it with
``isinstance`` checks and treats any other type as a programming error.

All nodes carry a ``Span`` that records their source location, enabling
precise error messages in the expander and the CLI.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` within the source text.

    Parameters
    ----------
    start:
        0-based offset of the first character.
    end:
        0-based offset *past* the last character.
    line:
        1-based line number of the first character.
    col:
        1-based column number of the first character.
    """

    start: int
    end: int
    line: int
    col: int

    def __repr__(self) -> str:
        return f"Span({self.line}:{self.col})"

    @classmethod
    def unknown(cls) -> "Span":
        """Return a sentinel span used when position info is unavailable."""
        return cls(start=0, end=0, line=0, col=0)

    def merge(self, other: "Span") -> "Span":
        """Return the smallest span covering both ``self`` and ``other``.

        Line and column are taken from whichever span starts first.
        """
        first = self if self.start <= other.start else other
        return Span(start=first.start, end=max(self.end, other.end), line=first.line, col=first.col)


# ---------------------------------------------------------------------------
# Match conditions
# ---------------------------------------------------------------------------


class CondKind(Enum):
    """Which context field a match condition compares against."""

    OS = "os"
    HOST = "host"


@dataclass(frozen=True, slots=True)
class Condition:
    """``os(linux, macos)``, ``host(laptop)`` or a negated ``!os(...)``.

    The condition holds when the context value equals any of ``values``
    (or, when ``negated``, equals none of them).
    """

    kind: CondKind
    values: tuple[str, ...]
    negated: bool
    span: Span

    def __str__(self) -> str:
        prefix = "!" if self.negated else ""
        return f"{prefix}{self.kind.value}({', '.join(self.values)})"


# ---------------------------------------------------------------------------
# Path expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """A plain run of path text, e.g. ``.config/nvim/``."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Sequence:
    """Adjacent atoms, concatenated in order.

    ``parts`` always holds at least two expressions; a single atom is
    represented by the atom itself.
    """

    parts: tuple["PathExpression", ...]
    span: Span


@dataclass(frozen=True, slots=True)
class Variant:
    """``[a, b, c]``: every alternative expands independently."""

    alternatives: tuple["PathExpression", ...]
    span: Span


@dataclass(frozen=True, slots=True)
class MatchBranch:
    """One ``condition: path_expr`` arm of a match expression."""

    condition: Condition
    value: "PathExpression"
    span: Span


@dataclass(frozen=True, slots=True)
class Match:
    """``{os(linux): a, host(box): b, default: c}``.

    Branches are tried in declaration order; ``default`` is used when
    none holds.  With no default and no holding branch the match expands
    to nothing.
    """

    branches: tuple[MatchBranch, ...]
    default: "PathExpression | None"
    span: Span


# Closed union of path expression node kinds.
PathExpression = Union[Literal, Sequence, Variant, Match]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SymlinkMapping:
    """A single ``repo => home;`` statement.

    ``home`` is ``None`` for the implicit form ``path;``, in which case
    the repository path is mirrored into the home directory.
    """

    repo: PathExpression
    home: PathExpression | None
    span: Span

    @property
    def is_implicit(self) -> bool:
        """Return True if the statement has no ``=>`` right-hand side."""
        return self.home is None


@dataclass(frozen=True, slots=True)
class Document:
    """Root node: every statement of a configuration file, in order."""

    mappings: tuple[SymlinkMapping, ...] = field(default_factory=tuple)
    span: Span = field(default_factory=Span.unknown)

    def __len__(self) -> int:
        return len(self.mappings)
