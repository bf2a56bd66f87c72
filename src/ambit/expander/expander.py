"""Expansion of path expressions into concrete repository/home pairs.

Each statement's repository and home expressions are expanded
independently, depth first:

* ``Literal``  -> the single string
* ``Sequence`` -> every combination of its parts' expansions, joined in
  order (left-most part varies slowest)
* ``Variant``  -> each alternative's expansion, in declaration order
* ``Match``    -> the first branch whose condition holds, else the
  default, else nothing

A part that expands to nothing makes its whole ``Sequence`` expand to
nothing, so an unmatched ``Match`` without a default drops the
statement rather than producing a path with a hole in it.

The two sides are then paired positionally.  A statement without
``=>`` reuses the repository expansion for the home side.  Output order
follows declaration order exactly, so ``sync`` and ``clean`` always
address the same links.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from ambit.ast.nodes import (
    CondKind,
    Condition,
    Document,
    Literal,
    Match,
    PathExpression,
    Sequence,
    Span,
    SymlinkMapping,
    Variant,
)
from ambit.core.errors import AmbitError
from ambit.expander.context import EvaluationContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_EXPANSIONS: Final[int] = 10_000


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ExpansionError(AmbitError):
    """Base class for errors raised while expanding a statement.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    statement_index:
        0-based index of the offending statement in the document.
    span:
        Source location of the statement.
    """

    def __init__(self, message: str, statement_index: int, span: Span) -> None:
        super().__init__(f"Statement {statement_index + 1} (line {span.line}): {message}")
        self.statement_index = statement_index
        self.span = span


class ExpansionMismatchError(ExpansionError):
    """Raised when the two sides of ``=>`` expand to different counts."""

    def __init__(
        self,
        statement_index: int,
        repo_paths: list[str],
        home_paths: list[str],
        span: Span,
    ) -> None:
        super().__init__(
            f"repository side expands to {len(repo_paths)} path(s) "
            f"but home side expands to {len(home_paths)}",
            statement_index,
            span,
        )
        self.repo_paths = repo_paths
        self.home_paths = home_paths


class ExpansionLimitError(ExpansionError):
    """Raised when a statement expands to more than ``max_expansions`` paths."""

    def __init__(self, statement_index: int, limit: int, span: Span) -> None:
        super().__init__(f"expands to more than {limit} paths", statement_index, span)
        self.limit = limit


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolvedLink:
    """A concrete (repository path, home path) pair.

    Both paths are relative to their respective roots.  Only the two
    paths take part in equality; ``statement_index`` records where the
    pair came from.
    """

    repo_path: str
    home_path: str
    statement_index: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.repo_path} => {self.home_path}"


# ---------------------------------------------------------------------------
# Expander
# ---------------------------------------------------------------------------


class Expander:
    """Expands statements against a fixed ``EvaluationContext``.

    Parameters
    ----------
    context:
        OS identifier and hostname that match expressions test.
    max_expansions:
        Upper bound on the number of paths any single expression may
        expand to.  Guards against runaway growth from deeply nested
        variants.
    """

    def __init__(
        self,
        context: EvaluationContext,
        max_expansions: int = DEFAULT_MAX_EXPANSIONS,
    ) -> None:
        if max_expansions < 1:
            raise ValueError("max_expansions must be at least 1")
        self.context = context
        self.max_expansions = max_expansions

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, document: Document) -> list[ResolvedLink]:
        """Resolve every statement of ``document``, in declaration order.

        Raises
        ------
        ExpansionMismatchError
            If any statement's sides expand to different counts.
        ExpansionLimitError
            If any statement exceeds ``max_expansions``.
        """
        links: list[ResolvedLink] = []
        for index, mapping in enumerate(document.mappings):
            links.extend(self.resolve_mapping(mapping, index))
        logger.debug(
            "Resolved %d statement(s) into %d link(s) for os=%s host=%s",
            len(document.mappings),
            len(links),
            self.context.os_id,
            self.context.hostname,
        )
        return links

    def resolve_mapping(self, mapping: SymlinkMapping, index: int = 0) -> list[ResolvedLink]:
        """Resolve a single statement into its link pairs."""
        repo_paths = self._expand_checked(mapping.repo, index, mapping.span)
        if mapping.home is None:
            home_paths = repo_paths
        else:
            home_paths = self._expand_checked(mapping.home, index, mapping.span)

        if len(repo_paths) != len(home_paths):
            raise ExpansionMismatchError(index, repo_paths, home_paths, mapping.span)
        if not repo_paths:
            logger.debug("Statement %d produces no links on this system", index + 1)
        return [
            ResolvedLink(repo_path=repo, home_path=home, statement_index=index)
            for repo, home in zip(repo_paths, home_paths)
        ]

    def expand(self, expr: PathExpression) -> list[str]:
        """Expand a single path expression into its concrete paths."""
        return self._expand_checked(expr, 0, expr.span)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _expand_checked(self, expr: PathExpression, index: int, span: Span) -> list[str]:
        try:
            return self._expand(expr)
        except _LimitExceeded:
            raise ExpansionLimitError(index, self.max_expansions, span) from None

    def _expand(self, expr: PathExpression) -> list[str]:
        if isinstance(expr, Literal):
            return [expr.value]
        if isinstance(expr, Sequence):
            return self._expand_sequence(expr)
        if isinstance(expr, Variant):
            paths: list[str] = []
            for alternative in expr.alternatives:
                paths.extend(self._expand(alternative))
                self._check_size(len(paths))
            return paths
        if isinstance(expr, Match):
            chosen = self.select_branch(expr)
            return self._expand(chosen) if chosen is not None else []
        raise TypeError(f"Unknown path expression type: {type(expr).__name__}")

    def _expand_sequence(self, expr: Sequence) -> list[str]:
        prefixes = [""]
        for part in expr.parts:
            suffixes = self._expand(part)
            if not suffixes:
                return []
            self._check_size(len(prefixes) * len(suffixes))
            prefixes = [prefix + suffix for prefix in prefixes for suffix in suffixes]
        return prefixes

    def _check_size(self, size: int) -> None:
        if size > self.max_expansions:
            raise _LimitExceeded

    def select_branch(self, expr: Match) -> PathExpression | None:
        """Return the expression a match selects in this context, if any."""
        for branch in expr.branches:
            if self.condition_holds(branch.condition):
                return branch.value
        return expr.default

    def condition_holds(self, condition: Condition) -> bool:
        """Evaluate an ``os(...)`` / ``host(...)`` condition."""
        if condition.kind is CondKind.OS:
            hit = any(self.context.os_is(v) for v in condition.values)
        else:
            hit = any(self.context.host_is(v) for v in condition.values)
        return hit != condition.negated


class _LimitExceeded(Exception):
    """Internal signal, converted to ``ExpansionLimitError`` with statement info."""


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def resolve(
    document: Document,
    context: EvaluationContext,
    max_expansions: int = DEFAULT_MAX_EXPANSIONS,
) -> list[ResolvedLink]:
    """Resolve a parsed document into link pairs for ``context``.

    Example
    -------
    ::

        from ambit.expander import EvaluationContext, resolve
        from ambit.parser import parse

        links = resolve(parse("a/[b, c];"), EvaluationContext("linux", "box"))
        [str(link) for link in links]
        # ['a/b => a/b', 'a/c => a/c']
    """
    return Expander(context, max_expansions=max_expansions).resolve(document)
