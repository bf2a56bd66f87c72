"""Unit tests for ambit.ast.nodes: AST dataclasses, enums and helpers."""
from __future__ import annotations

import pytest

from ambit.ast.nodes import (
    CondKind,
    Condition,
    Document,
    Literal,
    Match,
    MatchBranch,
    Span,
    SymlinkMapping,
    Variant,
)

_S = Span.unknown()


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


class TestSpan:
    def test_unknown_is_all_zero(self) -> None:
        span = Span.unknown()
        assert (span.start, span.end, span.line, span.col) == (0, 0, 0, 0)

    def test_merge_covers_both(self) -> None:
        first = Span(start=4, end=8, line=1, col=5)
        second = Span(start=10, end=20, line=2, col=3)
        merged = first.merge(second)
        assert merged.start == 4
        assert merged.end == 20
        assert merged.line == 1
        assert merged.col == 5

    def test_merge_is_order_independent(self) -> None:
        a = Span(start=0, end=3, line=1, col=1)
        b = Span(start=5, end=9, line=1, col=6)
        assert a.merge(b) == b.merge(a) == Span(start=0, end=9, line=1, col=1)

    def test_merge_takes_position_from_earlier_span(self) -> None:
        later = Span(start=12, end=14, line=2, col=3)
        earlier = Span(start=2, end=5, line=1, col=3)
        assert later.merge(earlier) == Span(start=2, end=14, line=1, col=3)

    def test_parser_spans_cover_whole_statement(self) -> None:
        from ambit.parser.parser import parse

        mapping = parse("x;\n  a/[b, c] => d;").mappings[1]
        assert mapping.span == Span(start=5, end=19, line=2, col=3)

    def test_repr(self) -> None:
        assert repr(Span(start=0, end=1, line=2, col=3)) == "Span(2:3)"


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestCondition:
    def test_str_single_value(self) -> None:
        cond = Condition(kind=CondKind.OS, values=("linux",), negated=False, span=_S)
        assert str(cond) == "os(linux)"

    def test_str_negated_multiple_values(self) -> None:
        cond = Condition(kind=CondKind.HOST, values=("a", "b"), negated=True, span=_S)
        assert str(cond) == "!host(a, b)"

    def test_cond_kind_values(self) -> None:
        assert CondKind("os") is CondKind.OS
        assert CondKind("host") is CondKind.HOST


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class TestSymlinkMapping:
    def test_implicit(self) -> None:
        mapping = SymlinkMapping(repo=Literal("a", _S), home=None, span=_S)
        assert mapping.is_implicit

    def test_explicit(self) -> None:
        mapping = SymlinkMapping(repo=Literal("a", _S), home=Literal("b", _S), span=_S)
        assert not mapping.is_implicit


class TestDocument:
    def test_empty_document(self) -> None:
        doc = Document()
        assert len(doc) == 0
        assert doc.mappings == ()

    def test_len_counts_mappings(self) -> None:
        mapping = SymlinkMapping(repo=Literal("a", _S), home=None, span=_S)
        assert len(Document(mappings=(mapping, mapping))) == 2

    def test_nodes_are_hashable(self) -> None:
        branch = MatchBranch(
            condition=Condition(CondKind.OS, ("linux",), False, _S),
            value=Variant((Literal("a", _S), Literal("b", _S)), _S),
            span=_S,
        )
        match = Match(branches=(branch,), default=None, span=_S)
        assert hash(match) == hash(Match(branches=(branch,), default=None, span=_S))

    def test_nodes_are_frozen(self) -> None:
        lit = Literal("a", _S)
        with pytest.raises((AttributeError, TypeError)):
            lit.value = "b"  # type: ignore[misc]
