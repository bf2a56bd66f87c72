"""Unit tests for ambit.parser: recursive-descent parser producing Document ASTs."""
from __future__ import annotations

import pytest

from ambit.ast.nodes import (
    CondKind,
    Document,
    Literal,
    Match,
    Sequence,
    SymlinkMapping,
    Variant,
)
from ambit.lexer.lexer import tokenize
from ambit.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy
from ambit.parser.parser import DEFAULT_MAX_DEPTH, Parser, parse


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def single(source: str) -> SymlinkMapping:
    """Parse a one-statement document and return its mapping."""
    doc = parse(source)
    assert len(doc) == 1
    return doc.mappings[0]


def literal_values(exprs: tuple) -> list[str]:
    return [e.value for e in exprs]


def parse_errors(source: str, **kwargs: int) -> list[ParseError]:
    with pytest.raises(ParseErrorCollection) as exc_info:
        parse(source, **kwargs)
    return exc_info.value.errors


NVIM_KITTY = ".config/[bat/bat.conf, nvim/init.vim, kitty/[kitty.conf, theme.conf]];"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class TestStatements:
    def test_empty_document(self) -> None:
        doc = parse("")
        assert isinstance(doc, Document)
        assert len(doc) == 0

    def test_comments_only(self) -> None:
        assert len(parse("# just a comment\n")) == 0

    def test_implicit_statement(self) -> None:
        mapping = single(".config/ambit/config.ambit;")
        assert mapping.is_implicit
        assert mapping.repo == Literal(".config/ambit/config.ambit", mapping.repo.span)

    def test_explicit_statement(self) -> None:
        mapping = single("repo/vimrc => .vimrc;")
        assert isinstance(mapping.repo, Literal)
        assert isinstance(mapping.home, Literal)
        assert mapping.repo.value == "repo/vimrc"
        assert mapping.home.value == ".vimrc"

    def test_statements_keep_declaration_order(self) -> None:
        doc = parse("c;\na;\nb;")
        assert [m.repo.value for m in doc.mappings] == ["c", "a", "b"]

    def test_statement_span(self) -> None:
        mapping = single("a => b;")
        assert mapping.span.start == 0
        assert mapping.span.end == 7
        assert mapping.span.line == 1
        assert mapping.span.col == 1

    def test_second_statement_line(self) -> None:
        doc = parse("a;\n\n  b;")
        assert doc.mappings[1].span.line == 3
        assert doc.mappings[1].span.col == 3

    @pytest.mark.parametrize("source, expected", [
        ("default;", "default"),
        ("os;", "os"),
        ("!host;", "!host"),
    ])
    def test_keywords_are_literals_in_path_position(self, source: str, expected: str) -> None:
        mapping = single(source)
        assert isinstance(mapping.repo, Literal)
        assert mapping.repo.value == expected


# ---------------------------------------------------------------------------
# Variants and sequences
# ---------------------------------------------------------------------------


class TestVariants:
    def test_prefix_and_variant_form_sequence(self) -> None:
        mapping = single("a/[b,c];")
        assert isinstance(mapping.repo, Sequence)
        prefix, variant = mapping.repo.parts
        assert isinstance(prefix, Literal)
        assert prefix.value == "a/"
        assert isinstance(variant, Variant)
        assert literal_values(variant.alternatives) == ["b", "c"]

    def test_nested_variant(self) -> None:
        mapping = single(NVIM_KITTY)
        assert isinstance(mapping.repo, Sequence)
        outer = mapping.repo.parts[1]
        assert isinstance(outer, Variant)
        assert len(outer.alternatives) == 3
        kitty = outer.alternatives[2]
        assert isinstance(kitty, Sequence)
        assert isinstance(kitty.parts[1], Variant)

    def test_variant_then_suffix(self) -> None:
        mapping = single("[a, b]/config;")
        assert isinstance(mapping.repo, Sequence)
        assert isinstance(mapping.repo.parts[0], Variant)
        assert mapping.repo.parts[1] == Literal("/config", mapping.repo.parts[1].span)

    def test_adjacent_variants(self) -> None:
        mapping = single("[a, b][c, d];")
        assert isinstance(mapping.repo, Sequence)
        assert all(isinstance(p, Variant) for p in mapping.repo.parts)

    def test_single_alternative(self) -> None:
        mapping = single("[a];")
        assert isinstance(mapping.repo, Variant)
        assert literal_values(mapping.repo.alternatives) == ["a"]

    def test_trailing_comma(self) -> None:
        mapping = single("[a, b,];")
        assert literal_values(mapping.repo.alternatives) == ["a", "b"]

    def test_variant_on_home_side(self) -> None:
        mapping = single("x/[a, b] => y/[a, b];")
        assert isinstance(mapping.home, Sequence)


# ---------------------------------------------------------------------------
# Match expressions
# ---------------------------------------------------------------------------


class TestMatches:
    def test_single_branch(self) -> None:
        mapping = single("{os(linux): .Xresources};")
        match = mapping.repo
        assert isinstance(match, Match)
        assert match.default is None
        (branch,) = match.branches
        assert branch.condition.kind is CondKind.OS
        assert branch.condition.values == ("linux",)
        assert not branch.condition.negated
        assert branch.value.value == ".Xresources"

    def test_branches_and_default(self) -> None:
        mapping = single("{os(linux): .emacs, os(macos): .config/nvim/init.vim, default: .vimrc};")
        match = mapping.repo
        assert isinstance(match, Match)
        assert [b.condition.values[0] for b in match.branches] == ["linux", "macos"]
        assert match.default == Literal(".vimrc", match.default.span)

    def test_default_only(self) -> None:
        match = single("{default: x};").repo
        assert isinstance(match, Match)
        assert match.branches == ()
        assert match.default.value == "x"

    def test_host_condition(self) -> None:
        match = single("{host(plamorg): a};").repo
        assert match.branches[0].condition.kind is CondKind.HOST

    @pytest.mark.parametrize("source, kind", [
        ("{!os(windows): a};", CondKind.OS),
        ("{!host(box): a};", CondKind.HOST),
    ])
    def test_negated_conditions(self, source: str, kind: CondKind) -> None:
        condition = single(source).repo.branches[0].condition
        assert condition.negated
        assert condition.kind is kind

    def test_condition_value_list(self) -> None:
        condition = single("{os(linux, macos,): a};").repo.branches[0].condition
        assert condition.values == ("linux", "macos")

    def test_trailing_comma_after_branch(self) -> None:
        match = single("{os(linux): a, default: b,};").repo
        assert len(match.branches) == 1
        assert match.default is not None

    def test_match_inside_path(self) -> None:
        mapping = single("~/{os(linux): _config, os(macos): Library}/x;")
        assert isinstance(mapping.repo, Sequence)
        assert [type(p) for p in mapping.repo.parts] == [Literal, Match, Literal]

    def test_branch_value_can_be_variant(self) -> None:
        match = single("{os(linux): [a, b]};").repo
        assert isinstance(match.branches[0].value, Variant)

    def test_match_inside_variant(self) -> None:
        variant = single("[a, {os(linux): b}];").repo
        assert isinstance(variant.alternatives[1], Match)

    def test_keyword_as_branch_value(self) -> None:
        match = single("{os(linux): default};").repo
        assert match.branches[0].value.value == "default"


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformedInput:
    @pytest.mark.parametrize("source", [
        "a/[b, c",
        "a/[b, c;",
        "{os(linux): a",
        "{os(linux): a;",
        "{os(linux: a};",
    ])
    def test_unclosed_brackets(self, source: str) -> None:
        with pytest.raises(ParseError):
            parse(source)

    def test_unclosed_bracket_at_eof_names_opener(self) -> None:
        (error,) = parse_errors("a/[b, c")
        assert "Unclosed '['" in error.message
        assert "1:3" in error.message

    def test_empty_variant(self) -> None:
        (error,) = parse_errors("[];")
        assert "at least one option" in error.message

    def test_empty_match(self) -> None:
        (error,) = parse_errors("{};")
        assert "at least one branch" in error.message

    def test_empty_condition(self) -> None:
        (error,) = parse_errors("{os(): a};")
        assert "at least one value" in error.message

    def test_missing_semicolon(self) -> None:
        (error,) = parse_errors("a => b")
        assert "Expected ';'" in error.message
        assert "end of file" in str(error)

    def test_missing_home_path(self) -> None:
        (error,) = parse_errors("a => ;")
        assert "home path" in error.message

    def test_missing_repo_path(self) -> None:
        (error,) = parse_errors("=> b;")
        assert "Expected a path" in error.message

    def test_adjacent_literals(self) -> None:
        (error,) = parse_errors("a b;")
        assert "Expected ';'" in error.message
        assert error.found is not None
        assert error.found.value == "b"

    def test_default_must_be_last(self) -> None:
        (error,) = parse_errors("{default: a, os(linux): b};")
        assert "'default' must be the last branch" in error.message

    def test_two_defaults(self) -> None:
        with pytest.raises(ParseError):
            parse("{default: a, default: b};")

    def test_unknown_condition(self) -> None:
        (error,) = parse_errors("{linux: a};")
        assert "Expected 'os(...)'" in error.message

    def test_missing_paren(self) -> None:
        (error,) = parse_errors("{os linux: a};")
        assert "Expected '('" in error.message

    def test_missing_colon(self) -> None:
        (error,) = parse_errors("{os(linux) a};")
        assert "Expected ':'" in error.message

    def test_error_position(self) -> None:
        (error,) = parse_errors("a;\nb;\n[];")
        assert error.line == 3
        assert error.col == 2


# ---------------------------------------------------------------------------
# Error recovery
# ---------------------------------------------------------------------------


class TestErrorRecovery:
    def test_collects_every_broken_statement(self) -> None:
        errors = parse_errors("good1;\n[];\ngood2;\n{};\ngood3;")
        assert len(errors) == 2
        assert [e.line for e in errors] == [2, 4]

    def test_collection_is_a_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("[];")
        assert isinstance(exc_info.value, ParseErrorCollection)
        assert len(exc_info.value) == 1

    def test_collection_adopts_first_error_position(self) -> None:
        with pytest.raises(ParseErrorCollection) as exc_info:
            parse("a;\n[];\n{};")
        assert exc_info.value.line == 2

    def test_collection_str_lists_all_errors(self) -> None:
        with pytest.raises(ParseErrorCollection) as exc_info:
            parse("[];\n{};")
        text = str(exc_info.value)
        assert "2 error(s)" in text
        assert "at least one option" in text
        assert "at least one branch" in text

    def test_empty_collection_rejected(self) -> None:
        with pytest.raises(ValueError):
            ParseErrorCollection([])


# ---------------------------------------------------------------------------
# Nesting depth
# ---------------------------------------------------------------------------


class TestNestingDepth:
    def test_default_depth_accepts_moderate_nesting(self) -> None:
        source = "[" * 10 + "a" + "]" * 10 + ";"
        assert len(parse(source)) == 1

    def test_exceeding_default_depth(self) -> None:
        depth = DEFAULT_MAX_DEPTH + 1
        source = "[" * depth + "a" + "]" * depth + ";"
        (error,) = parse_errors(source)
        assert error.recovery is RecoveryStrategy.ABORT

    def test_custom_depth(self) -> None:
        assert len(parse("[[a]];", max_depth=2)) == 1
        with pytest.raises(ParseError):
            parse("[[[a]]];", max_depth=2)

    def test_matches_count_towards_depth(self) -> None:
        with pytest.raises(ParseError):
            parse("[{os(linux): [a]}];", max_depth=2)

    def test_abort_stops_collecting(self) -> None:
        errors = parse_errors("[[[a]]];\n[];", max_depth=2)
        assert len(errors) == 1


# ---------------------------------------------------------------------------
# Parser class and determinism
# ---------------------------------------------------------------------------


class TestParserClass:
    def test_requires_eof(self) -> None:
        with pytest.raises(ValueError):
            Parser([])

    def test_requires_trailing_eof(self) -> None:
        tokens = tokenize("a;")[:-1]
        with pytest.raises(ValueError):
            Parser(tokens)

    def test_parser_class_matches_function(self) -> None:
        source = "a/[b, c] => {os(linux): x, default: y}/[b, c];"
        assert Parser(tokenize(source)).parse() == parse(source)

    def test_parse_is_deterministic(self) -> None:
        source = NVIM_KITTY + "\n{os(linux): .emacs, default: .vimrc} => .vimrc;"
        assert parse(source) == parse(source)
