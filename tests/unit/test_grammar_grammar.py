"""Unit tests for ambit.grammar.grammar: EBNF reference constants."""
from __future__ import annotations

import pytest

from ambit.grammar.grammar import FULL_GRAMMAR, GRAMMAR_DOCUMENT, GRAMMAR_MATCH, GRAMMAR_PATH


class TestGrammarConstants:
    def test_document_rule(self) -> None:
        assert "document" in GRAMMAR_DOCUMENT
        assert "'=>'" in GRAMMAR_DOCUMENT

    def test_path_rules(self) -> None:
        assert "path_expr" in GRAMMAR_PATH
        assert "variant" in GRAMMAR_PATH

    def test_match_rules(self) -> None:
        assert "default_branch" in GRAMMAR_MATCH
        assert "'!os'" in GRAMMAR_MATCH

    @pytest.mark.parametrize("section", [GRAMMAR_DOCUMENT, GRAMMAR_PATH, GRAMMAR_MATCH])
    def test_full_grammar_contains_every_section(self, section: str) -> None:
        assert section in FULL_GRAMMAR
