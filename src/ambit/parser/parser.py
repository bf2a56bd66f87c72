"""ambit Recursive-Descent Parser.

Converts a flat list of ``Token`` objects into a ``Document`` AST.

Every construct is introduced by its leading token (``[`` for a
variant, ``{`` for a match, path text for a literal), so the parser
never backtracks.  Keywords (``os``, ``host``, ``default``...) are only
special inside a match; in path position they are read as literal text.

Error recovery
--------------
When a statement is malformed the parser records a ``ParseError`` and
synchronizes by consuming tokens through the next ``;``, then continues
with the following statement.  A single run therefore surfaces every
broken statement.  If anything was recorded the parser raises
``ParseErrorCollection``; no partial document is ever returned.

Nesting depth
-------------
Variants and matches may nest arbitrarily, bounded by ``max_depth``
(default ``DEFAULT_MAX_DEPTH``).  Exceeding it aborts the parse.
"""
from __future__ import annotations

import logging
from typing import Final

from ambit.ast.nodes import (
    CondKind,
    Condition,
    Document,
    Literal,
    Match,
    MatchBranch,
    PathExpression,
    Sequence,
    Span,
    SymlinkMapping,
    Variant,
)
from ambit.grammar.tokens import CONDITION_KEYWORDS, Token, TokenType
from ambit.lexer.lexer import tokenize
from ambit.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final[int] = 64

_ATOM_START = (TokenType.SEGMENT, TokenType.LBRACKET, TokenType.LBRACE)
_CLOSERS: Final[dict[TokenType, str]] = {
    TokenType.RBRACKET: "]",
    TokenType.RBRACE: "}",
    TokenType.RPAREN: ")",
}


class Parser:
    """Recursive descent parser that produces a ``Document`` from tokens.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer.  Must include the
        terminal ``EOF`` token.
    max_depth:
        Maximum combined nesting depth of variant and match expressions.
    """

    def __init__(self, tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("Token list must end with an EOF token")
        self._tokens: list[Token] = tokens
        self._pos: int = 0
        self._previous: Token = tokens[0]
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current token without consuming it."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._current()
        if tok.type != TokenType.EOF:
            self._pos += 1
        self._previous = tok
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current().type in types

    def _match(self, *types: TokenType) -> Token | None:
        """Consume and return the current token if it matches; else None."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume the current token if it matches, else raise ``ParseError``."""
        if self._check(token_type):
            return self._advance()
        raise self._error(message, (token_type,))

    def _expect_closing(self, closer: TokenType, opener: Token, context: str) -> Token:
        """Consume a closing bracket, reporting an unclosed opener at EOF."""
        if self._check(closer):
            return self._advance()
        if self._check(TokenType.EOF):
            raise self._error(
                f"Unclosed {opener.value!r} opened at {opener.line}:{opener.col}",
                (closer,),
            )
        raise self._error(f"Expected ',' or {_CLOSERS[closer]!r} in {context}", (TokenType.COMMA, closer))

    def _span_from(self, tok: Token) -> Span:
        """Build a ``Span`` anchored at the given token."""
        return Span(start=tok.offset, end=tok.offset + tok.length, line=tok.line, col=tok.col)

    def _span_between(self, start_tok: Token, end_tok: Token) -> Span:
        """Build a ``Span`` covering from ``start_tok`` to ``end_tok``."""
        return self._span_from(start_tok).merge(self._span_from(end_tok))

    def _error(
        self,
        message: str,
        expected: tuple[TokenType, ...] = (),
        recovery: RecoveryStrategy = RecoveryStrategy.SYNCHRONIZE,
        at: Token | None = None,
    ) -> ParseError:
        tok = at or self._current()
        return ParseError(
            message=message,
            span=self._span_from(tok),
            expected=expected,
            found=tok,
            recovery=recovery,
        )

    def _synchronize(self) -> None:
        """Skip tokens through the next ``;`` (or up to EOF)."""
        while not self._check(TokenType.SEMICOLON, TokenType.EOF):
            self._advance()
        self._match(TokenType.SEMICOLON)

    # ------------------------------------------------------------------
    # Top-level parse
    # ------------------------------------------------------------------

    def parse(self) -> Document:
        """Parse the token stream and return the root ``Document``.

        Raises
        ------
        ParseErrorCollection
            If any errors were recorded during parsing.
        """
        first = self._current()
        mappings: list[SymlinkMapping] = []
        errors: list[ParseError] = []

        while not self._check(TokenType.EOF):
            try:
                mappings.append(self._parse_statement())
            except ParseError as exc:
                logger.debug("Recording %s", exc)
                errors.append(exc)
                if exc.recovery is RecoveryStrategy.ABORT:
                    break
                self._synchronize()

        if errors:
            raise ParseErrorCollection(errors)
        logger.debug("Parsed %d statement(s)", len(mappings))
        return Document(mappings=tuple(mappings), span=self._span_between(first, self._current()))

    def _parse_statement(self) -> SymlinkMapping:
        """Parse: ``path_expr ('=>' path_expr)? ';'``"""
        start_tok = self._current()
        repo = self._parse_path_expr(depth=0)
        home: PathExpression | None = None
        if self._match(TokenType.MAPS_TO):
            if self._check(TokenType.SEMICOLON, TokenType.EOF):
                raise self._error("Expected a home path after '=>'", _ATOM_START)
            home = self._parse_path_expr(depth=0)
        end_tok = self._expect(TokenType.SEMICOLON, "Expected ';' to end the statement")
        return SymlinkMapping(repo=repo, home=home, span=self._span_between(start_tok, end_tok))

    # ------------------------------------------------------------------
    # Path expressions
    # ------------------------------------------------------------------

    def _parse_path_expr(self, depth: int) -> PathExpression:
        """Parse: ``atom+``.

        A literal may be followed by a variant or match, and a variant or
        match by anything, but two literals may not sit next to each
        other: whitespace between path segments is almost always a typo.
        """
        start_tok = self._current()
        parts: list[PathExpression] = [self._parse_atom(depth)]
        while True:
            tok = self._current()
            if tok.type in (TokenType.LBRACKET, TokenType.LBRACE):
                parts.append(self._parse_atom(depth))
            elif tok.is_path_text and not isinstance(parts[-1], Literal):
                parts.append(self._parse_atom(depth))
            else:
                break
        if len(parts) == 1:
            return parts[0]
        return Sequence(parts=tuple(parts), span=self._span_between(start_tok, self._previous))

    def _parse_atom(self, depth: int) -> PathExpression:
        tok = self._current()
        if tok.is_path_text:
            self._advance()
            return Literal(value=tok.value, span=self._span_from(tok))
        if tok.type is TokenType.LBRACKET:
            return self._parse_variant(depth + 1)
        if tok.type is TokenType.LBRACE:
            return self._parse_match(depth + 1)
        if tok.type is TokenType.EOF:
            raise self._error("Unexpected end of file, expected a path", _ATOM_START)
        raise self._error("Expected a path, '[' or '{'", _ATOM_START)

    def _check_depth(self, depth: int) -> None:
        if depth > self._max_depth:
            raise self._error(
                f"Expressions nested deeper than {self._max_depth} levels",
                recovery=RecoveryStrategy.ABORT,
            )

    def _parse_variant(self, depth: int) -> Variant:
        """Parse: ``'[' path_expr (',' path_expr)* ','? ']'``"""
        self._check_depth(depth)
        start_tok = self._advance()  # consume '['
        if self._check(TokenType.RBRACKET):
            raise self._error("Variant expression must have at least one option", _ATOM_START)

        alternatives: list[PathExpression] = []
        while True:
            alternatives.append(self._parse_path_expr(depth))
            if not self._match(TokenType.COMMA) or self._check(TokenType.RBRACKET):
                break

        end_tok = self._expect_closing(TokenType.RBRACKET, start_tok, "variant expression")
        return Variant(alternatives=tuple(alternatives), span=self._span_between(start_tok, end_tok))

    # ------------------------------------------------------------------
    # Match expressions
    # ------------------------------------------------------------------

    def _parse_match(self, depth: int) -> Match:
        """Parse: ``'{' branch (',' branch)* (',' 'default' ':' path_expr)? ','? '}'``"""
        self._check_depth(depth)
        start_tok = self._advance()  # consume '{'
        branches: list[MatchBranch] = []
        default: PathExpression | None = None

        while not self._check(TokenType.RBRACE, TokenType.EOF):
            tok = self._current()
            if default is not None:
                raise self._error("'default' must be the last branch of a match expression")
            if tok.type is TokenType.DEFAULT:
                self._advance()
                self._expect(TokenType.COLON, "Expected ':' after 'default'")
                default = self._parse_path_expr(depth)
            elif tok.type in CONDITION_KEYWORDS:
                branches.append(self._parse_branch(depth))
            else:
                raise self._error(
                    "Expected 'os(...)', 'host(...)' or 'default' in match expression",
                    (*CONDITION_KEYWORDS, TokenType.DEFAULT),
                )
            if not self._match(TokenType.COMMA):
                break

        end_tok = self._expect_closing(TokenType.RBRACE, start_tok, "match expression")
        if not branches and default is None:
            raise self._error("Match expression must have at least one branch", at=start_tok)
        return Match(
            branches=tuple(branches),
            default=default,
            span=self._span_between(start_tok, end_tok),
        )

    def _parse_branch(self, depth: int) -> MatchBranch:
        """Parse: ``('os' | 'host' | '!os' | '!host') '(' value_list ')' ':' path_expr``"""
        start_tok = self._current()
        condition = self._parse_condition()
        self._expect(TokenType.COLON, f"Expected ':' after {condition}")
        value = self._parse_path_expr(depth)
        span = self._span_between(start_tok, self._previous)
        return MatchBranch(condition=condition, value=value, span=span)

    def _parse_condition(self) -> Condition:
        kw_tok = self._advance()
        kind = CondKind.OS if kw_tok.type in (TokenType.OS, TokenType.NOT_OS) else CondKind.HOST
        negated = kw_tok.type in (TokenType.NOT_OS, TokenType.NOT_HOST)
        open_tok = self._expect(TokenType.LPAREN, f"Expected '(' after {kw_tok.value!r}")

        values: list[str] = []
        while not self._check(TokenType.RPAREN, TokenType.EOF):
            tok = self._current()
            if not tok.is_path_text:
                raise self._error(f"Expected a value in {kw_tok.value}(...)", (TokenType.SEGMENT,))
            self._advance()
            values.append(tok.value)
            if not self._match(TokenType.COMMA):
                break

        end_tok = self._expect_closing(TokenType.RPAREN, open_tok, f"{kw_tok.value}(...)")
        if not values:
            raise self._error(f"{kw_tok.value}(...) needs at least one value", at=open_tok)
        return Condition(
            kind=kind,
            values=tuple(values),
            negated=negated,
            span=self._span_between(kw_tok, end_tok),
        )


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse configuration text and return the root ``Document``.

    Parameters
    ----------
    source:
        Complete configuration text.
    max_depth:
        Maximum combined nesting depth of variant and match expressions.

    Returns
    -------
    Document
        Every statement of the configuration, in declaration order.

    Raises
    ------
    LexError
        If the source contains control characters or a dangling escape.
    ParseErrorCollection
        If the source contains syntactic errors.

    Example
    -------
    ::

        from ambit.parser import parse
        document = parse('''
            .config/[nvim/init.vim, kitty/kitty.conf];
            {os(linux): .Xresources};
        ''')
    """
    tokens = tokenize(source)
    return Parser(tokens, max_depth=max_depth).parse()
