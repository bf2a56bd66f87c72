"""ambit Lexer: converts raw configuration text into a flat list of tokens.

The lexer is a single-pass character scanner that produces a
``list[Token]`` from a configuration document.  It tracks line and
column numbers for every token so the parser can produce precise error
messages.

Path segments are runs of any characters other than whitespace and the
reserved punctuation ``( ) [ ] { } , ; :``; they also end in front of
the mapping operator ``=>``.  A ``/`` is ordinary segment text: path
separators are meaningful to the filesystem, not to the lexer.

A backslash escapes the following character, so reserved punctuation
and whitespace can appear in file names (``my\\ file``).  ``\\*`` and
``\\?`` keep their backslash so the linker can tell an escaped wildcard
from a real one.

Comments start with ``#`` at the beginning of a token and run to the
end of the line.
"""
from __future__ import annotations

import logging
from typing import Final

from ambit.core.errors import AmbitError
from ambit.grammar.tokens import KEYWORDS, PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WILDCARDS: Final[frozenset[str]] = frozenset({"*", "?"})


class LexError(AmbitError):
    """Raised when the lexer encounters invalid input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    offset:
        0-based offset in the source where the error occurred.
    """

    def __init__(self, message: str, line: int, col: int, offset: int) -> None:
        super().__init__(f"LexError at {line}:{col}: {message}")
        self.lex_message = message
        self.line = line
        self.col = col
        self.offset = offset


class Lexer:
    """Single-pass ambit lexer.

    Parameters
    ----------
    source:
        The complete configuration text to tokenize.
    """

    __slots__ = ("_source", "_pos", "_line", "_col", "_tokens", "_token_line", "_token_col")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._line: int = 1
        self._col: int = 1
        self._tokens: list[Token] = []
        self._token_line: int = 1
        self._token_col: int = 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the complete token list.

        The list always ends with an ``EOF`` token.  Whitespace and
        comments are discarded.

        Raises
        ------
        LexError
            On a control character or a dangling escape.
        """
        while self._pos < len(self._source):
            self._scan_one()
        self._token_line = self._line
        self._token_col = self._col
        self._emit(TokenType.EOF, "", self._pos)
        logger.debug("Tokenized %d characters into %d tokens", len(self._source), len(self._tokens))
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position without advancing."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, start_offset: int) -> None:
        """Append a token using the recorded start position."""
        self._tokens.append(
            Token(
                type=token_type,
                value=value,
                line=self._token_line,
                col=self._token_col,
                offset=start_offset,
                length=self._pos - start_offset,
            )
        )

    def _error(self, message: str, start: int) -> LexError:
        return LexError(message, self._token_line, self._token_col, start)

    def _scan_one(self) -> None:
        """Scan exactly one token (or skip whitespace/comments)."""
        self._token_line = self._line
        self._token_col = self._col
        start = self._pos
        ch = self._current()

        if ch.isspace():
            self._advance()
            return

        if ch == "#":
            while self._pos < len(self._source) and self._current() != "\n":
                self._advance()
            return

        if ch == "=" and self._peek() == ">":
            self._advance()
            self._advance()
            self._emit(TokenType.MAPS_TO, "=>", start)
            return

        if ch in PUNCTUATION:
            self._advance()
            self._emit(PUNCTUATION[ch], ch, start)
            return

        if not ch.isprintable():
            raise self._error(f"Unexpected character {ch!r}", start)

        self._scan_segment(start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _at_segment_end(self) -> bool:
        ch = self._current()
        if not ch or ch.isspace() or ch in PUNCTUATION:
            return True
        return ch == "=" and self._peek() == ">"

    def _scan_segment(self, start: int) -> None:
        """Consume a path segment, processing backslash escapes.

        A segment whose raw text is exactly a keyword is emitted as that
        keyword; escaping any character (``\\default``) forces a plain
        segment.
        """
        buf: list[str] = []
        escaped = False
        while not self._at_segment_end():
            ch = self._current()
            if ch == "\\":
                esc_line, esc_col = self._line, self._col
                self._advance()
                if self._pos >= len(self._source):
                    raise LexError("Dangling escape at end of input", esc_line, esc_col, self._pos - 1)
                nxt = self._advance()
                if nxt in _WILDCARDS:
                    buf.append("\\")
                buf.append(nxt)
                escaped = True
                continue
            if not ch.isprintable():
                raise LexError(f"Unexpected character {ch!r}", self._line, self._col, self._pos)
            buf.append(self._advance())

        word = "".join(buf)
        token_type = TokenType.SEGMENT if escaped else KEYWORDS.get(word, TokenType.SEGMENT)
        self._emit(token_type, word, start)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize configuration text and return the complete token list.

    Parameters
    ----------
    source:
        ambit configuration text.

    Returns
    -------
    list[Token]
        All significant tokens, terminated by EOF.

    Raises
    ------
    LexError
        If the source contains control characters or a dangling escape.

    Example
    -------
    ::

        from ambit.lexer import tokenize
        tokens = tokenize(".config/[nvim/init.vim, kitty/kitty.conf];")
    """
    return Lexer(source).tokenize()
