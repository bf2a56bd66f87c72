"""Token definitions for the ambit configuration language.

Defines the complete token vocabulary used by the ambit lexer.  Every
keyword and punctuation mark is represented as a member of the
``TokenType`` enum, and every scanned token is represented by a
``Token`` dataclass that carries its type, text, and source position.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final


class TokenType(Enum):
    """Exhaustive enumeration of all ambit token types."""

    # -----------------------------------------------------------------
    # Path text
    # -----------------------------------------------------------------
    SEGMENT = auto()

    # -----------------------------------------------------------------
    # Keywords (match conditions)
    # -----------------------------------------------------------------
    OS = auto()
    HOST = auto()
    NOT_OS = auto()
    NOT_HOST = auto()
    DEFAULT = auto()

    # -----------------------------------------------------------------
    # Operators / punctuation
    # -----------------------------------------------------------------
    MAPS_TO = auto()    # =>
    SEMICOLON = auto()
    COMMA = auto()
    COLON = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    LPAREN = auto()
    RPAREN = auto()

    # -----------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------
    EOF = auto()


# Mapping from literal keyword text to its TokenType.
KEYWORDS: Final[dict[str, TokenType]] = {
    "os": TokenType.OS,
    "host": TokenType.HOST,
    "!os": TokenType.NOT_OS,
    "!host": TokenType.NOT_HOST,
    "default": TokenType.DEFAULT,
}

# Single characters that always terminate a path segment.
PUNCTUATION: Final[dict[str, TokenType]] = {
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

CONDITION_KEYWORDS: Final[frozenset[TokenType]] = frozenset(
    {TokenType.OS, TokenType.HOST, TokenType.NOT_OS, TokenType.NOT_HOST}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The token text.  For ``SEGMENT`` tokens this is the text after
        escape processing.
    line:
        1-based line number in the source file.
    col:
        1-based column number of the first character of the token.
    offset:
        0-based offset from the start of the source string.
    length:
        Number of source characters the token spans (escapes included).
    """

    type: TokenType
    value: str
    line: int
    col: int
    offset: int
    length: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"

    @property
    def is_keyword(self) -> bool:
        """Return True if this token is one of the condition keywords or ``default``."""
        return self.type in CONDITION_KEYWORDS or self.type is TokenType.DEFAULT

    @property
    def is_path_text(self) -> bool:
        """Return True if the token can stand as literal path text.

        Keywords are only meaningful inside a match expression; in path
        position they are ordinary file names.
        """
        return self.type is TokenType.SEGMENT or self.is_keyword
