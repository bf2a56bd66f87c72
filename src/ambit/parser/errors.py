"""Parse error types for the ambit parser.

All parse errors carry source-location information so that the CLI can
display precise, actionable error messages.
"""
from __future__ import annotations

from enum import Enum, auto

from ambit.ast.nodes import Span
from ambit.core.errors import AmbitError
from ambit.grammar.tokens import Token, TokenType


class RecoveryStrategy(Enum):
    """How the parser continues after an error.

    SYNCHRONIZE
        Skip tokens until the next ``;`` (or EOF) and resume with the
        following statement.
    ABORT
        Stop parsing immediately; used for errors that make the rest of
        the document meaningless, such as exceeding the nesting limit.
    """

    SYNCHRONIZE = auto()
    ABORT = auto()


class ParseError(AmbitError):
    """A single grammar violation with location and expectation.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    span:
        Source location of the offending token.
    expected:
        Token types that would have been accepted at this position.
    found:
        The token actually encountered, if available.
    recovery:
        How the parser continued after recording this error.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        expected: tuple[TokenType, ...] = (),
        found: Token | None = None,
        recovery: RecoveryStrategy = RecoveryStrategy.SYNCHRONIZE,
    ) -> None:
        self.message = message
        self.span = span
        self.expected = expected
        self.found = found
        self.recovery = recovery
        super().__init__(self._describe())

    @property
    def line(self) -> int:
        return self.span.line

    @property
    def col(self) -> int:
        return self.span.col

    def _describe(self) -> str:
        loc = f"{self.span.line}:{self.span.col}"
        if self.found is not None:
            found = "end of file" if self.found.type is TokenType.EOF else repr(self.found.value)
            return f"ParseError at {loc}: {self.message} (found {found})"
        return f"ParseError at {loc}: {self.message}"

    def __str__(self) -> str:
        return self._describe()


class ParseErrorCollection(ParseError):
    """Aggregates every ``ParseError`` from a single parse run.

    The parser continues past errors and collects them all rather than
    aborting at the first problem.  The collection itself is a
    ``ParseError`` positioned at the first error, so callers that only
    care about "did it parse" can catch ``ParseError``.

    Parameters
    ----------
    errors:
        Ordered, non-empty list of errors encountered during parsing.
    """

    def __init__(self, errors: list[ParseError]) -> None:
        if not errors:
            raise ValueError("ParseErrorCollection requires at least one error")
        self.errors: list[ParseError] = list(errors)
        first = self.errors[0]
        super().__init__(first.message, first.span, first.expected, first.found, first.recovery)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        lines = [f"ParseErrorCollection ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
