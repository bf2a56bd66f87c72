"""Convenience API for ambit: read, parse and resolve in one object.

Example
-------
::

    from ambit import AmbitConfig, EvaluationContext

    config = AmbitConfig.from_file("~/.config/ambit/config.ambit")
    for link in config.links(EvaluationContext.from_system()):
        print(link)
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ambit.expander.expander import DEFAULT_MAX_EXPANSIONS, Expander
from ambit.parser.parser import DEFAULT_MAX_DEPTH, parse

if TYPE_CHECKING:
    from ambit.ast.nodes import Document
    from ambit.expander.context import EvaluationContext
    from ambit.expander.expander import ResolvedLink


class AmbitConfig:
    """A parsed configuration document.

    Parsing happens eagerly in the constructor, so a constructed
    ``AmbitConfig`` is always syntactically valid.

    Parameters
    ----------
    source:
        Configuration text.
    origin:
        Where the text came from, used in messages.
    max_depth:
        Maximum nesting depth of variant/match expressions.
    """

    def __init__(self, source: str, origin: str = "<string>", max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._source = source
        self.origin = origin
        self._document: Document = parse(source, max_depth=max_depth)

    @classmethod
    def from_file(cls, path: str | Path, max_depth: int = DEFAULT_MAX_DEPTH) -> "AmbitConfig":
        """Read and parse a UTF-8 configuration file, with or without a byte order mark.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        config_path = Path(path).expanduser()
        return cls(config_path.read_text(encoding="utf-8-sig"), origin=str(config_path), max_depth=max_depth)

    @property
    def document(self) -> "Document":
        """The parsed AST."""
        return self._document

    @property
    def source(self) -> str:
        return self._source

    def links(
        self,
        context: "EvaluationContext",
        max_expansions: int = DEFAULT_MAX_EXPANSIONS,
    ) -> list["ResolvedLink"]:
        """Resolve the document for ``context``."""
        return Expander(context, max_expansions=max_expansions).resolve(self._document)

    def __len__(self) -> int:
        return len(self._document.mappings)

    def __repr__(self) -> str:
        return f"AmbitConfig(origin={self.origin!r}, statements={len(self)})"
