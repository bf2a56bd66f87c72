"""AST serialization and deserialization for ambit documents.

Provides conversion of ``Document`` AST trees to and from JSON and
YAML.  The serialized form is a plain dict/list structure that maps
naturally to both formats.

Usage
-----
::

    from ambit.ast.serializer import AstSerializer

    serializer = AstSerializer()
    data = serializer.to_dict(document)
    yaml_text = serializer.to_yaml(document)
    document2 = serializer.from_yaml(yaml_text)
    assert document == document2
"""
from __future__ import annotations

import json
from typing import Any

import yaml

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


class AstSerializer:
    """Converts between ``Document`` AST objects and plain Python dicts.

    The serialized representation uses ``"kind"`` discriminator fields on
    the path expression union so that deserialization is unambiguous.
    """

    # ------------------------------------------------------------------
    # Serialization (AST → dict)
    # ------------------------------------------------------------------

    def to_dict(self, document: Document) -> dict[str, object]:
        """Serialize a ``Document`` to a JSON-compatible dict."""
        return {
            "kind": "Document",
            "mappings": [self._mapping_to_dict(m) for m in document.mappings],
            "span": self._span_to_dict(document.span),
        }

    def _span_to_dict(self, span: Span) -> dict[str, int]:
        return {"start": span.start, "end": span.end, "line": span.line, "col": span.col}

    def _mapping_to_dict(self, mapping: SymlinkMapping) -> dict[str, object]:
        return {
            "kind": "SymlinkMapping",
            "repo": self._expr_to_dict(mapping.repo),
            "home": self._expr_to_dict(mapping.home) if mapping.home is not None else None,
            "span": self._span_to_dict(mapping.span),
        }

    def _condition_to_dict(self, condition: Condition) -> dict[str, object]:
        return {
            "kind": condition.kind.value,
            "values": list(condition.values),
            "negated": condition.negated,
            "span": self._span_to_dict(condition.span),
        }

    def _expr_to_dict(self, expr: PathExpression) -> dict[str, object]:
        if not isinstance(expr, (Literal, Sequence, Variant, Match)):
            raise TypeError(f"Unknown path expression type: {type(expr).__name__}")
        span = self._span_to_dict(expr.span)
        if isinstance(expr, Literal):
            return {"kind": "Literal", "value": expr.value, "span": span}
        if isinstance(expr, Sequence):
            return {
                "kind": "Sequence",
                "parts": [self._expr_to_dict(p) for p in expr.parts],
                "span": span,
            }
        if isinstance(expr, Variant):
            return {
                "kind": "Variant",
                "alternatives": [self._expr_to_dict(a) for a in expr.alternatives],
                "span": span,
            }
        return {
            "kind": "Match",
            "branches": [
                {
                    "condition": self._condition_to_dict(b.condition),
                    "value": self._expr_to_dict(b.value),
                    "span": self._span_to_dict(b.span),
                }
                for b in expr.branches
            ],
            "default": self._expr_to_dict(expr.default) if expr.default is not None else None,
            "span": span,
        }

    # ------------------------------------------------------------------
    # Deserialization (dict → AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, Any]) -> Document:
        """Deserialize a ``Document`` from a dict produced by ``to_dict``.

        Raises
        ------
        ValueError
            If the dict is not a serialized document.
        """
        if data.get("kind") != "Document":
            raise ValueError(f"Expected kind 'Document', got {data.get('kind')!r}")
        return Document(
            mappings=tuple(self._mapping_from_dict(m) for m in data.get("mappings", [])),
            span=self._span_from_dict(data.get("span")),
        )

    def _span_from_dict(self, data: dict[str, int] | None) -> Span:
        if not data:
            return Span.unknown()
        return Span(start=data["start"], end=data["end"], line=data["line"], col=data["col"])

    def _mapping_from_dict(self, data: dict[str, Any]) -> SymlinkMapping:
        home = data.get("home")
        return SymlinkMapping(
            repo=self._expr_from_dict(data["repo"]),
            home=self._expr_from_dict(home) if home is not None else None,
            span=self._span_from_dict(data.get("span")),
        )

    def _condition_from_dict(self, data: dict[str, Any]) -> Condition:
        return Condition(
            kind=CondKind(data["kind"]),
            values=tuple(data["values"]),
            negated=bool(data.get("negated", False)),
            span=self._span_from_dict(data.get("span")),
        )

    def _expr_from_dict(self, data: dict[str, Any]) -> PathExpression:
        kind = data.get("kind")
        span = self._span_from_dict(data.get("span"))
        if kind == "Literal":
            return Literal(value=data["value"], span=span)
        if kind == "Sequence":
            return Sequence(parts=tuple(self._expr_from_dict(p) for p in data["parts"]), span=span)
        if kind == "Variant":
            return Variant(
                alternatives=tuple(self._expr_from_dict(a) for a in data["alternatives"]),
                span=span,
            )
        if kind == "Match":
            branches = tuple(
                MatchBranch(
                    condition=self._condition_from_dict(b["condition"]),
                    value=self._expr_from_dict(b["value"]),
                    span=self._span_from_dict(b.get("span")),
                )
                for b in data["branches"]
            )
            default = data.get("default")
            return Match(
                branches=branches,
                default=self._expr_from_dict(default) if default is not None else None,
                span=span,
            )
        raise ValueError(f"Unknown path expression kind: {kind!r}")

    # ------------------------------------------------------------------
    # Text formats
    # ------------------------------------------------------------------

    def to_json(self, document: Document, indent: int | None = 2) -> str:
        """Serialize a ``Document`` to a JSON string."""
        return json.dumps(self.to_dict(document), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Document:
        """Deserialize a ``Document`` from a JSON string."""
        return self.from_dict(json.loads(text))

    def to_yaml(self, document: Document) -> str:
        """Serialize a ``Document`` to a YAML string."""
        return yaml.safe_dump(self.to_dict(document), sort_keys=False, allow_unicode=True)

    def from_yaml(self, text: str) -> Document:
        """Deserialize a ``Document`` from a YAML string."""
        return self.from_dict(yaml.safe_load(text))
