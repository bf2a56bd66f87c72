"""ambit AST module.

Exports all AST node types and the serializer for converting AST trees
to JSON/YAML.
"""
from __future__ import annotations

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
from ambit.ast.serializer import AstSerializer

__all__ = [
    "Span",
    "Document",
    "SymlinkMapping",
    # Path expressions
    "PathExpression",
    "Literal",
    "Sequence",
    "Variant",
    "Match",
    "MatchBranch",
    # Conditions
    "CondKind",
    "Condition",
    # Serializer
    "AstSerializer",
]
