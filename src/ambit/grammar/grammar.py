"""Formal grammar rules for the ambit configuration language.

This module documents the grammar as EBNF-style string constants.  The
grammar is implemented as a hand-written recursive-descent parser (see
``ambit.parser``); these constants are reference documentation and are
printed by ``ambit grammar``.

Grammar notation used here:
    ``::=``      production rule
    ``|``        alternation
    ``( )``      grouping
    ``?``        optional (zero or one)
    ``*`` ``+``  zero-or-more / one-or-more repetitions
    ``SEGMENT``  terminal: run of non-reserved, non-whitespace characters
"""
from __future__ import annotations

GRAMMAR_DOCUMENT = """
document  ::= statement* EOF
statement ::= path_expr ( '=>' path_expr )? ';'
"""

GRAMMAR_PATH = """
path_expr ::= atom+            (two SEGMENT atoms may not be adjacent)
atom      ::= SEGMENT | keyword | variant | match
keyword   ::= 'os' | 'host' | '!os' | '!host' | 'default'
variant   ::= '[' path_expr ( ',' path_expr )* ','? ']'
"""

GRAMMAR_MATCH = """
match     ::= '{' ( branch ( ',' branch )* )? ( ','? default_branch )? ','? '}'
branch    ::= condition ':' path_expr
condition ::= ( 'os' | 'host' | '!os' | '!host' ) '(' value_list ')'
value_list ::= SEGMENT ( ',' SEGMENT )* ','?
default_branch ::= 'default' ':' path_expr
"""

FULL_GRAMMAR = "\n".join([GRAMMAR_DOCUMENT, GRAMMAR_PATH, GRAMMAR_MATCH])
