"""
AGQL Term Grammar - Lark EBNF grammar for N-Triples encoded terms.

The server encodes every value of a query result row as a single
N-Triples term:
- IRIs: <http://example.org/x>
- Blank nodes: _:b1
- Literals: "text", "text"@en, "42"^^<http://www.w3.org/2001/XMLSchema#integer>
"""

TERM_GRAMMAR = r'''
start: term

term: iri
    | blank_node
    | literal

iri: IRIREF

blank_node: BLANK_NODE_LABEL

literal: STRING                 -> plain_literal
       | STRING LANGTAG         -> lang_literal
       | STRING "^^" IRIREF     -> typed_literal

// Terminals
IRIREF: /<([^\x00-\x20<>"{}|^`\\]|\\u[0-9A-Fa-f]{4}|\\U[0-9A-Fa-f]{8})*>/
BLANK_NODE_LABEL: /_:[A-Za-z0-9_][A-Za-z0-9_.\-]*/
LANGTAG: /@[a-zA-Z]+(-[a-zA-Z0-9]+)*/
STRING: /"([^"\\\n\r]|\\[tbnrf"'\\]|\\u[0-9A-Fa-f]{4}|\\U[0-9A-Fa-f]{8})*"/

%import common.WS
%ignore WS
'''


def get_grammar() -> str:
    """Return the term grammar string for use with Lark."""
    return TERM_GRAMMAR
