"""
AGQL Term Parser - Lark-based parser for N-Triples encoded terms.

Turns the strings found in query results and statement listings back
into URIRef, BlankNode and Literal values.
"""

import re
from typing import Optional

from lark import Lark, Transformer, exceptions as lark_exceptions

from agql.exceptions import TermParseError
from agql.terms.grammar import get_grammar
from agql.terms.model import BlankNode, Literal, Term, URIRef


_ESCAPES = {
    "t": "\t",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
}

_ESCAPE_RE = re.compile(r'\\(?:u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8})|(.))')


def _unescape(text: str) -> str:
    def replace(match):
        code = match.group(1) or match.group(2)
        if code:
            return chr(int(code, 16))
        return _ESCAPES.get(match.group(3), match.group(3))
    return _ESCAPE_RE.sub(replace, text)


class TermTransformer(Transformer):
    """
    Lark Transformer that converts the parse tree to terms.
    """

    # --- Terminal handling ---

    def IRIREF(self, token):
        return URIRef(_unescape(str(token)[1:-1]))

    def BLANK_NODE_LABEL(self, token):
        return BlankNode(str(token)[2:])

    def STRING(self, token):
        return _unescape(str(token)[1:-1])

    def LANGTAG(self, token):
        return str(token)[1:]

    # --- Rules ---

    def iri(self, items):
        return items[0]

    def blank_node(self, items):
        return items[0]

    def plain_literal(self, items):
        return Literal(items[0])

    def lang_literal(self, items):
        return Literal(items[0], language=items[1])

    def typed_literal(self, items):
        return Literal(items[0], datatype=items[1])

    def term(self, items):
        return items[0]

    def start(self, items):
        return items[0]


class TermParser:
    """
    N-Triples term parser using Lark.

    Example:
        parser = TermParser()
        term = parser.parse('"42"^^<http://www.w3.org/2001/XMLSchema#integer>')
    """

    def __init__(self):
        self._parser = Lark(
            get_grammar(),
            parser='lalr',
            transformer=TermTransformer(),
        )

    def parse(self, text: str) -> Term:
        """
        Parse one N-Triples term.

        Raises:
            TermParseError: If the text is not a single well-formed term
        """
        try:
            return self._parser.parse(text)
        except lark_exceptions.LarkError as e:
            raise TermParseError(text, str(e).splitlines()[0]) from e


_default_parser: Optional[TermParser] = None


def parse_term(text: str) -> Term:
    """
    Parse one N-Triples term with a shared parser instance.

    Building the LALR tables is the expensive part, so the parser is
    created once per process.
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = TermParser()
    return _default_parser.parse(text)
