"""AGQL Terms module - RDF values, triple patterns and N-Triples term parser."""

from agql.terms.model import (
    BlankNode,
    Literal,
    Namespace,
    Pattern,
    Term,
    URIRef,
    Variable,
    RDF,
    RDFS,
    XSD,
    to_term,
)
from agql.terms.parser import TermParser, parse_term

__all__ = [
    "BlankNode",
    "Literal",
    "Namespace",
    "Pattern",
    "Term",
    "URIRef",
    "Variable",
    "RDF",
    "RDFS",
    "XSD",
    "to_term",
    "TermParser",
    "parse_term",
]
