"""AGQL Query module - Prolog relations, queries and solutions."""

from agql.query.query import (
    EGO_GROUP_MEMBER_RELATION,
    PLAIN_PATTERN_RELATION,
    Query,
    convert_to_relation,
)
from agql.query.relation import PrologLiteral, Relation, render_argument
from agql.query.solutions import Solution, Solutions, parse_solutions

__all__ = [
    "Query",
    "Relation",
    "PrologLiteral",
    "Solution",
    "Solutions",
    "convert_to_relation",
    "render_argument",
    "parse_solutions",
    "PLAIN_PATTERN_RELATION",
    "EGO_GROUP_MEMBER_RELATION",
]
