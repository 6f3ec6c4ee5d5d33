"""
AGQL - AllegroGraph Prolog Query Layer

Client-side query translation and session protocol for AllegroGraph-style
triple stores. Triple patterns and Prolog relations are compiled into the
server's Prolog select notation; sessions manage transactions and SNA
generators registered on the server.

Components:
- Query: patterns and relations compiled to Prolog text
- Session: transactions and SNA generator registration
- Repository: stateless statement access and Prolog queries
- agql.terms: RDF values and N-Triples term parsing

Usage:
    from agql import Repository, ServerConfig, Variable, Namespace

    FOAF = Namespace("http://xmlns.com/foaf/0.1/")

    repo = Repository.from_config(ServerConfig.from_env(repository="people"))
    with repo.session() as session:
        knows = session.generator(undirected=FOAF.knows)
        query = session.build_query()
        query.ego_group_member(alice, 2, knows, Variable("member"))
        for solution in query.solutions():
            print(solution.member)
"""

from agql.client import Repository, RequestExecutor, Session, SnaGenerator
from agql.config import ServerConfig
from agql.exceptions import (
    AGQLError,
    QueryTranslationError,
    ServerError,
    SessionClosedError,
    TermParseError,
    TransportError,
    UnexpectedStatusError,
    UnrecognizedOptionError,
    UnsupportedPatternError,
    UnsupportedValueError,
)
from agql.query import PrologLiteral, Query, Relation, Solution, Solutions
from agql.terms import (
    BlankNode,
    Literal,
    Namespace,
    Pattern,
    URIRef,
    Variable,
    RDF,
    RDFS,
    XSD,
)

__all__ = [
    # Main API
    "Repository",
    "Session",
    "Query",
    "ServerConfig",
    "RequestExecutor",
    "SnaGenerator",
    # Query model
    "PrologLiteral",
    "Relation",
    "Solution",
    "Solutions",
    # Terms
    "BlankNode",
    "Literal",
    "Namespace",
    "Pattern",
    "URIRef",
    "Variable",
    "RDF",
    "RDFS",
    "XSD",
    # Errors
    "AGQLError",
    "QueryTranslationError",
    "UnsupportedPatternError",
    "UnsupportedValueError",
    "UnrecognizedOptionError",
    "ServerError",
    "UnexpectedStatusError",
    "TransportError",
    "SessionClosedError",
    "TermParseError",
]

__version__ = "0.1.0"
