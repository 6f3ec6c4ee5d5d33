"""
AGQL Query - Triple patterns and Prolog relations compiled to Prolog text.

A Query collects patterns and relations in insertion order and compiles
them into a single AllegroGraph Prolog select expression:

    (select (?s ?p ?o)
      (q- ?s ?p ?o))

Usage:
    query = repo.build_query()
    query.pattern((Variable("s"), Variable("p"), Variable("o")))
    for solution in query.run():
        print(solution.s)

Note that most relations other than q- need a Session: running Prolog
against a dedicated session requires elevated privileges and server-side
resources.
"""

from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from agql.exceptions import UnsupportedPatternError
from agql.query.relation import PrologLiteral, Relation
from agql.query.solutions import Solution, Solutions
from agql.terms.model import Pattern, Variable

if TYPE_CHECKING:
    from agql.client.repository import AbstractRepository

# Relation name the server uses for a plain triple match
PLAIN_PATTERN_RELATION = "q-"

EGO_GROUP_MEMBER_RELATION = "ego-group-member"


def convert_to_relation(entry: Union[Pattern, Relation]) -> Relation:
    """
    Convert a pattern to a q- relation; relations are returned unchanged.

    Raises:
        UnsupportedPatternError: If the pattern is optional or names a graph
    """
    if isinstance(entry, Relation):
        return entry
    if entry.optional:
        raise UnsupportedPatternError(entry, "optional patterns are not supported")
    if entry.context is not None:
        raise UnsupportedPatternError(entry, "graph context is not supported")
    return Relation(PLAIN_PATTERN_RELATION, entry.subject, entry.predicate, entry.object)


class Query:
    """
    A query with AllegroGraph Prolog extensions.

    Holds patterns and relations in the order they were added. The owning
    repository is only used to serialize values and to run the query.
    """

    def __init__(self, repository: "AbstractRepository"):
        self._repository = repository
        self._entries: list[Union[Pattern, Relation]] = []

    @property
    def repository(self) -> "AbstractRepository":
        return self._repository

    @property
    def entries(self) -> tuple:
        """Patterns and relations in insertion order."""
        return tuple(self._entries)

    @property
    def variables(self) -> tuple[Variable, ...]:
        """Each distinct variable once, in first-seen order across entries."""
        variables: list[Variable] = []
        for entry in self._entries:
            for var in entry.variables:
                if var not in variables:
                    variables.append(var)
        return tuple(variables)

    def pattern(
        self,
        triple,
        optional: bool = False,
        context: Optional[Any] = None,
    ) -> "Query":
        """
        Add a triple pattern.

        Args:
            triple: A Pattern, or an (s, p, o) / (s, p, o, c) sequence of
                Variables, terms or Python values
            optional: Mark the pattern as optional
            context: Graph the pattern is restricted to

        Returns:
            This query, for chaining
        """
        if isinstance(triple, Pattern):
            if optional or context is not None:
                raise ValueError("optional/context must be set on the Pattern itself")
            self._entries.append(triple)
        else:
            self._entries.append(Pattern.from_triple(triple, optional=optional, context=context))
        return self

    def relation(self, name: str, *arguments: Any) -> "Query":
        """
        Add a relation. Relations are only meaningful in Prolog queries.

        Args:
            name: Prolog functor name
            *arguments: Variables, RDF terms, PrologLiterals, or Python
                values that can be converted to literals

        Returns:
            This query, for chaining
        """
        self._entries.append(Relation(name, *arguments))
        return self

    def ego_group_member(
        self,
        actor: Any,
        depth: int,
        generator: PrologLiteral,
        member: Any,
    ) -> "Query":
        """
        Generate all members of an actor's ego group.

        Args:
            actor: The resource at the center of the graph
            depth: The maximum number of links to traverse
            generator: Reference returned by Session.generator()
            member: A Variable to bind, or a resource to test for membership

        Returns:
            This query, for chaining
        """
        return self.relation(
            EGO_GROUP_MEMBER_RELATION, actor, PrologLiteral(depth), generator, member
        )

    def to_prolog(self, repository: Optional["AbstractRepository"] = None) -> str:
        """
        Compile to AllegroGraph Prolog notation.

        Compilation does not modify the query; the same entries always
        produce the same text.

        Raises:
            UnsupportedPatternError: If a pattern is optional or names a graph
            UnsupportedValueError: If an argument can't become an RDF value
        """
        if repository is None:
            repository = self._repository
        relations = [convert_to_relation(entry) for entry in self._entries]
        head = " ".join(str(v) for v in self.variables)
        body = "\n  ".join(r.to_prolog(repository) for r in relations)
        return f"(select ({head})\n  {body})"

    def run(self) -> Iterator[Solution]:
        """
        Run this query against the owning repository.

        Returns a single-use iterator. Iterating again means calling run()
        again, which executes the query on the server again; use solutions()
        to get a reusable list.
        """
        return self._repository.query(self)

    def solutions(self) -> Solutions:
        """Run this query and collect every solution into a list."""
        return Solutions(self.run())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Query({len(self._entries)} entries)"
