"""
AGQL Relations - Prolog calls inside a select query.

A relation is a name plus an ordered argument list and renders in prefix
form: (name arg1 arg2 ...). Arguments are not checked when the relation
is created; each one is resolved to text when the query is compiled.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from agql.terms.model import TERM_TYPES, Variable, to_term

if TYPE_CHECKING:
    from agql.client.repository import AbstractRepository


@dataclass(frozen=True)
class PrologLiteral:
    """
    A value emitted verbatim into Prolog text.

    Use it for numbers, atoms and generator ids that must not be quoted
    or serialized as RDF literals.
    """
    value: Any

    def __str__(self) -> str:
        return str(self.value)


def render_argument(argument: Any, repository: "AbstractRepository") -> str:
    """
    Render one relation argument as Prolog text.

    Variables become ?name, PrologLiterals their bare value, and RDF terms
    are serialized by the repository. Any other value is converted to a
    literal first.

    Raises:
        UnsupportedValueError: If the value has no literal representation
    """
    if isinstance(argument, Variable):
        return str(argument)
    if isinstance(argument, PrologLiteral):
        return str(argument)
    if isinstance(argument, TERM_TYPES):
        return repository.serialize_prolog(argument)
    return repository.serialize_prolog(to_term(argument))


class Relation:
    """
    A named Prolog relation.

    Example:
        Relation("q-", Variable("s"), RDF.type, Variable("o"))
        # renders as (q- ?s !<http://www.w3.org/1999/02/22-rdf-syntax-ns#type> ?o)
    """

    __slots__ = ("_name", "_arguments")

    def __init__(self, name: str, *arguments: Any):
        self._name = name
        self._arguments = tuple(arguments)

    @property
    def name(self) -> str:
        return self._name

    @property
    def arguments(self) -> tuple:
        return self._arguments

    @property
    def variables(self) -> Iterator[Variable]:
        """Distinct variable arguments in argument order."""
        seen = []
        for arg in self._arguments:
            if isinstance(arg, Variable) and arg not in seen:
                seen.append(arg)
                yield arg

    def to_prolog(self, repository: "AbstractRepository") -> str:
        """Render as (name arg ...)."""
        parts = [self._name]
        parts.extend(render_argument(arg, repository) for arg in self._arguments)
        return f"({' '.join(parts)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Relation):
            return NotImplemented
        return self._name == other._name and self._arguments == other._arguments

    def __hash__(self) -> int:
        return hash((self._name, self._arguments))

    def __repr__(self) -> str:
        args = ", ".join(repr(a) for a in self._arguments)
        return f"Relation({self._name!r}{', ' if args else ''}{args})"
