"""
AGQL Solutions - Variable bindings returned by a query.

Query.run() yields Solution objects lazily; every new iteration runs the
query against the server again. Query.solutions() returns a Solutions list
that can be iterated any number of times.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from agql.terms.model import Term, Variable
from agql.terms.parser import parse_term

if TYPE_CHECKING:
    from agql.client.repository import AbstractRepository


class Solution(Mapping):
    """
    One row of query results: variable name -> term.

    Lookups accept a name ("s"), a prefixed name ("?s") or a Variable.
    Bound values are also available as attributes (solution.s).
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Optional[dict] = None):
        self._bindings = dict(bindings or {})

    @staticmethod
    def _key(key: Union[str, Variable]) -> str:
        if isinstance(key, Variable):
            return key.name
        return key[1:] if key.startswith("?") else key

    def __getitem__(self, key: Union[str, Variable]) -> Term:
        return self._bindings[self._key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, key: Any) -> bool:
        if not isinstance(key, (str, Variable)):
            return False
        return self._key(key) in self._bindings

    def __getattr__(self, name: str) -> Term:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._bindings[name]
        except KeyError:
            raise AttributeError(name) from None

    def __eq__(self, other) -> bool:
        if isinstance(other, Solution):
            return self._bindings == other._bindings
        return Mapping.__eq__(self, other)

    def __repr__(self) -> str:
        return f"Solution({self._bindings!r})"


class Solutions(list):
    """A materialized, reusable list of solutions."""

    @property
    def variable_names(self) -> list[str]:
        """Variable names bound in the first solution, or [] when empty."""
        return list(self[0].keys()) if self else []

    def values(self, name: Union[str, Variable]) -> list[Term]:
        """Collect one variable's value from every solution that binds it."""
        return [s[name] for s in self if name in s]


def parse_solutions(
    payload: dict,
    repository: Optional["AbstractRepository"] = None,
) -> Iterator[Solution]:
    """
    Decode a JSON query result into solutions.

    The payload has the shape {"names": [...], "values": [[...], ...]}, each
    cell an N-Triples term or null for an unbound variable. Server blank
    nodes are mapped back to local ones when a repository is given.
    """
    names = payload.get("names") or []
    for row in payload.get("values") or []:
        bindings = {}
        for name, cell in zip(names, row):
            if cell is None:
                continue
            term = parse_term(cell)
            if repository is not None:
                term = repository.map_from_server(term)
            bindings[name] = term
        yield Solution(bindings)
