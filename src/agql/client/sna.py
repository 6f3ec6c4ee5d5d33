"""
AGQL SNA Generators - Link-traversal rules for social network analysis.

A generator tells the server which predicates to follow, and in which
direction, when it computes reachability or ego groups. The in-memory
object only exists long enough to be turned into request parameters;
the server-side registration is what queries refer to.
"""

from typing import TYPE_CHECKING, Any, Iterable

from agql.exceptions import UnrecognizedOptionError
from agql.terms.model import TERM_TYPES, URIRef

if TYPE_CHECKING:
    from agql.client.repository import AbstractRepository

# option name -> server parameter name
GENERATOR_OPTIONS = {
    "object_of": "objectOf",
    "subject_of": "subjectOf",
    "undirected": "undirected",
}


def validate_options(options: dict, allowed: Iterable[str]) -> None:
    """
    Reject option keys outside the allowed set.

    Raises:
        UnrecognizedOptionError: If any key is not allowed
    """
    allowed = sorted(allowed)
    unknown = sorted(str(k) for k in options if k not in allowed)
    if unknown:
        raise UnrecognizedOptionError(unknown, allowed)


def _as_predicates(value: Any) -> list:
    # Bare strings are taken as IRIs
    if value is None:
        return []
    if isinstance(value, (str, *TERM_TYPES)):
        value = [value]
    return [URIRef(v) if isinstance(v, str) else v for v in value]


class SnaGenerator:
    """
    A link-traversal generator definition.

    Args:
        repository: Session used to serialize predicates
        object_of: Follow these predicates from subject to object
        subject_of: Follow these predicates from object to subject
        undirected: Follow these predicates in both directions

    Each option takes one predicate or a collection of predicates.
    """

    def __init__(
        self,
        repository: "AbstractRepository",
        object_of: Any = None,
        subject_of: Any = None,
        undirected: Any = None,
    ):
        self._repository = repository
        self.object_of = _as_predicates(object_of)
        self.subject_of = _as_predicates(subject_of)
        self.undirected = _as_predicates(undirected)

    @classmethod
    def from_options(cls, repository: "AbstractRepository", options: dict) -> "SnaGenerator":
        """Build a generator from a mapping, rejecting unknown keys."""
        validate_options(options, GENERATOR_OPTIONS)
        return cls(repository, **options)

    def to_params(self) -> dict[str, list[str]]:
        """Request parameters: one entry per option that names predicates."""
        params = {}
        for option, param in GENERATOR_OPTIONS.items():
            predicates = getattr(self, option)
            if predicates:
                params[param] = [self._repository.serialize(p) for p in predicates]
        return params

    def __repr__(self) -> str:
        return (
            f"SnaGenerator(object_of={self.object_of!r}, "
            f"subject_of={self.subject_of!r}, undirected={self.undirected!r})"
        )
