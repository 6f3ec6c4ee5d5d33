"""
AGQL Terms - RDF values, variables and triple patterns.

These dataclasses are the graph values exchanged with the server. Every
term knows its N-Triples form (``n3()``); the Prolog query compiler and the
statement API both build on it.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator, Optional, Union

from agql.exceptions import UnsupportedValueError


def _escape(value: str) -> str:
    """Escape a lexical form for use inside an N-Triples string."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


@dataclass(frozen=True)
class Variable:
    """
    A query variable.

    Represents: ?name
    """
    name: str

    def __post_init__(self):
        if self.name.startswith("?"):
            object.__setattr__(self, "name", self.name[1:])

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True)
class URIRef:
    """An IRI-identified resource."""
    value: str

    def n3(self) -> str:
        return f"<{self.value}>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BlankNode:
    """
    An anonymous resource.

    Local blank nodes get a random id; before being sent anywhere they are
    mapped to server-allocated ids by the owning repository.
    """
    id: str = field(default_factory=lambda: f"b{uuid.uuid4().hex[:16]}")

    def n3(self) -> str:
        return f"_:{self.id}"

    def __str__(self) -> str:
        return self.n3()


@dataclass(frozen=True)
class Literal:
    """
    A literal value with an optional datatype or language tag.

    ``value`` is always the lexical form; use ``to_python()`` to get a
    native value back.
    """
    value: str
    datatype: Optional[URIRef] = None
    language: Optional[str] = None

    def __post_init__(self):
        if self.datatype is not None and self.language is not None:
            raise ValueError("A literal cannot have both a datatype and a language")

    def n3(self) -> str:
        text = f'"{_escape(self.value)}"'
        if self.language:
            return f"{text}@{self.language}"
        if self.datatype is not None:
            return f"{text}^^{self.datatype.n3()}"
        return text

    def to_python(self) -> Any:
        """Convert the lexical form to a Python value where the datatype is known."""
        if self.datatype is None:
            return self.value
        converter = _FROM_XSD.get(self.datatype.value)
        if converter is None:
            return self.value
        try:
            return converter(self.value)
        except ValueError:
            return self.value

    def __str__(self) -> str:
        return self.value


class Namespace(str):
    """
    An IRI prefix that mints URIRefs by attribute or item access.

    Example:
        FOAF = Namespace("http://xmlns.com/foaf/0.1/")
        FOAF.knows  # URIRef("http://xmlns.com/foaf/0.1/knows")
    """

    def term(self, name: str) -> URIRef:
        return URIRef(str(self) + name)

    def __getattr__(self, name: str) -> URIRef:
        if name.startswith("__"):
            raise AttributeError(name)
        return self.term(name)

    def __getitem__(self, name) -> URIRef:
        if isinstance(name, str):
            return self.term(name)
        return str.__getitem__(self, name)


RDF = Namespace("http://www.w3.org/1999/02/22-rdf-syntax-ns#")
RDFS = Namespace("http://www.w3.org/2000/01/rdf-schema#")
XSD = Namespace("http://www.w3.org/2001/XMLSchema#")


def _parse_bool(text: str) -> bool:
    if text in ("true", "1"):
        return True
    if text in ("false", "0"):
        return False
    raise ValueError(text)


_FROM_XSD = {
    XSD.integer.value: int,
    XSD.int.value: int,
    XSD.long.value: int,
    XSD.short.value: int,
    XSD.decimal.value: Decimal,
    XSD.double.value: float,
    XSD.float.value: float,
    XSD.boolean.value: _parse_bool,
    XSD.dateTime.value: datetime.fromisoformat,
    XSD.date.value: date.fromisoformat,
    XSD.string.value: str,
}


Term = Union[URIRef, BlankNode, Literal]
PatternTerm = Union[Variable, URIRef, BlankNode, Literal]

TERM_TYPES = (URIRef, BlankNode, Literal)


def to_term(value: Any) -> Term:
    """
    Convert a Python value to an RDF term.

    Terms are returned unchanged. bool is checked before int since it is a
    subclass of it.

    Raises:
        UnsupportedValueError: If the value has no literal representation
    """
    if isinstance(value, TERM_TYPES):
        return value
    if isinstance(value, bool):
        return Literal("true" if value else "false", datatype=XSD.boolean)
    if isinstance(value, int):
        return Literal(str(value), datatype=XSD.integer)
    if isinstance(value, float):
        return Literal(repr(value), datatype=XSD.double)
    if isinstance(value, Decimal):
        return Literal(str(value), datatype=XSD.decimal)
    if isinstance(value, datetime):
        return Literal(value.isoformat(), datatype=XSD.dateTime)
    if isinstance(value, date):
        return Literal(value.isoformat(), datatype=XSD.date)
    if isinstance(value, str):
        return Literal(value)
    raise UnsupportedValueError(value)


def _to_pattern_term(value: Any) -> PatternTerm:
    if isinstance(value, Variable):
        return value
    return to_term(value)


@dataclass(frozen=True)
class Pattern:
    """
    A triple pattern.

    Represents: subject predicate object [in context]

    ``context`` names a graph; ``optional`` marks the pattern as not
    required to match. Neither has an equivalent in a plain Prolog ``q-``
    relation.
    """
    subject: PatternTerm
    predicate: PatternTerm
    object: PatternTerm
    context: Optional[PatternTerm] = None
    optional: bool = False

    def __post_init__(self):
        object.__setattr__(self, "subject", _to_pattern_term(self.subject))
        object.__setattr__(self, "predicate", _to_pattern_term(self.predicate))
        object.__setattr__(self, "object", _to_pattern_term(self.object))
        if self.context is not None:
            object.__setattr__(self, "context", _to_pattern_term(self.context))

    @classmethod
    def from_triple(cls, triple, optional: bool = False, context=None) -> "Pattern":
        """Build a pattern from an (s, p, o) or (s, p, o, c) sequence."""
        if isinstance(triple, Pattern):
            return triple
        items = tuple(triple)
        if len(items) == 4:
            if context is not None:
                raise ValueError("context given both in the triple and as an argument")
            context = items[3]
            items = items[:3]
        if len(items) != 3:
            raise ValueError(f"Expected a triple, got {len(items)} items")
        return cls(*items, context=context, optional=optional)

    @property
    def variables(self) -> Iterator[Variable]:
        """Distinct variables in subject, predicate, object order."""
        seen = []
        for term in (self.subject, self.predicate, self.object):
            if isinstance(term, Variable) and term not in seen:
                seen.append(term)
                yield term

    def __str__(self) -> str:
        parts = [
            str(t) if isinstance(t, Variable) else t.n3()
            for t in (self.subject, self.predicate, self.object)
        ]
        if self.context is not None:
            ctx = self.context
            parts.append(str(ctx) if isinstance(ctx, Variable) else ctx.n3())
        text = " ".join(parts)
        return f"[{text}]" + (" (optional)" if self.optional else "")
