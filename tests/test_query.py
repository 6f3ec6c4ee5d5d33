"""
Tests for AGQL Query.

Tests compilation of patterns and relations to Prolog select expressions.
The owning repository is a mock; only its serializer is used.
"""

import pytest
from unittest.mock import Mock

from agql.exceptions import UnsupportedPatternError, UnsupportedValueError
from agql.query import PrologLiteral, Query, Relation, Solution, Solutions
from agql.query.query import convert_to_relation
from agql.terms import Pattern, URIRef, Variable, RDF

from conftest import plain_serialize_prolog


EX = "http://example.org/"


@pytest.fixture
def repo():
    """Create a mock repository that serializes values plainly."""
    repo = Mock()
    repo.serialize_prolog.side_effect = plain_serialize_prolog
    return repo


@pytest.fixture
def query(repo):
    """Create an empty query on the mock repository."""
    return Query(repo)


s, p, o = Variable("s"), Variable("p"), Variable("o")


class TestCompilation:
    """Tests for Query.to_prolog()."""

    def test_single_pattern(self, query):
        """Test the plain three-variable pattern."""
        query.pattern((s, p, o))

        assert query.to_prolog() == "(select (?s ?p ?o)\n  (q- ?s ?p ?o))"

    def test_pattern_with_resources(self, query):
        """Test resources render in Prolog literal syntax."""
        query.pattern((s, RDF.type, URIRef(EX + "Person")))

        assert query.to_prolog() == (
            "(select (?s)\n"
            "  (q- ?s !<http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
            "!<http://example.org/Person>))"
        )

    def test_multiple_entries_joined_with_indent(self, query):
        """Test each relation goes on its own indented line."""
        query.pattern((s, RDF.type, o))
        query.relation("member", o, p)

        lines = query.to_prolog().split("\n")
        assert lines[0] == "(select (?s ?o ?p)"
        assert lines[1].startswith("  (q- ?s ")
        assert lines[2] == "  (member ?o ?p))"

    def test_variables_in_first_seen_order(self, query):
        """Test the head lists each variable once, first occurrence first."""
        x = Variable("x")
        query.pattern((o, p, s))
        query.relation("link", s, x, o)
        query.pattern((x, p, x))

        assert query.variables == (o, p, s, x)
        assert query.to_prolog().startswith("(select (?o ?p ?s ?x)\n")

    def test_repeated_variable_in_pattern(self, query):
        """Test a variable used twice in one pattern is listed once."""
        query.pattern((s, p, s))

        assert query.variables == (s, p)

    def test_compile_is_repeatable(self, query):
        """Test compiling twice yields identical text."""
        query.pattern((s, p, o))
        query.relation("foo", o, 5)

        assert query.to_prolog() == query.to_prolog()

    def test_compile_does_not_mutate(self, query):
        """Test compilation leaves the entries untouched."""
        query.pattern((s, p, o))
        before = query.entries

        query.to_prolog()

        assert query.entries == before
        assert isinstance(query.entries[0], Pattern)

    def test_duplicate_relations_kept(self, query):
        """Test identical relations are not deduplicated."""
        query.relation("foo", s)
        query.relation("foo", s)

        assert query.to_prolog().count("(foo ?s)") == 2

    def test_explicit_repository(self, query):
        """Test an explicit repository is used for serialization."""
        other = Mock()
        other.serialize_prolog.return_value = "!<urn:other>"
        query.pattern((s, RDF.type, o))

        text = query.to_prolog(other)

        assert "!<urn:other>" in text
        query.repository.serialize_prolog.assert_not_called()


class TestUnsupportedPatterns:
    """Tests for patterns with no relation equivalent."""

    def test_optional_pattern_fails(self, query):
        """Test an optional pattern is rejected at compile time."""
        query.pattern((s, p, o), optional=True)

        with pytest.raises(UnsupportedPatternError) as exc_info:
            query.to_prolog()
        assert "optional" in exc_info.value.reason

    def test_context_pattern_fails(self, query):
        """Test a pattern restricted to a graph is rejected."""
        query.pattern((s, p, o), context=URIRef(EX + "graph"))

        with pytest.raises(UnsupportedPatternError) as exc_info:
            query.to_prolog()
        assert "context" in exc_info.value.reason

    def test_quad_pattern_fails(self, query):
        """Test a four-element pattern carries its context."""
        query.pattern((s, p, o, URIRef(EX + "graph")))

        with pytest.raises(UnsupportedPatternError):
            query.to_prolog()

    def test_adding_is_not_an_error(self, query):
        """Test the error surfaces only when compiling."""
        query.pattern((s, p, o), optional=True)

        assert len(query) == 1

    def test_error_to_dict(self):
        """Test the error carries the pattern and reason."""
        pattern = Pattern(s, p, o, optional=True)

        with pytest.raises(UnsupportedPatternError) as exc_info:
            convert_to_relation(pattern)

        d = exc_info.value.to_dict()
        assert d["error"] == "UnsupportedPatternError"
        assert d["pattern"] == str(pattern)

    def test_pattern_object_with_options_rejected(self, query):
        """Test options can't be layered on an existing Pattern."""
        with pytest.raises(ValueError):
            query.pattern(Pattern(s, p, o), optional=True)


class TestRelations:
    """Tests for relations added to a query."""

    def test_convert_pattern(self):
        """Test a pattern becomes a q- relation."""
        relation = convert_to_relation(Pattern(s, p, o))

        assert relation == Relation("q-", s, p, o)

    def test_relation_unchanged(self):
        """Test a relation passes through conversion."""
        relation = Relation("foo", s)

        assert convert_to_relation(relation) is relation

    def test_python_values_become_literals(self, query):
        """Test plain Python values render as typed literals."""
        query.relation("foo", 5, "five")

        assert query.to_prolog() == (
            "(select ()\n"
            '  (foo !"5"^^<http://www.w3.org/2001/XMLSchema#integer> !"five"))'
        )

    def test_prolog_literal_unquoted(self, query):
        """Test a PrologLiteral renders bare."""
        query.relation("foo", PrologLiteral(5))

        assert query.to_prolog() == "(select ()\n  (foo 5))"

    def test_bad_argument_fails_on_compile(self, query):
        """Test an unconvertible argument is only detected on compile."""
        query.relation("foo", object())

        with pytest.raises(UnsupportedValueError):
            query.to_prolog()

    def test_ego_group_member(self, query):
        """Test ego_group_member appends the expected relation."""
        actor = URIRef(EX + "alice")
        generator = PrologLiteral("id1")

        query.ego_group_member(actor, 3, generator, Variable("member"))

        assert query.entries == (
            Relation("ego-group-member", actor, PrologLiteral(3), generator, Variable("member")),
        )
        assert query.to_prolog() == (
            "(select (?member)\n"
            "  (ego-group-member !<http://example.org/alice> 3 id1 ?member))"
        )

    def test_chaining(self, query):
        """Test builder methods return the query."""
        result = query.pattern((s, p, o)).relation("foo", s)

        assert result is query
        assert len(query) == 2


class TestExecution:
    """Tests for running a query through its repository."""

    def test_run_delegates(self, query, repo):
        """Test run() hands the query to the repository."""
        stream = iter([Solution({"s": URIRef(EX + "a")})])
        repo.query.return_value = stream

        assert query.run() is stream
        repo.query.assert_called_once_with(query)

    def test_solutions_materialized(self, query, repo):
        """Test solutions() returns a reusable list."""
        repo.query.return_value = iter([
            Solution({"s": URIRef(EX + "a")}),
            Solution({"s": URIRef(EX + "b")}),
        ])

        result = query.solutions()

        assert isinstance(result, Solutions)
        assert len(result) == 2
        assert list(result) == list(result)
        assert result.values("s") == [URIRef(EX + "a"), URIRef(EX + "b")]

    def test_each_run_executes_again(self, query, repo):
        """Test every run() call asks the repository again."""
        repo.query.side_effect = lambda q: iter([])

        list(query.run())
        list(query.run())

        assert repo.query.call_count == 2
