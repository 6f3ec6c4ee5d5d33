"""
AGQL Repository - Stateless access to a remote triple store.

AbstractRepository holds what repositories and sessions share: URL
resolution, N-Triples serialization with blank-node mapping, statement
CRUD and Prolog query execution. Repository is the stateless entry point;
call Repository.session() to get a stateful Session.

Usage:
    from agql import Repository, Variable

    with Repository.from_config(ServerConfig.from_env()) as repo:
        query = repo.build_query()
        query.pattern((Variable("s"), Variable("p"), Variable("o")))
        rows = query.solutions()
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional

from agql.client.transport import RequestExecutor
from agql.config import ServerConfig
from agql.query.query import Query
from agql.query.solutions import Solution, parse_solutions
from agql.terms.model import BlankNode, Pattern, Term, to_term
from agql.terms.parser import parse_term

if TYPE_CHECKING:
    from agql.client.session import Session

logger = logging.getLogger(__name__)


class AbstractRepository:
    """
    Shared behavior of repositories and sessions.

    Blank nodes: the server owns blank node identity, so each local
    BlankNode is exchanged for a server-allocated id the first time it is
    serialized. The mapping lives in this object only. It is not shared
    with other repository objects and does not survive a fork(): a child
    process that keeps using a forked repository can hand out ids the
    parent also holds.
    """

    def __init__(self, executor: RequestExecutor, url: str):
        self._executor = executor
        self._url = url.rstrip("/")
        self._to_server: dict[BlankNode, BlankNode] = {}
        self._from_server: dict[BlankNode, BlankNode] = {}

    @property
    def url(self) -> str:
        return self._url

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def path(self, relative: str = "") -> str:
        """Full URL of a resource below this repository."""
        if not relative:
            return self._url
        return f"{self._url}/{relative.lstrip('/')}"

    # --- Blank node mapping ---

    def _allocate_blank_nodes(self, amount: int) -> list[BlankNode]:
        ids = self._executor.request_json(
            "post", self.path("blankNodes"), params={"amount": amount}
        )
        return [parse_term(i) for i in ids]

    def map_to_server(self, term: Term) -> Term:
        """Replace a local blank node with its server counterpart."""
        if not isinstance(term, BlankNode):
            return term
        server = self._to_server.get(term)
        if server is None:
            server = self._allocate_blank_nodes(1)[0]
            self._to_server[term] = server
            self._from_server[server] = term
        return server

    def map_from_server(self, term: Term) -> Term:
        """Replace a server blank node with the local one it stands for."""
        if not isinstance(term, BlankNode):
            return term
        local = self._from_server.get(term)
        if local is None:
            # First sighting: the server id becomes the local identity
            self._to_server[term] = term
            self._from_server[term] = term
            local = term
        return local

    # --- Serialization ---

    def serialize(self, value: Any) -> str:
        """N-Triples form of a value, blank nodes mapped to server ids."""
        return self.map_to_server(to_term(value)).n3()

    def serialize_prolog(self, value: Any) -> str:
        """Prolog form of an RDF value: the N-Triples form prefixed with '!'."""
        return f"!{self.serialize(value)}"

    # --- Queries ---

    def build_query(self) -> Query:
        """Create an empty query bound to this repository."""
        return Query(self)

    def query(self, query: Query) -> Iterator[Solution]:
        """
        Run a query as Prolog and return its solutions.

        The query is compiled and sent immediately; the returned iterator
        decodes rows as it goes and can be consumed once.

        Raises:
            UnsupportedPatternError: If the query can't be compiled
            UnexpectedStatusError: If the server rejects the query
        """
        text = query.to_prolog(self)
        logger.debug("Prolog query on %s:\n%s", self._url, text)
        payload = self._executor.request_json(
            "post",
            self.path(),
            data={"query": text, "queryLn": "prolog"},
        )
        return parse_solutions(payload or {}, self)

    # --- Statements ---

    def _statement_params(self, subject, predicate, object, context) -> dict:
        params = {}
        for key, value in (
            ("subj", subject),
            ("pred", predicate),
            ("obj", object),
            ("context", context),
        ):
            if value is not None:
                params[key] = self.serialize(value)
        return params

    def size(self) -> int:
        """Number of statements in the store."""
        response = self._executor.request("get", self.path("size"))
        return int(response.text.strip())

    def statements(
        self,
        subject: Any = None,
        predicate: Any = None,
        object: Any = None,
        context: Any = None,
        limit: Optional[int] = None,
    ) -> list[Pattern]:
        """
        Fetch statements matching the given terms; None matches anything.

        Returns:
            Statements as Patterns; context is set for quads
        """
        params = self._statement_params(subject, predicate, object, context)
        if limit is not None:
            params["limit"] = limit
        rows = self._executor.request_json("get", self.path("statements"), params=params)
        result = []
        for row in rows or []:
            terms = [self.map_from_server(parse_term(cell)) for cell in row if cell]
            result.append(Pattern.from_triple(terms))
        return result

    def has_statement(
        self,
        subject: Any,
        predicate: Any,
        object: Any,
        context: Any = None,
    ) -> bool:
        return bool(self.statements(subject, predicate, object, context, limit=1))

    def add_statements(self, statements: Iterable) -> None:
        """
        Insert statements.

        Args:
            statements: Patterns or (s, p, o) / (s, p, o, c) sequences of
                terms or Python values
        """
        rows = []
        for statement in statements:
            pattern = Pattern.from_triple(statement)
            row = [
                self.serialize(pattern.subject),
                self.serialize(pattern.predicate),
                self.serialize(pattern.object),
            ]
            if pattern.context is not None:
                row.append(self.serialize(pattern.context))
            rows.append(row)
        if not rows:
            return
        self._executor.request(
            "post", self.path("statements"), json=rows, expected_status=204
        )

    def delete_statements(
        self,
        subject: Any = None,
        predicate: Any = None,
        object: Any = None,
        context: Any = None,
    ) -> int:
        """Delete matching statements and return how many were removed."""
        params = self._statement_params(subject, predicate, object, context)
        response = self._executor.request("delete", self.path("statements"), params=params)
        text = response.text.strip()
        return int(text) if text else 0

    def clear(self) -> int:
        """Delete every statement."""
        return self.delete_statements()


class Repository(AbstractRepository):
    """
    A stateless connection to one repository.

    Sessions created from it share its request executor; closing the
    repository closes the executor if the repository created it.
    """

    def __init__(self, url: str, executor: Optional[RequestExecutor] = None):
        self._owns_executor = executor is None
        super().__init__(executor or RequestExecutor(), url)

    @classmethod
    def from_config(
        cls,
        config: ServerConfig,
        transport=None,
    ) -> "Repository":
        """Create a repository and its executor from a ServerConfig."""
        executor = RequestExecutor(
            auth=config.auth,
            timeout=config.timeout,
            transport=transport,
        )
        repo = cls(config.repository_url, executor)
        repo._owns_executor = True
        return repo

    def session(self, auto_commit: bool = False, lifetime: Optional[int] = None) -> "Session":
        """
        Open a dedicated server session.

        Args:
            auto_commit: Commit after every change instead of on commit()
            lifetime: Seconds of inactivity before the server drops the session
        """
        from agql.client.session import Session

        return Session.create(self, auto_commit=auto_commit, lifetime=lifetime)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.close()

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
