"""
AGQL Session - A persistent, stateful server session.

A session takes more server resources than a stateless repository, but
it gives access to transactions, Prolog relations beyond q- and SNA
generators.

Usage:
    with repo.session() as session:
        knows = session.generator(object_of=FOAF.knows)
        query = session.build_query()
        query.ego_group_member(alice, 2, knows, Variable("member"))
        members = query.solutions()
        session.commit()

Generator ids (id1, id2, ...) and blank node ids are only unique inside
one live Session object. Don't keep using a session in both processes
after fork().
"""

import logging
import threading
from typing import TYPE_CHECKING, Iterator, Optional

from agql.client.repository import AbstractRepository
from agql.client.sna import SnaGenerator
from agql.exceptions import SessionClosedError
from agql.query.query import Query
from agql.query.relation import PrologLiteral
from agql.query.solutions import Solution

if TYPE_CHECKING:
    from agql.client.repository import Repository

logger = logging.getLogger(__name__)


class Session(AbstractRepository):
    """
    A dedicated server session.

    States: open -> closed. A closed session can't be reopened, and every
    operation on it raises SessionClosedError without contacting the server.
    """

    def __init__(self, repository: "Repository", url: str):
        super().__init__(repository.executor, url)
        self._repository = repository
        self._last_unique_id = 0
        self._id_lock = threading.Lock()
        self._closed = False

    @classmethod
    def create(
        cls,
        repository: "Repository",
        auto_commit: bool = False,
        lifetime: Optional[int] = None,
    ) -> "Session":
        """Ask the server for a new session on the given repository."""
        params = {"autoCommit": "true" if auto_commit else "false"}
        if lifetime is not None:
            params["lifetime"] = lifetime
        response = repository.executor.request(
            "post", repository.path("session"), params=params
        )
        url = response.text.strip().strip('"')
        logger.info("Opened session %s on %s", url, repository.url)
        return cls(repository, url)

    @property
    def repository(self) -> "Repository":
        return self._repository

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise SessionClosedError(operation, self._url)

    def close(self) -> None:
        """
        Close the session and release its server resources.

        Outstanding changes are neither committed nor rolled back; what
        happens to them is up to the server. Call commit() or rollback()
        first if the outcome matters.
        """
        self._ensure_open("close")
        self._executor.request("post", self.path("session/close"), expected_status=204)
        self._closed = True
        logger.info("Closed session %s", self._url)

    def commit(self) -> None:
        """Commit the current changes to the main repository."""
        self._ensure_open("commit")
        self._executor.request("post", self.path("commit"), expected_status=204)

    def rollback(self) -> None:
        """Roll back the changes made since the last commit."""
        self._ensure_open("rollback")
        self._executor.request("post", self.path("rollback"), expected_status=204)

    def generator(self, options: Optional[dict] = None, **kwargs) -> PrologLiteral:
        """
        Define an SNA generator on the server.

        Options (each one predicate or a collection of predicates):
            object_of: Follow links from subject to object
            subject_of: Follow links from object to subject
            undirected: Follow links in both directions

        Returns:
            A PrologLiteral naming the generator, for use in queries such
            as Query.ego_group_member()

        Raises:
            UnrecognizedOptionError: For unknown options, before any request
            UnexpectedStatusError: If the server does not answer 204
        """
        self._ensure_open("define generator")
        merged = dict(options or {})
        merged.update(kwargs)
        generator_id = self._unique_id()
        generator = SnaGenerator.from_options(self, merged)
        self._executor.request(
            "put",
            self.path(f"snaGenerators/{generator_id}"),
            params=generator.to_params(),
            expected_status=204,
        )
        logger.info("Registered SNA generator %s on %s", generator_id, self._url)
        return PrologLiteral(generator_id)

    def path(self, relative: str = "") -> str:
        self._ensure_open(f"access {relative or 'session'}")
        return super().path(relative)

    def query(self, query: Query) -> Iterator[Solution]:
        self._ensure_open("run query")
        return super().query(query)

    def _unique_id(self) -> str:
        with self._id_lock:
            self._last_unique_id += 1
            return f"id{self._last_unique_id}"

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc) -> None:
        if not self._closed:
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Session({self._url!r}, {state})"
