"""
Shared fixtures for AGQL tests.

FakeServer stands in for the triple-store HTTP API through
httpx.MockTransport, so no network is needed.
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from agql.client.repository import Repository
from agql.client.transport import RequestExecutor
from agql.terms.model import to_term


REPO_URL = "http://agraph.test/repositories/people"
SESSION_URL = "http://agraph.test:55555/sessions/abc"


class FakeServer:
    """
    Answers requests from a route table and records every request.

    Routes map (METHOD, path) to (status, body). A body that is a dict or
    list is sent as JSON, a string as text. A list of answers is consumed
    one per request.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status: int = 200, body=None):
        self.routes[(method.upper(), path)] = (status, body)

    def route_sequence(self, method: str, path: str, answers: list):
        self.routes[(method.upper(), path)] = list(answers)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(404, text="no route")
        if isinstance(answer, list):
            answer = answer.pop(0)
        status, body = answer
        if body is None:
            return httpx.Response(status)
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]


def form(request: httpx.Request) -> dict:
    """Decode a form-encoded request body."""
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def body_json(request: httpx.Request):
    return json.loads(request.content.decode())


@pytest.fixture
def server():
    """Create an empty fake server."""
    return FakeServer()


@pytest.fixture
def executor(server):
    """Create a request executor wired to the fake server."""
    ex = RequestExecutor(transport=server.transport)
    yield ex
    ex.close()


@pytest.fixture
def repository(executor):
    """Create a stateless repository on the fake server."""
    return Repository(REPO_URL, executor)


def plain_serialize_prolog(value):
    """Prolog serialization without blank node mapping."""
    return f"!{to_term(value).n3()}"
