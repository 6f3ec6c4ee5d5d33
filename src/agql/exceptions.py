# -*- encoding: utf-8 -*-
"""
AGQL Exceptions.

Custom exceptions for query translation, session management and
server communication.
"""

from typing import Any, Optional


class AGQLError(Exception):
    """Base exception for all AGQL errors."""
    pass


class QueryTranslationError(AGQLError):
    """Raised when a query cannot be translated to Prolog notation."""
    pass


class UnsupportedPatternError(QueryTranslationError):
    """
    Raised when a triple pattern has no Prolog relation equivalent.

    Optional patterns and patterns scoped to a named graph cannot be
    expressed with the plain ``q-`` relation, so they are rejected instead
    of being compiled into a lossy query.

    Attributes:
        pattern: The offending pattern
        reason: Short description of the unsupported feature
    """

    def __init__(self, pattern: Any, reason: str):
        super().__init__(f"Can't translate {pattern} to Prolog relation: {reason}")
        self.pattern = pattern
        self.reason = reason

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "UnsupportedPatternError",
            "message": str(self),
            "pattern": str(self.pattern),
            "reason": self.reason,
        }


class UnsupportedValueError(QueryTranslationError, TypeError):
    """Raised when a Python value cannot be converted to a graph value."""

    def __init__(self, value: Any):
        super().__init__(
            f"Can't convert {value!r} ({type(value).__name__}) to an RDF value"
        )
        self.value = value


class UnrecognizedOptionError(AGQLError, ValueError):
    """
    Raised when a configuration mapping contains unknown keys.

    Attributes:
        unknown: Sorted list of the unrecognized keys
        allowed: Sorted list of the keys that would have been accepted
    """

    def __init__(self, unknown: list[str], allowed: list[str]):
        super().__init__(
            f"Unrecognized option(s) {', '.join(unknown)}; "
            f"expected one of {', '.join(allowed)}"
        )
        self.unknown = unknown
        self.allowed = allowed

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "UnrecognizedOptionError",
            "message": str(self),
            "unknown": list(self.unknown),
            "allowed": list(self.allowed),
        }


class ServerError(AGQLError):
    """Raised when communication with the triple-store server fails."""
    pass


class UnexpectedStatusError(ServerError):
    """
    Raised when the server answers with a status other than the expected one.

    The request is never retried.

    Attributes:
        method: HTTP method of the failed request
        url: Full URL of the failed request
        expected_status: Status code the caller asserted
        status_code: Status code the server returned
        body: Response body text (may be empty)
    """

    def __init__(
        self,
        method: str,
        url: str,
        expected_status: int,
        status_code: int,
        body: str = "",
    ):
        message = (
            f"{method} {url} returned {status_code}, expected {expected_status}"
        )
        if body:
            message = f"{message}: {body.strip()}"
        super().__init__(message)
        self.method = method
        self.url = url
        self.expected_status = expected_status
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "UnexpectedStatusError",
            "message": str(self),
            "method": self.method,
            "url": self.url,
            "expected_status": self.expected_status,
            "status_code": self.status_code,
            "body": self.body,
        }


class TransportError(ServerError):
    """Raised when a request fails before any response is received."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url


class SessionClosedError(AGQLError):
    """Raised when an operation is attempted on a session that was closed."""

    def __init__(self, operation: str, url: Optional[str] = None):
        where = f" ({url})" if url else ""
        super().__init__(f"Cannot {operation}: session{where} is closed")
        self.operation = operation
        self.url = url


class TermParseError(AGQLError, ValueError):
    """Raised when an N-Triples term returned by the server cannot be parsed."""

    def __init__(self, text: str, detail: str = ""):
        message = f"Can't parse RDF term {text!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.text = text
        self.detail = detail
