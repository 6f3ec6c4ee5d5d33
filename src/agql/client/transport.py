"""
AGQL Transport - Blocking HTTP request executor on httpx.

Every call is a single request/response round trip. The caller states the
status code it expects; anything else raises UnexpectedStatusError. Nothing
is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from agql.exceptions import TransportError, UnexpectedStatusError

logger = logging.getLogger(__name__)

JSON_ACCEPT = {"Accept": "application/json"}


def default_timeout(seconds: float = 60.0) -> httpx.Timeout:
    return httpx.Timeout(seconds, connect=10.0)


class RequestExecutor:
    """Issues requests against the triple-store server.

    One executor is shared by a repository and every session created from
    it; close it once when done.
    """

    def __init__(
        self,
        base_url: str = "",
        auth: Optional[tuple[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            auth=auth,
            timeout=default_timeout(timeout) if timeout else default_timeout(),
            transport=transport,
        )

    @property
    def client(self) -> httpx.Client:
        return self._client

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        content: Optional[str | bytes] = None,
        headers: Optional[dict] = None,
        expected_status: int = 200,
    ) -> httpx.Response:
        """
        Send one request and check its status.

        Args:
            method: HTTP method
            path: Absolute URL, or a path relative to base_url
            params: Query parameters; list values are sent as repeated keys
            json: Body to send as JSON
            data: Body to send form-encoded
            content: Raw body
            headers: Extra request headers
            expected_status: The only status treated as success

        Raises:
            UnexpectedStatusError: If the response status differs
            TransportError: If no response was received
        """
        method = method.upper()
        try:
            response = self._client.request(
                method,
                path,
                params=params,
                json=json,
                data=data,
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}", method=method, url=path) from e

        logger.debug("%s %s -> %s", method, response.request.url, response.status_code)
        if response.status_code != expected_status:
            raise UnexpectedStatusError(
                method,
                str(response.request.url),
                expected_status,
                response.status_code,
                response.text,
            )
        return response

    def request_json(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        content: Optional[str | bytes] = None,
        headers: Optional[dict] = None,
        expected_status: int = 200,
    ) -> Any:
        """Like request(), but decode the JSON body. A 204 answer returns None."""
        merged = dict(JSON_ACCEPT)
        if headers:
            merged.update(headers)
        response = self.request(
            method,
            path,
            params=params,
            json=json,
            data=data,
            content=content,
            headers=merged,
            expected_status=expected_status,
        )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
