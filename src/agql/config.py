"""
AGQL Configuration.

Server connection settings. Every field can be given explicitly; anything
left out falls back to an environment variable, then to a default:

    AGQL_URL          server root (default http://localhost:10035)
    AGQL_CATALOG      catalog name (default: root catalog)
    AGQL_REPOSITORY   repository name
    AGQL_USER         user name for HTTP basic auth
    AGQL_PASSWORD     password for HTTP basic auth
    AGQL_TIMEOUT      request timeout in seconds (default 60)
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

DEFAULT_URL = "http://localhost:10035"
DEFAULT_TIMEOUT = 60.0


@dataclass
class ServerConfig:
    """Where and how to reach an AllegroGraph-compatible server."""
    url: str = DEFAULT_URL
    repository: Optional[str] = None
    catalog: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(
        cls,
        url: Optional[str] = None,
        repository: Optional[str] = None,
        catalog: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ServerConfig":
        """
        Build a config from explicit values, then environment, then defaults.

        Raises:
            ValueError: If AGQL_TIMEOUT is not a number
        """
        if timeout is None:
            timeout = float(os.environ.get("AGQL_TIMEOUT", DEFAULT_TIMEOUT))
        return cls(
            url=url or os.environ.get("AGQL_URL", DEFAULT_URL),
            repository=repository or os.environ.get("AGQL_REPOSITORY"),
            catalog=catalog or os.environ.get("AGQL_CATALOG"),
            user=user or os.environ.get("AGQL_USER"),
            password=password or os.environ.get("AGQL_PASSWORD"),
            timeout=timeout,
        )

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        """Basic auth credentials, or None when no user is configured."""
        if not self.user:
            return None
        return (self.user, self.password or "")

    @property
    def repository_url(self) -> str:
        """
        Full URL of the configured repository.

        Raises:
            ValueError: If no repository name is configured
        """
        if not self.repository:
            raise ValueError("No repository configured (set AGQL_REPOSITORY)")
        base = self.url.rstrip("/")
        name = quote(self.repository, safe="")
        if self.catalog:
            return f"{base}/catalogs/{quote(self.catalog, safe='')}/repositories/{name}"
        return f"{base}/repositories/{name}"
