"""
Tests for AGQL configuration.
"""

import pytest

from agql.config import DEFAULT_URL, ServerConfig


class TestServerConfig:
    """Tests for ServerConfig."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Remove AGQL settings from the environment."""
        for name in ("AGQL_URL", "AGQL_CATALOG", "AGQL_REPOSITORY",
                     "AGQL_USER", "AGQL_PASSWORD", "AGQL_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Test defaults apply with an empty environment."""
        config = ServerConfig.from_env()

        assert config.url == DEFAULT_URL
        assert config.repository is None
        assert config.auth is None
        assert config.timeout == 60.0

    def test_environment(self, monkeypatch):
        """Test values are read from AGQL_* variables."""
        monkeypatch.setenv("AGQL_URL", "http://db:10035")
        monkeypatch.setenv("AGQL_REPOSITORY", "people")
        monkeypatch.setenv("AGQL_USER", "test")
        monkeypatch.setenv("AGQL_PASSWORD", "xyzzy")
        monkeypatch.setenv("AGQL_TIMEOUT", "5")

        config = ServerConfig.from_env()

        assert config.repository_url == "http://db:10035/repositories/people"
        assert config.auth == ("test", "xyzzy")
        assert config.timeout == 5.0

    def test_explicit_overrides_environment(self, monkeypatch):
        """Test explicit arguments win over the environment."""
        monkeypatch.setenv("AGQL_REPOSITORY", "people")

        config = ServerConfig.from_env(repository="places")

        assert config.repository == "places"

    def test_catalog_url(self):
        """Test catalogs appear in the repository URL."""
        config = ServerConfig(url="http://db:10035/", catalog="scratch", repository="people")

        assert config.repository_url == "http://db:10035/catalogs/scratch/repositories/people"

    def test_missing_repository(self):
        """Test a repository name is required for its URL."""
        with pytest.raises(ValueError):
            ServerConfig().repository_url

    def test_bad_timeout(self, monkeypatch):
        """Test a non-numeric timeout is rejected."""
        monkeypatch.setenv("AGQL_TIMEOUT", "soon")

        with pytest.raises(ValueError):
            ServerConfig.from_env()
