"""AGQL Client module - HTTP transport, repositories, sessions and SNA generators."""

from agql.client.repository import AbstractRepository, Repository
from agql.client.session import Session
from agql.client.sna import GENERATOR_OPTIONS, SnaGenerator
from agql.client.transport import RequestExecutor

__all__ = [
    "AbstractRepository",
    "Repository",
    "Session",
    "SnaGenerator",
    "GENERATOR_OPTIONS",
    "RequestExecutor",
]
