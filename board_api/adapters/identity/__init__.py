"""Identity adapters - clients for the external session provider."""

from board_api.adapters.identity.base import AbstractSessionProvider, SessionUser
from board_api.adapters.identity.factory import create_session_provider
from board_api.adapters.identity.http_provider import HttpSessionProvider
from board_api.adapters.identity.in_memory import InMemorySessionProvider

__all__ = [
    "AbstractSessionProvider",
    "HttpSessionProvider",
    "InMemorySessionProvider",
    "SessionUser",
    "create_session_provider",
]
