"""
Base Connector - Abstract interface the host application programs against
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class ConnectionResult:
    """Outcome of a connection test, for host screens that must not raise."""
    success: bool
    message: str = ''
    data: Optional[dict] = None


class BaseConnector(ABC):
    """Abstract base class for OAuth connectors.

    The host drives the lifecycle: initialize() once, authenticate() to get
    the URL the user must visit, then authenticate_response() with whatever
    the authorization server redirected back.
    """

    PROVIDER = 'base'  # Override in subclass

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def authenticate(self, user_id: str) -> str:
        """Return the authorization URL for user_id."""
        pass

    @abstractmethod
    def authenticate_response(self, input_request: str, expected_user_id: Optional[str] = None) -> str:
        """Store the credentials carried by the redirect and return the user id."""
        pass

    @abstractmethod
    def has_user_access_token(self, user_id: str) -> bool:
        pass

    def test_connection(self, user_id: str) -> ConnectionResult:
        """Make a lightweight authenticated call. Optional, override if supported."""
        return ConnectionResult(success=False, message=f'{self.PROVIDER} does not support connection tests')
