"""
HubSpot Connector Exceptions
Every failure the connector reports derives from HubSpotConnectorError
"""

from typing import Optional


class HubSpotConnectorError(Exception):
    """Generic connector failure (HTTP errors, JSON generation/mapping)."""

    def __init__(self, message: str = '', status_code: Optional[int] = None,
                 response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HubSpotConfigurationError(HubSpotConnectorError):
    """Empty or invalid input / connector configuration."""


class HubSpotOAuthError(HubSpotConnectorError):
    """The authorization server answered the redirect with an error."""


class HubSpotInvalidScopeError(HubSpotOAuthError):
    """The requested scope is not available to the HubSpot application."""


class HubSpotNoAccessTokenError(HubSpotConnectorError):
    """No access token is available, either in an authentication response
    or in the credential store for a user."""


class HubSpotAccessTokenExpiredError(HubSpotConnectorError):
    """HubSpot answered 401. The caller should re-authenticate or refresh."""

    def __init__(self, message: str = '', user_id: Optional[str] = None,
                 response_body: Optional[str] = None):
        super().__init__(message, status_code=401, response_body=response_body)
        self.user_id = user_id


class HubSpotJsonParseError(HubSpotConnectorError):
    """The response body is not valid JSON."""


class HubSpotJsonMappingError(HubSpotConnectorError):
    """Valid JSON that does not fit the expected model."""
