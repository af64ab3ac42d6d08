"""
HubSpot Connector Configuration
Settings come from environment variables (a .env file is loaded first).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE_URL = 'https://api.hubapi.com'
DEFAULT_AUTH_BASE_URL = 'https://app.hubspot.com'
DEFAULT_SCOPE = 'contacts-rw offline'
DEFAULT_REQUEST_TIMEOUT = 15.0


@dataclass
class HubSpotSettings:
    client_id: str = ''
    hub_id: str = ''
    scope: str = DEFAULT_SCOPE
    callback_url: str = ''
    api_base_url: str = DEFAULT_API_BASE_URL
    auth_base_url: str = DEFAULT_AUTH_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> 'HubSpotSettings':
        """Read settings at call time so env changes are always picked up."""
        timeout = os.getenv('HUBSPOT_REQUEST_TIMEOUT')
        try:
            request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError:
            raise ValueError(f"HUBSPOT_REQUEST_TIMEOUT must be a number, got '{timeout}'") from None

        return cls(
            client_id=os.getenv('HUBSPOT_CLIENT_ID', ''),
            hub_id=os.getenv('HUBSPOT_HUB_ID', ''),
            scope=os.getenv('HUBSPOT_SCOPE', DEFAULT_SCOPE),
            callback_url=os.getenv('HUBSPOT_CALLBACK_URL', ''),
            api_base_url=os.getenv('HUBSPOT_API_BASE_URL', DEFAULT_API_BASE_URL),
            auth_base_url=os.getenv('HUBSPOT_AUTH_BASE_URL', DEFAULT_AUTH_BASE_URL),
            request_timeout=request_timeout,
        )
