"""
OAuth credential snapshot for one HubSpot user
"""

from typing import Optional

from pydantic import ConfigDict

from hubspot_connector.models.common import HubSpotModel


class OAuthCredentials(HubSpotModel):
    """Tokens obtained from an authorization redirect or a refresh call.

    Instances are never mutated; a refresh produces a new snapshot
    (see ``with_tokens``) that replaces the stored one.
    """

    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[str] = None

    def with_tokens(self, access_token: str, refresh_token: Optional[str] = None,
                    expires_at: Optional[str] = None) -> 'OAuthCredentials':
        return self.model_copy(update={
            'access_token': access_token,
            'refresh_token': refresh_token or self.refresh_token,
            'expires_at': expires_at,
        })
