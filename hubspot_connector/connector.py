"""
HubSpot Connector
Facade over HubSpotClient: looks up the user's stored credentials and the
user's cached client, then delegates. Nothing here retries or refreshes on
its own; an expired token surfaces as HubSpotAccessTokenExpiredError.
"""

import logging
from typing import Callable, List, Optional
from urllib.parse import unquote_plus, urlencode

import requests

from hubspot_connector.base import BaseConnector, ConnectionResult
from hubspot_connector.client import authenticate_response
from hubspot_connector.clients_manager import HubSpotClientsManager
from hubspot_connector.config import DEFAULT_SCOPE, HubSpotSettings
from hubspot_connector.credentials import HubSpotCredentialsManager, InMemoryObjectStore, ObjectStore
from hubspot_connector.exceptions import (
    HubSpotAccessTokenExpiredError,
    HubSpotConfigurationError,
    HubSpotConnectorError,
    HubSpotOAuthError,
)
from hubspot_connector.hubspot_client import HubSpotClient
from hubspot_connector.models import (
    Contact,
    ContactDeleted,
    ContactList,
    ContactProperties,
    ContactQuery,
    ContactStatistics,
    CustomContactProperty,
    CustomContactPropertyGroup,
    EmailSubscription,
    HubSpotList,
    HubSpotListAddContactToListResponse,
    HubSpotListFilters,
    HubSpotListLists,
    HubSpotNewList,
    OAuthCredentials,
)

logger = logging.getLogger(__name__)


class HubSpotConnector(BaseConnector):

    PROVIDER = 'hubspot'

    def __init__(self, client_id: str = '', hub_id: str = '', scope: str = DEFAULT_SCOPE,
                 callback_url: str = '', api_base_url: str = '', auth_base_url: str = '',
                 object_store: ObjectStore = None, clients_manager: HubSpotClientsManager = None,
                 request_timeout: float = None,
                 session_factory: Callable[[], requests.Session] = requests.Session):
        defaults = HubSpotSettings()
        self.client_id = client_id
        self.hub_id = hub_id
        self.scope = scope
        self.callback_url = callback_url
        self.api_base_url = api_base_url or defaults.api_base_url
        self.auth_base_url = (auth_base_url or defaults.auth_base_url).rstrip('/')
        self.request_timeout = request_timeout or defaults.request_timeout
        self.object_store = object_store
        self.clients_manager = clients_manager
        self.session_factory = session_factory
        self.credentials_manager: Optional[HubSpotCredentialsManager] = None

    @classmethod
    def from_env(cls, **kwargs) -> 'HubSpotConnector':
        """Build a connector from HUBSPOT_* environment variables.
        kwargs (object_store, clients_manager, ...) are passed through.
        """
        settings = HubSpotSettings.from_env()
        return cls(
            client_id=settings.client_id,
            hub_id=settings.hub_id,
            scope=settings.scope,
            callback_url=settings.callback_url,
            api_base_url=settings.api_base_url,
            auth_base_url=settings.auth_base_url,
            request_timeout=settings.request_timeout,
            **kwargs,
        )

    # ======================================================
    # Lifecycle
    # ======================================================

    def initialize(self) -> None:
        if self.object_store is None:
            self.object_store = InMemoryObjectStore()
        if self.clients_manager is None:
            self.clients_manager = HubSpotClientsManager()
        self.credentials_manager = HubSpotCredentialsManager(self.object_store)

    def _ensure_initialized(self) -> None:
        if self.credentials_manager is None or self.clients_manager is None:
            self.initialize()

    def _new_client(self) -> HubSpotClient:
        return HubSpotClient(
            api_base_url=self.api_base_url,
            client_id=self.client_id,
            session=self.session_factory(),
            timeout=self.request_timeout,
        )

    def _session(self, user_id: str):
        """Return (client, credentials) for user_id."""
        self._ensure_initialized()
        credentials = self.credentials_manager.get_credentials(user_id)
        client = self.clients_manager.get_client(user_id, self._new_client)
        return client, credentials

    # ======================================================
    # Authentication
    # ======================================================

    def authenticate(self, user_id: str) -> str:
        """Return the URL the user must visit to grant access.

        The user id travels in the callback URL so that the redirect can be
        matched back to the user in authenticate_response.
        """
        for name, value in (('clientId', self.client_id), ('hubId', self.hub_id),
                            ('callbackUrl', self.callback_url), ('userId', user_id)):
            if not value:
                raise HubSpotConfigurationError(f'The parameter {name} can not be empty')

        self._ensure_initialized()
        separator = '&' if '?' in self.callback_url else '?'
        redirect_uri = f'{self.callback_url}{separator}{urlencode({"userid": user_id})}'
        query = urlencode({
            'client_id': self.client_id,
            'portalId': self.hub_id,
            'redirect_uri': redirect_uri,
            'scope': self.scope,
        })
        logger.debug(f'Built HubSpot authorization URL for user {user_id}')
        return f'{self.auth_base_url}/auth/authenticate?{query}'

    def authenticate_response(self, input_request: str, expected_user_id: Optional[str] = None) -> str:
        """Store the credentials carried by the redirect and return the user id.

        The userid comes back URL-encoded, as authenticate() sent it. When
        expected_user_id is given the redirect must belong to that user;
        otherwise HubSpotOAuthError is raised and nothing is stored.
        """
        self._ensure_initialized()
        credentials = authenticate_response(input_request)
        if not credentials.user_id:
            raise HubSpotConfigurationError(
                'The authentication response does not carry a userid; the credentials cannot be stored'
            )

        user_id = unquote_plus(credentials.user_id)
        if expected_user_id is not None and user_id != str(expected_user_id):
            logger.warning(f'HubSpot authorization for user {user_id} received for user {expected_user_id}')
            raise HubSpotOAuthError('The authentication response belongs to a different user')

        self.credentials_manager.set_credentials(user_id, credentials.model_copy(update={'user_id': user_id}))
        return user_id

    def has_user_access_token(self, user_id: str) -> bool:
        self._ensure_initialized()
        return self.credentials_manager.has_credentials(user_id)

    def refresh_token(self, user_id: str) -> OAuthCredentials:
        """Replace the stored credentials with freshly refreshed ones."""
        client, credentials = self._session(user_id)
        refreshed = client.refresh_token(credentials)
        self.credentials_manager.set_credentials(user_id, refreshed)
        return refreshed

    def revoke_credentials(self, user_id: str) -> None:
        self._ensure_initialized()
        self.credentials_manager.remove_credentials(user_id)
        self.clients_manager.remove_client(user_id)

    def test_connection(self, user_id: str) -> ConnectionResult:
        """Fetch contact statistics to confirm the stored token works."""
        try:
            stats = self.get_contact_statistics(user_id)
            return ConnectionResult(
                success=True,
                message=f'Connected to HubSpot ({stats.contacts if stats else 0} contacts)',
                data=stats.to_dict() if stats else None,
            )
        except HubSpotAccessTokenExpiredError:
            return ConnectionResult(success=False, message='HubSpot access token has expired')
        except HubSpotConnectorError as e:
            return ConnectionResult(success=False, message=f'HubSpot connection failed: {e}')

    # ======================================================
    # Contacts
    # ======================================================

    def create_contact(self, user_id: str, properties: ContactProperties) -> Contact:
        client, creds = self._session(user_id)
        return client.create_contact(creds, properties)

    def update_contact(self, user_id: str, contact_id: str, properties: ContactProperties) -> None:
        client, creds = self._session(user_id)
        return client.update_contact(creds, contact_id, properties)

    def delete_contact(self, user_id: str, contact_id: str) -> ContactDeleted:
        client, creds = self._session(user_id)
        return client.delete_contact(creds, contact_id)

    def get_contact_by_id(self, user_id: str, contact_id: str) -> Contact:
        client, creds = self._session(user_id)
        return client.get_contact_by_id(creds, contact_id)

    def get_contact_by_email(self, user_id: str, email: str) -> Contact:
        client, creds = self._session(user_id)
        return client.get_contact_by_email(creds, email)

    def get_contact_by_user_token(self, user_id: str, user_token: str) -> Contact:
        client, creds = self._session(user_id)
        return client.get_contact_by_user_token(creds, user_token)

    def get_all_contacts(self, user_id: str, count: Optional[str] = None,
                         contact_offset: Optional[str] = None) -> ContactList:
        client, creds = self._session(user_id)
        return client.get_all_contacts(creds, count, contact_offset)

    def get_recent_contacts(self, user_id: str, count: Optional[str] = None,
                            time_offset: Optional[str] = None,
                            contact_offset: Optional[str] = None) -> ContactList:
        client, creds = self._session(user_id)
        return client.get_recent_contacts(creds, count, time_offset, contact_offset)

    def get_contacts_by_query(self, user_id: str, q: str, count: Optional[str] = None) -> ContactQuery:
        client, creds = self._session(user_id)
        return client.get_contacts_by_query(creds, q, count)

    def get_contact_statistics(self, user_id: str) -> ContactStatistics:
        client, creds = self._session(user_id)
        return client.get_contact_statistics(creds)

    # ======================================================
    # Lists
    # ======================================================

    def get_contacts_lists(self, user_id: str, count: Optional[str] = None,
                           offset: Optional[str] = None) -> HubSpotListLists:
        client, creds = self._session(user_id)
        return client.get_contacts_lists(creds, count, offset)

    def get_contact_list_by_id(self, user_id: str, list_id: str) -> HubSpotList:
        client, creds = self._session(user_id)
        return client.get_contact_list_by_id(creds, list_id)

    def get_dynamic_contact_lists(self, user_id: str, count: Optional[str] = None,
                                  offset: Optional[str] = None) -> HubSpotListLists:
        client, creds = self._session(user_id)
        return client.get_dynamic_contact_lists(creds, count, offset)

    def get_contacts_in_a_list(self, user_id: str, list_id: str, count: Optional[str] = None,
                               property: Optional[str] = None,
                               contact_offset: Optional[str] = None) -> ContactList:
        client, creds = self._session(user_id)
        return client.get_contacts_in_a_list(creds, list_id, count, property, contact_offset)

    def add_existing_contact_in_a_list(self, user_id: str, list_id: str,
                                       contact_id: str) -> HubSpotListAddContactToListResponse:
        client, creds = self._session(user_id)
        return client.add_existing_contact_in_a_list(creds, list_id, contact_id)

    def create_contact_list(self, user_id: str, new_list: HubSpotNewList,
                            filters: Optional[List[HubSpotListFilters]] = None) -> HubSpotList:
        client, creds = self._session(user_id)
        return client.create_contact_list(creds, new_list, filters)

    # ======================================================
    # Email subscriptions
    # ======================================================

    def get_email_subscriptions(self, user_id: str, hub_id: Optional[str] = None) -> EmailSubscription:
        """Subscription definitions for hub_id (defaults to the configured hub)."""
        client, creds = self._session(user_id)
        return client.get_email_subscriptions(creds, hub_id or self.hub_id)

    # ======================================================
    # Custom properties
    # ======================================================

    def get_all_custom_properties(self, user_id: str) -> List[CustomContactProperty]:
        client, creds = self._session(user_id)
        return client.get_all_custom_properties(creds)

    def create_custom_property(self, user_id: str, prop: CustomContactProperty) -> CustomContactProperty:
        client, creds = self._session(user_id)
        return client.create_custom_property(creds, prop)

    def update_custom_property(self, user_id: str, name: str,
                               prop: CustomContactProperty) -> CustomContactProperty:
        client, creds = self._session(user_id)
        return client.update_custom_property(creds, name, prop)

    def delete_custom_property(self, user_id: str, name: str) -> None:
        client, creds = self._session(user_id)
        client.delete_custom_property(creds, name)

    def get_custom_property_group(self, user_id: str, name: str) -> CustomContactPropertyGroup:
        client, creds = self._session(user_id)
        return client.get_custom_property_group(creds, name)

    def create_custom_property_group(self, user_id: str,
                                     group: CustomContactPropertyGroup) -> CustomContactPropertyGroup:
        client, creds = self._session(user_id)
        return client.create_custom_property_group(creds, group)

    def update_custom_property_group(self, user_id: str, name: str,
                                     group: CustomContactPropertyGroup) -> CustomContactPropertyGroup:
        client, creds = self._session(user_id)
        return client.update_custom_property_group(creds, name, group)

    def delete_custom_property_group(self, user_id: str, name: str) -> None:
        client, creds = self._session(user_id)
        client.delete_custom_property_group(creds, name)
