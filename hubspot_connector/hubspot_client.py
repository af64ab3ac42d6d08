"""
HubSpot REST Client
One instance per user session. Every call takes the user's current
OAuthCredentials and sends the access token as a query parameter.
"""

import logging
from typing import List, Optional
from urllib.parse import quote, urlencode

import requests

from hubspot_connector.client import (
    REQUEST_TIMEOUT,
    HubSpotWebResourceMethods as Method,
    WebResource,
    transform_object_to_json,
    web_resource_get,
)
from hubspot_connector.config import DEFAULT_API_BASE_URL
from hubspot_connector.exceptions import HubSpotConfigurationError, HubSpotNoAccessTokenError
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


def _require(value, name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise HubSpotConfigurationError(f'The parameter {name} can not be empty')


class HubSpotClient:

    # ======================================================
    # API PATHS
    # ======================================================
    PATH_REFRESH = '/auth/v1/refresh'

    PATH_CONTACT = '/contacts/v1/contact'
    PATH_CONTACT_BY_ID = '/contacts/v1/contact/vid/{contact_id}'
    PATH_CONTACT_PROFILE_BY_ID = '/contacts/v1/contact/vid/{contact_id}/profile'
    PATH_CONTACT_BY_EMAIL = '/contacts/v1/contact/email/{email}/profile'
    PATH_CONTACT_BY_USER_TOKEN = '/contacts/v1/contact/utk/{token}/profile'
    PATH_ALL_CONTACTS = '/contacts/v1/lists/all/contacts/all'
    PATH_RECENT_CONTACTS = '/contacts/v1/lists/recently_updated/contacts/recent'
    PATH_CONTACT_SEARCH = '/contacts/v1/search/query'
    PATH_CONTACT_STATISTICS = '/contacts/v1/contacts/statistics'

    PATH_LISTS = '/contacts/v1/lists'
    PATH_LIST = '/contacts/v1/lists/{list_id}'
    PATH_DYNAMIC_LISTS = '/contacts/v1/lists/dynamic'
    PATH_LIST_CONTACTS = '/contacts/v1/lists/{list_id}/contacts/all'
    PATH_LIST_ADD = '/contacts/v1/lists/{list_id}/add'

    PATH_EMAIL_SUBSCRIPTIONS = '/email/public/v1/subscriptions'

    PATH_PROPERTIES = '/contacts/v1/properties'
    PATH_PROPERTY = '/contacts/v1/properties/{name}'
    PATH_GROUP = '/contacts/v1/groups/{name}'

    def __init__(self, api_base_url: str = '', client_id: str = '',
                 session: requests.Session = None, timeout: float = REQUEST_TIMEOUT):
        self.api_base_url = (api_base_url or DEFAULT_API_BASE_URL).rstrip('/')
        self.client_id = client_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str, **kwargs) -> str:
        quoted = {k: quote(str(v), safe='@') for k, v in kwargs.items()}
        return self.api_base_url + path.format(**quoted)

    def _resource(self, credentials: OAuthCredentials, path: str, **path_kwargs) -> WebResource:
        return WebResource(self.session, self._url(path, **path_kwargs), timeout=self.timeout) \
            .query_param('access_token', credentials.access_token)

    # ======================================================
    # OAUTH
    # ======================================================

    def refresh_token(self, credentials: OAuthCredentials) -> OAuthCredentials:
        """Exchange the refresh token for a new access token.

        The returned snapshot keeps the previous refresh token when HubSpot
        does not issue a new one.
        """
        if not credentials.refresh_token:
            raise HubSpotNoAccessTokenError(
                f'There is no refresh token stored for the userId {credentials.user_id}'
            )
        _require(self.client_id, 'clientId')

        body = urlencode({
            'refresh_token': credentials.refresh_token,
            'client_id': self.client_id,
            'grant_type': 'refresh_token',
        })
        resource = WebResource(self.session, self._url(self.PATH_REFRESH), timeout=self.timeout)
        data = web_resource_get(resource, credentials.user_id, Method.REFRESH, body, dict)
        if not data or not data.get('access_token'):
            raise HubSpotNoAccessTokenError(
                f'The refresh response for the userId {credentials.user_id} has no access token'
            )

        logger.info(f'Refreshed HubSpot access token for user {credentials.user_id}')
        expires_in = data.get('expires_in')
        return credentials.with_tokens(
            access_token=str(data['access_token']),
            refresh_token=data.get('refresh_token'),
            expires_at=str(expires_in) if expires_in is not None else None,
        )

    # ======================================================
    # CONTACTS
    # ======================================================

    def create_contact(self, credentials: OAuthCredentials, properties: ContactProperties) -> Contact:
        _require(properties, 'contactProperties')
        body = transform_object_to_json({'properties': properties.to_property_list()})
        return web_resource_get(self._resource(credentials, self.PATH_CONTACT),
                                credentials.user_id, Method.POST, body, Contact)

    def update_contact(self, credentials: OAuthCredentials, contact_id: str,
                       properties: ContactProperties) -> None:
        _require(contact_id, 'contactId')
        _require(properties, 'contactProperties')
        body = transform_object_to_json({'properties': properties.to_property_list()})
        resource = self._resource(credentials, self.PATH_CONTACT_PROFILE_BY_ID, contact_id=contact_id)
        return web_resource_get(resource, credentials.user_id, Method.POST, body)

    def delete_contact(self, credentials: OAuthCredentials, contact_id: str) -> ContactDeleted:
        _require(contact_id, 'contactId')
        resource = self._resource(credentials, self.PATH_CONTACT_BY_ID, contact_id=contact_id)
        return web_resource_get(resource, credentials.user_id, Method.DELETE, expected_type=ContactDeleted)

    def get_contact_by_id(self, credentials: OAuthCredentials, contact_id: str) -> Contact:
        _require(contact_id, 'contactId')
        resource = self._resource(credentials, self.PATH_CONTACT_PROFILE_BY_ID, contact_id=contact_id)
        return web_resource_get(resource, credentials.user_id, expected_type=Contact)

    def get_contact_by_email(self, credentials: OAuthCredentials, email: str) -> Contact:
        _require(email, 'contactEmail')
        resource = self._resource(credentials, self.PATH_CONTACT_BY_EMAIL, email=email)
        return web_resource_get(resource, credentials.user_id, expected_type=Contact)

    def get_contact_by_user_token(self, credentials: OAuthCredentials, user_token: str) -> Contact:
        _require(user_token, 'contactUserToken')
        resource = self._resource(credentials, self.PATH_CONTACT_BY_USER_TOKEN, token=user_token)
        return web_resource_get(resource, credentials.user_id, expected_type=Contact)

    def get_all_contacts(self, credentials: OAuthCredentials, count: Optional[str] = None,
                         contact_offset: Optional[str] = None) -> ContactList:
        resource = self._resource(credentials, self.PATH_ALL_CONTACTS) \
            .query_param('count', count) \
            .query_param('vidOffset', contact_offset)
        return web_resource_get(resource, credentials.user_id, expected_type=ContactList)

    def get_recent_contacts(self, credentials: OAuthCredentials, count: Optional[str] = None,
                            time_offset: Optional[str] = None,
                            contact_offset: Optional[str] = None) -> ContactList:
        resource = self._resource(credentials, self.PATH_RECENT_CONTACTS) \
            .query_param('count', count) \
            .query_param('timeOffset', time_offset) \
            .query_param('vidOffset', contact_offset)
        return web_resource_get(resource, credentials.user_id, expected_type=ContactList)

    def get_contacts_by_query(self, credentials: OAuthCredentials, query: str,
                              count: Optional[str] = None) -> ContactQuery:
        _require(query, 'q')
        resource = self._resource(credentials, self.PATH_CONTACT_SEARCH) \
            .query_param('q', query) \
            .query_param('count', count)
        return web_resource_get(resource, credentials.user_id, expected_type=ContactQuery)

    def get_contact_statistics(self, credentials: OAuthCredentials) -> ContactStatistics:
        resource = self._resource(credentials, self.PATH_CONTACT_STATISTICS)
        return web_resource_get(resource, credentials.user_id, expected_type=ContactStatistics)

    # ======================================================
    # LISTS
    # ======================================================

    def get_contacts_lists(self, credentials: OAuthCredentials, count: Optional[str] = None,
                           offset: Optional[str] = None) -> HubSpotListLists:
        resource = self._resource(credentials, self.PATH_LISTS) \
            .query_param('count', count) \
            .query_param('offset', offset)
        return web_resource_get(resource, credentials.user_id, expected_type=HubSpotListLists)

    def get_contact_list_by_id(self, credentials: OAuthCredentials, list_id: str) -> HubSpotList:
        _require(list_id, 'listId')
        resource = self._resource(credentials, self.PATH_LIST, list_id=list_id)
        return web_resource_get(resource, credentials.user_id, expected_type=HubSpotList)

    def get_dynamic_contact_lists(self, credentials: OAuthCredentials, count: Optional[str] = None,
                                  offset: Optional[str] = None) -> HubSpotListLists:
        resource = self._resource(credentials, self.PATH_DYNAMIC_LISTS) \
            .query_param('count', count) \
            .query_param('offset', offset)
        return web_resource_get(resource, credentials.user_id, expected_type=HubSpotListLists)

    def get_contacts_in_a_list(self, credentials: OAuthCredentials, list_id: str,
                               count: Optional[str] = None, property: Optional[str] = None,
                               contact_offset: Optional[str] = None) -> ContactList:
        _require(list_id, 'listId')
        resource = self._resource(credentials, self.PATH_LIST_CONTACTS, list_id=list_id) \
            .query_param('count', count) \
            .query_param('property', property) \
            .query_param('vidOffset', contact_offset)
        return web_resource_get(resource, credentials.user_id, expected_type=ContactList)

    def add_existing_contact_in_a_list(self, credentials: OAuthCredentials, list_id: str,
                                       contact_id: str) -> HubSpotListAddContactToListResponse:
        _require(list_id, 'listId')
        _require(contact_id, 'contactId')
        try:
            vid = int(contact_id)
        except (TypeError, ValueError):
            raise HubSpotConfigurationError(f'The contactId must be numeric, got {contact_id!r}') from None

        body = transform_object_to_json({'vids': [vid]})
        resource = self._resource(credentials, self.PATH_LIST_ADD, list_id=list_id)
        return web_resource_get(resource, credentials.user_id, Method.POST, body,
                                HubSpotListAddContactToListResponse)

    def create_contact_list(self, credentials: OAuthCredentials, new_list: HubSpotNewList,
                            filters: Optional[List[HubSpotListFilters]] = None) -> HubSpotList:
        _require(new_list, 'list')
        _require(new_list.name, 'list.name')
        if filters is not None:
            new_list = new_list.model_copy(update={'filters': filters})
        body = transform_object_to_json(new_list)
        return web_resource_get(self._resource(credentials, self.PATH_LISTS),
                                credentials.user_id, Method.POST, body, HubSpotList)

    # ======================================================
    # EMAIL
    # ======================================================

    def get_email_subscriptions(self, credentials: OAuthCredentials, hub_id: str) -> EmailSubscription:
        _require(hub_id, 'hubId')
        resource = self._resource(credentials, self.PATH_EMAIL_SUBSCRIPTIONS) \
            .query_param('portalId', hub_id)
        return web_resource_get(resource, credentials.user_id, expected_type=EmailSubscription)

    # ======================================================
    # CUSTOM PROPERTIES
    # ======================================================

    def get_all_custom_properties(self, credentials: OAuthCredentials) -> List[CustomContactProperty]:
        resource = self._resource(credentials, self.PATH_PROPERTIES)
        return web_resource_get(resource, credentials.user_id,
                                expected_type=List[CustomContactProperty])

    def create_custom_property(self, credentials: OAuthCredentials,
                               prop: CustomContactProperty) -> CustomContactProperty:
        _require(prop, 'property')
        _require(prop.name, 'property.name')
        resource = self._resource(credentials, self.PATH_PROPERTY, name=prop.name)
        return web_resource_get(resource, credentials.user_id, Method.PUT,
                                transform_object_to_json(prop), CustomContactProperty)

    def update_custom_property(self, credentials: OAuthCredentials, name: str,
                               prop: CustomContactProperty) -> CustomContactProperty:
        _require(name, 'propertyName')
        _require(prop, 'property')
        resource = self._resource(credentials, self.PATH_PROPERTY, name=name)
        return web_resource_get(resource, credentials.user_id, Method.POST,
                                transform_object_to_json(prop), CustomContactProperty)

    def delete_custom_property(self, credentials: OAuthCredentials, name: str) -> None:
        _require(name, 'propertyName')
        resource = self._resource(credentials, self.PATH_PROPERTY, name=name)
        web_resource_get(resource, credentials.user_id, Method.DELETE)

    def get_custom_property_group(self, credentials: OAuthCredentials,
                                  name: str) -> CustomContactPropertyGroup:
        _require(name, 'groupName')
        resource = self._resource(credentials, self.PATH_GROUP, name=name)
        return web_resource_get(resource, credentials.user_id,
                                expected_type=CustomContactPropertyGroup)

    def create_custom_property_group(self, credentials: OAuthCredentials,
                                     group: CustomContactPropertyGroup) -> CustomContactPropertyGroup:
        _require(group, 'group')
        _require(group.name, 'group.name')
        resource = self._resource(credentials, self.PATH_GROUP, name=group.name)
        return web_resource_get(resource, credentials.user_id, Method.PUT,
                                transform_object_to_json(group), CustomContactPropertyGroup)

    def update_custom_property_group(self, credentials: OAuthCredentials, name: str,
                                     group: CustomContactPropertyGroup) -> CustomContactPropertyGroup:
        _require(name, 'groupName')
        _require(group, 'group')
        resource = self._resource(credentials, self.PATH_GROUP, name=name)
        return web_resource_get(resource, credentials.user_id, Method.POST,
                                transform_object_to_json(group), CustomContactPropertyGroup)

    def delete_custom_property_group(self, credentials: OAuthCredentials, name: str) -> None:
        _require(name, 'groupName')
        resource = self._resource(credentials, self.PATH_GROUP, name=name)
        web_resource_get(resource, credentials.user_id, Method.DELETE)
