"""
HubSpot Connector Package
HubSpot CRM (contacts, lists, custom properties, email subscriptions)
behind a pluggable connector interface
"""

from hubspot_connector.base import BaseConnector, ConnectionResult
from hubspot_connector.client import (
    HubSpotWebResourceMethods, WebResource, authenticate_response,
    transform_object_to_json, web_resource_call, web_resource_get,
)
from hubspot_connector.clients_manager import HubSpotClientsManager
from hubspot_connector.config import HubSpotSettings
from hubspot_connector.connector import HubSpotConnector
from hubspot_connector.credentials import (
    HubSpotCredentialsManager, InMemoryObjectStore, ObjectStore, SupabaseObjectStore,
)
from hubspot_connector.exceptions import (
    HubSpotAccessTokenExpiredError, HubSpotConfigurationError, HubSpotConnectorError,
    HubSpotInvalidScopeError, HubSpotJsonMappingError, HubSpotJsonParseError,
    HubSpotNoAccessTokenError, HubSpotOAuthError,
)
from hubspot_connector.hubspot_client import HubSpotClient

__all__ = [
    'BaseConnector', 'ConnectionResult',
    'HubSpotWebResourceMethods', 'WebResource', 'authenticate_response',
    'transform_object_to_json', 'web_resource_call', 'web_resource_get',
    'HubSpotClientsManager', 'HubSpotSettings', 'HubSpotConnector', 'HubSpotClient',
    'HubSpotCredentialsManager', 'InMemoryObjectStore', 'ObjectStore', 'SupabaseObjectStore',
    'HubSpotAccessTokenExpiredError', 'HubSpotConfigurationError', 'HubSpotConnectorError',
    'HubSpotInvalidScopeError', 'HubSpotJsonMappingError', 'HubSpotJsonParseError',
    'HubSpotNoAccessTokenError', 'HubSpotOAuthError',
]
