"""
HubSpot data models
"""

from hubspot_connector.models.common import HubSpotModel
from hubspot_connector.models.contact import (
    Contact, ContactDeleted, ContactList, ContactProperties,
    ContactPropertiesLifecycleStage, ContactPropertiesNumberOfEmployees,
    ContactQuery, ContactStatistics,
)
from hubspot_connector.models.contact_property import (
    CustomContactProperty, CustomContactPropertyFieldType,
    CustomContactPropertyGroup, CustomContactPropertyOption,
    CustomContactPropertyType,
)
from hubspot_connector.models.email import EmailSubscription, EmailSubscriptionDefinitions
from hubspot_connector.models.lists import (
    HubSpotList, HubSpotListAddContactToListResponse, HubSpotListFilter,
    HubSpotListFilters, HubSpotListLists, HubSpotListMetaData, HubSpotNewList,
)
from hubspot_connector.models.oauth import OAuthCredentials

__all__ = [
    'HubSpotModel', 'OAuthCredentials',
    'Contact', 'ContactDeleted', 'ContactList', 'ContactProperties',
    'ContactPropertiesLifecycleStage', 'ContactPropertiesNumberOfEmployees',
    'ContactQuery', 'ContactStatistics',
    'CustomContactProperty', 'CustomContactPropertyFieldType',
    'CustomContactPropertyGroup', 'CustomContactPropertyOption',
    'CustomContactPropertyType',
    'EmailSubscription', 'EmailSubscriptionDefinitions',
    'HubSpotList', 'HubSpotListAddContactToListResponse', 'HubSpotListFilter',
    'HubSpotListFilters', 'HubSpotListLists', 'HubSpotListMetaData', 'HubSpotNewList',
]
