"""
Contact models
HubSpot returns contact properties as {"name": {"value": ...}} and expects
them as [{"property": name, "value": ...}] when creating or updating.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, model_serializer, model_validator

from hubspot_connector.models.common import HubSpotModel


class ContactPropertiesLifecycleStage(Enum):
    SUBSCRIBER = 'subscriber'
    LEAD = 'lead'
    MARKETING_QUALIFIED_LEAD = 'marketingqualifiedlead'
    SALES_QUALIFIED_LEAD = 'salesqualifiedlead'
    OPPORTUNITY = 'opportunity'
    CUSTOMER = 'customer'
    EVANGELIST = 'evangelist'
    OTHER = 'other'


class ContactPropertiesNumberOfEmployees(Enum):
    _1_5 = '1-5'
    _5_25 = '5-25'
    _25_50 = '25-50'
    _50_100 = '50-100'
    _100_500 = '100-500'
    _500_1000 = '500-1000'
    _1000_PLUS = '1000+'


_ENUM_PROPERTIES = ('lifecyclestage', 'numemployees')


class ContactProperties(HubSpotModel):
    """Named contact properties plus any custom property by name."""
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    jobtitle: Optional[str] = None
    twitterhandle: Optional[str] = None
    message: Optional[str] = None
    closedate: Optional[str] = None
    lifecyclestage: Optional[ContactPropertiesLifecycleStage] = None
    numemployees: Optional[ContactPropertiesNumberOfEmployees] = None
    custom_properties: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def _named(cls) -> List[str]:
        return [name for name in cls.model_fields if name != 'custom_properties']

    @model_validator(mode='before')
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        """Accept either wire shape and split out the custom properties."""
        if isinstance(data, list):
            pairs = []
            for entry in data:
                if not isinstance(entry, dict) or 'property' not in entry:
                    raise ValueError(f'Invalid contact property entry: {entry!r}')
                pairs.append((entry['property'], entry.get('value')))
        elif isinstance(data, dict):
            data = dict(data)
            custom = data.pop('custom_properties', None) or data.pop('customProperties', None) or {}
            pairs = [
                (name, raw.get('value') if isinstance(raw, dict) else raw)
                for name, raw in data.items()
            ]
            pairs.extend(custom.items())
        else:
            return data

        named = set(cls._named())
        values: Dict[str, Any] = {}
        custom_values: Dict[str, str] = {}
        for name, value in pairs:
            if value is None or (name in _ENUM_PROPERTIES and value == ''):
                continue
            if name in named:
                values[name] = value
            else:
                custom_values[name] = str(value)
        values['custom_properties'] = custom_values
        return values

    @model_serializer
    def _to_wire(self) -> Dict[str, Any]:
        return {name: {'value': value} for name, value in self.items()}

    def items(self):
        """Yield (property name, wire value) for every property that is set."""
        for name in self._named():
            value = getattr(self, name)
            if value is None:
                continue
            yield name, value.value if isinstance(value, Enum) else value
        for name, value in self.custom_properties.items():
            if value is not None:
                yield name, value

    def to_property_list(self) -> List[Dict[str, str]]:
        """Request shape used by create/update contact."""
        return [{'property': name, 'value': value} for name, value in self.items()]


class Contact(HubSpotModel):
    vid: Optional[str] = None
    canonical_vid: Optional[str] = Field(None, alias='canonical-vid')
    portal_id: Optional[str] = Field(None, alias='portal-id')
    is_contact: Optional[bool] = Field(None, alias='is-contact')
    profile_token: Optional[str] = Field(None, alias='profile-token')
    profile_url: Optional[str] = Field(None, alias='profile-url')
    properties: Optional[ContactProperties] = None


class ContactDeleted(HubSpotModel):
    vid: Optional[str] = None
    deleted: Optional[bool] = None
    reason: Optional[str] = None


class ContactList(HubSpotModel):
    """A page of contacts with the offsets needed to fetch the next one."""
    contacts: Optional[List[Contact]] = None
    has_more: Optional[bool] = Field(None, alias='has-more')
    vid_offset: Optional[int] = Field(None, alias='vid-offset')
    time_offset: Optional[int] = Field(None, alias='time-offset')


class ContactQuery(HubSpotModel):
    query: Optional[str] = None
    offset: Optional[int] = None
    has_more: Optional[bool] = Field(None, alias='has-more')
    total: Optional[int] = None
    contacts: Optional[List[Contact]] = None


class ContactStatistics(HubSpotModel):
    contacts: Optional[int] = None
    last_new_contact_at: Optional[int] = None
