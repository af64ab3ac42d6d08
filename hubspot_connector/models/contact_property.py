"""
Custom contact property and property group models

HubSpot adds property and field types over time, so ``type`` and
``field_type`` fall back to the raw string for values not listed here.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import Field

from hubspot_connector.models.common import HubSpotModel


class CustomContactPropertyType(Enum):
    STRING = 'string'
    NUMBER = 'number'
    BOOL = 'bool'
    DATE = 'date'
    DATETIME = 'datetime'
    ENUMERATION = 'enumeration'
    PHONE_NUMBER = 'phone_number'


class CustomContactPropertyFieldType(Enum):
    TEXTAREA = 'textarea'
    TEXT = 'text'
    DATE = 'date'
    FILE = 'file'
    NUMBER = 'number'
    SELECT = 'select'
    RADIO = 'radio'
    CHECKBOX = 'checkbox'
    BOOLEANCHECKBOX = 'booleancheckbox'
    PHONENUMBER = 'phonenumber'
    CALCULATION_EQUATION = 'calculation_equation'
    HTML = 'html'


class CustomContactPropertyOption(HubSpotModel):
    label: Optional[str] = None
    value: Optional[str] = None
    display_order: Optional[int] = None
    hidden: Optional[bool] = None


class CustomContactProperty(HubSpotModel):
    """Schema definition of a contact property.

    ``group_name`` refers to a CustomContactPropertyGroup by name.
    """
    name: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    group_name: Optional[str] = None
    type: Optional[Union[CustomContactPropertyType, str]] = Field(None, union_mode='left_to_right')
    field_type: Optional[Union[CustomContactPropertyFieldType, str]] = Field(
        None, union_mode='left_to_right')
    form_field: Optional[bool] = None
    display_order: Optional[int] = None
    options: Optional[List[CustomContactPropertyOption]] = None
    read_only_value: Optional[bool] = None
    calculated: Optional[bool] = None
    external_options: Optional[bool] = None
    deleted: Optional[bool] = None


class CustomContactPropertyGroup(HubSpotModel):
    name: Optional[str] = None
    display_name: Optional[str] = None
    display_order: Optional[int] = None
    portal_id: Optional[int] = None
    properties: Optional[List[CustomContactProperty]] = None
