"""Tests for the HubSpot data models and their JSON mapping."""

import json
from typing import List

import pytest
from pydantic import TypeAdapter, ValidationError

from hubspot_connector.models import (
    Contact,
    ContactDeleted,
    ContactList,
    ContactProperties,
    ContactPropertiesLifecycleStage,
    ContactPropertiesNumberOfEmployees,
    CustomContactProperty,
    CustomContactPropertyFieldType,
    CustomContactPropertyGroup,
    CustomContactPropertyOption,
    CustomContactPropertyType,
    EmailSubscription,
    EmailSubscriptionDefinitions,
    HubSpotList,
    HubSpotListFilter,
    HubSpotListFilters,
    HubSpotListMetaData,
    HubSpotNewList,
    OAuthCredentials,
)

CONTACT_JSON = {
    'vid': 61574,
    'canonical-vid': 61574,
    'portal-id': 237093,
    'is-contact': True,
    'profile-url': 'https://app.hubspot.com/contacts/237093/lists/public/contact/_AO_T',
    'properties': {
        'firstname': {'value': 'theFirstName', 'versions': []},
        'lastname': {'value': 'theLastName'},
        'numemployees': {'value': '25-50'},
        'lifecyclestage': {'value': 'lead'},
        'city': {'value': 'beautifulCity'},
        'hs_analytics_source': {'value': 'OFFLINE'},
    },
    'identity-profiles': [{'vid': 61574}],
}


def test_contact_from_hubspot_json():
    contact = Contact.model_validate(CONTACT_JSON)

    assert contact.vid == '61574'
    assert contact.portal_id == '237093'
    assert contact.is_contact is True
    props = contact.properties
    assert props.firstname == 'theFirstName'
    assert props.lastname == 'theLastName'
    assert props.numemployees is ContactPropertiesNumberOfEmployees._25_50
    assert props.lifecyclestage is ContactPropertiesLifecycleStage.LEAD
    assert props.city == 'beautifulCity'
    assert props.custom_properties == {'hs_analytics_source': 'OFFLINE'}


def test_contact_properties_request_shape():
    props = ContactProperties(
        email='someone@example.com',
        lifecyclestage=ContactPropertiesLifecycleStage.CUSTOMER,
        custom_properties={'favorite_color': 'teal'},
    )

    assert props.to_property_list() == [
        {'property': 'email', 'value': 'someone@example.com'},
        {'property': 'lifecyclestage', 'value': 'customer'},
        {'property': 'favorite_color', 'value': 'teal'},
    ]


def test_contact_properties_accepts_request_shape():
    props = ContactProperties.model_validate([
        {'property': 'firstname', 'value': 'Ada'},
        {'property': 'numemployees', 'value': '1000+'},
        {'property': 'score', 'value': 7},
    ])

    assert props.firstname == 'Ada'
    assert props.numemployees is ContactPropertiesNumberOfEmployees._1000_PLUS
    assert props.custom_properties == {'score': '7'}


def test_empty_enum_property_is_left_unset():
    props = ContactProperties.model_validate({'lifecyclestage': {'value': ''}})
    assert props.lifecyclestage is None


def test_unknown_enum_value_is_rejected():
    with pytest.raises(ValidationError):
        ContactProperties.model_validate({'numemployees': {'value': 'lots'}})


def test_none_fields_are_omitted_and_wire_names_used():
    deleted = ContactDeleted(vid='10', deleted=True)
    assert deleted.to_dict() == {'vid': '10', 'deleted': True}

    page = ContactList(contacts=[], has_more=False, vid_offset=200)
    assert page.to_dict() == {'contacts': [], 'has-more': False, 'vid-offset': 200}


def test_list_filters_are_nested_arrays():
    new_list = HubSpotNewList(
        name='test list',
        dynamic=True,
        portal_id='237093',
        filters=[HubSpotListFilters(filters=[
            HubSpotListFilter(property='twitterhandle', operator='EQ', value='@hubspot', type='string'),
        ])],
    )

    assert json.loads(new_list.to_json()) == {
        'name': 'test list',
        'dynamic': True,
        'portalId': '237093',
        'filters': [[{'property': 'twitterhandle', 'operator': 'EQ',
                      'value': '@hubspot', 'type': 'string'}]],
    }


def test_custom_property_uses_enum_values():
    prop = CustomContactProperty(
        name='ccp_1', group_name='ccpg_1', label='Im the label', form_field=True,
        type=CustomContactPropertyType.STRING, field_type=CustomContactPropertyFieldType.TEXT,
    )

    assert prop.to_dict() == {
        'name': 'ccp_1', 'label': 'Im the label', 'groupName': 'ccpg_1',
        'type': 'string', 'fieldType': 'text', 'formField': True,
    }


def test_credentials_are_immutable_and_replaced_on_refresh():
    creds = OAuthCredentials(user_id='1', access_token='old', refresh_token='r', expires_at='10')

    with pytest.raises(ValidationError):
        creds.access_token = 'new'

    refreshed = creds.with_tokens('new', expires_at='20')
    assert refreshed == OAuthCredentials(user_id='1', access_token='new', refresh_token='r', expires_at='20')
    assert creds.access_token == 'old'


@pytest.mark.parametrize('model', [
    Contact.model_validate(CONTACT_JSON),
    ContactList(contacts=[Contact.model_validate(CONTACT_JSON)], has_more=True, vid_offset=5, time_offset=9),
    HubSpotList(
        list_id='1', portal_id='237093', name='dyn', dynamic=True, created_at=1, updated_at=2,
        meta_data=HubSpotListMetaData(size=3, processing='DONE'),
        filters=[HubSpotListFilters(filters=[HubSpotListFilter(property='city', operator='EQ', value='x')])],
    ),
    CustomContactPropertyGroup(
        name='g', display_name='Group', display_order=5,
        properties=[CustomContactProperty(
            name='p', type=CustomContactPropertyType.ENUMERATION,
            options=[CustomContactPropertyOption(label='A', value='a', display_order=0)],
        )],
    ),
    EmailSubscription(subscription_definitions=[
        EmailSubscriptionDefinitions(id=1, portal_id=237093, name='Newsletter', active=True),
    ]),
    OAuthCredentials(user_id='1', access_token='a', expires_at='600'),
])
def test_encode_then_decode_is_lossless(model):
    decoded = type(model).model_validate(json.loads(model.to_json()))
    assert decoded == model


def test_unknown_keys_are_ignored():
    group = CustomContactPropertyGroup.model_validate({'name': 'g', 'somethingNew': {'x': 1}})
    assert group == CustomContactPropertyGroup(name='g')


def test_newer_property_types_are_recognised():
    props = TypeAdapter(List[CustomContactProperty]).validate_python([
        {'name': 'closedate', 'type': 'date', 'fieldType': 'date'},
        {'name': 'mobilephone', 'type': 'string', 'fieldType': 'phonenumber'},
    ])

    assert props[0].type is CustomContactPropertyType.DATE
    assert props[1].field_type is CustomContactPropertyFieldType.PHONENUMBER


def test_unlisted_property_types_are_kept_as_strings():
    prop = CustomContactProperty.model_validate(
        {'name': 'hs_object_source', 'type': 'object_coordinates', 'fieldType': 'unknown'})

    assert prop.type == 'object_coordinates'
    assert prop.field_type == 'unknown'
    assert prop.to_dict()['type'] == 'object_coordinates'
