"""Tests for HTTP dispatch, status classification and JSON handling."""

from typing import List
from unittest.mock import MagicMock, PropertyMock

import pytest
import requests

from conftest import make_response
from hubspot_connector.client import (
    HubSpotWebResourceMethods as Method,
    WebResource,
    deserialize,
    transform_object_to_json,
    web_resource_call,
    web_resource_get,
)
from hubspot_connector.exceptions import (
    HubSpotAccessTokenExpiredError,
    HubSpotConfigurationError,
    HubSpotConnectorError,
    HubSpotJsonMappingError,
    HubSpotJsonParseError,
)
from hubspot_connector.models import ContactStatistics, CustomContactProperty

URL = 'https://api.hubapi.com/contacts/v1/contacts/statistics'


@pytest.fixture
def resource(mock_session):
    return WebResource(mock_session, URL).query_param('access_token', 'tok')


# ======================================================
# Dispatch
# ======================================================

@pytest.mark.parametrize('method,verb', [
    (Method.GET, 'GET'),
    (Method.POST, 'POST'),
    (Method.PUT, 'PUT'),
    (Method.DELETE, 'DELETE'),
])
def test_json_methods_use_json_content_type(resource, mock_session, method, verb):
    web_resource_call(resource, method, '{"a": 1}' if verb in ('POST', 'PUT') else None)

    mock_session.request.assert_called_once()
    args, kwargs = mock_session.request.call_args
    assert args == (verb, URL)
    assert kwargs['headers']['Content-Type'] == 'application/json'
    assert kwargs['params'] == {'access_token': 'tok'}


def test_refresh_posts_form_encoded(resource, mock_session):
    web_resource_call(resource, Method.REFRESH, 'refresh_token=r&grant_type=refresh_token')

    args, kwargs = mock_session.request.call_args
    assert args[0] == 'POST'
    assert kwargs['headers']['Content-Type'] == 'application/x-www-form-urlencoded'
    assert kwargs['data'] == b'refresh_token=r&grant_type=refresh_token'


def test_unknown_method_is_rejected(resource):
    with pytest.raises(HubSpotConfigurationError):
        web_resource_call(resource, 'PATCH')


def test_query_param_skips_none_and_keeps_base_untouched(resource):
    paged = resource.query_param('count', 10).query_param('vidOffset', None)

    assert paged.params == {'access_token': 'tok', 'count': '10'}
    assert resource.params == {'access_token': 'tok'}


def test_single_attempt_no_retry(resource, mock_session):
    mock_session.request.return_value = make_response(503, 'unavailable')

    with pytest.raises(HubSpotConnectorError):
        web_resource_get(resource, '1')

    assert mock_session.request.call_count == 1


# ======================================================
# Classification
# ======================================================

def test_204_returns_none(resource, mock_session):
    mock_session.request.return_value = make_response(204)

    assert web_resource_get(resource, '1', Method.POST, '{}', ContactStatistics) is None


def test_401_raises_token_expired_with_user_id(resource, mock_session):
    mock_session.request.return_value = make_response(401, 'expired')

    with pytest.raises(HubSpotAccessTokenExpiredError) as exc_info:
        web_resource_get(resource, 'user-77')

    assert exc_info.value.user_id == 'user-77'
    assert exc_info.value.status_code == 401
    assert 'user-77' in str(exc_info.value)


def test_other_status_embeds_code_and_body(resource, mock_session):
    mock_session.request.return_value = make_response(409, '{"message": "already exists"}')

    with pytest.raises(HubSpotConnectorError) as exc_info:
        web_resource_get(resource, '1')

    err = exc_info.value
    assert not isinstance(err, HubSpotAccessTokenExpiredError)
    assert str(err) == 'ERROR - statusCode: 409 - message: {"message": "already exists"}'
    assert err.status_code == 409


def test_unreadable_error_body_defaults_to_empty(resource, mock_session):
    response = MagicMock(spec=requests.Response)
    response.status_code = 500
    type(response).text = PropertyMock(side_effect=RuntimeError('stream closed'))
    mock_session.request.return_value = response

    with pytest.raises(HubSpotConnectorError) as exc_info:
        web_resource_get(resource, '1')

    assert str(exc_info.value) == 'ERROR - statusCode: 500 - message: '


def test_transport_error_is_wrapped(resource, mock_session):
    mock_session.request.side_effect = requests.ConnectionError('refused')

    with pytest.raises(HubSpotConnectorError) as exc_info:
        web_resource_get(resource, '1')

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


# ======================================================
# Deserialization
# ======================================================

def test_string_type_returns_body_unchanged(resource, mock_session):
    mock_session.request.return_value = make_response(200, 'not json at all')

    assert web_resource_get(resource, '1') == 'not json at all'


def test_model_type_is_decoded(resource, mock_session):
    mock_session.request.return_value = make_response(
        200, {'contacts': 12, 'lastNewContactAt': 1340000000000})

    stats = web_resource_get(resource, '1', expected_type=ContactStatistics)

    assert stats == ContactStatistics(contacts=12, last_new_contact_at=1340000000000)


def test_list_of_models_is_decoded():
    props = deserialize('[{"name": "a", "type": "string"}, {"name": "b"}]',
                        List[CustomContactProperty])

    assert [p.name for p in props] == ['a', 'b']


def test_property_list_with_date_and_unlisted_types_is_decoded():
    props = deserialize(
        '[{"name": "closedate", "type": "date", "fieldType": "date"},'
        ' {"name": "geo", "type": "object_coordinates", "fieldType": "text"}]',
        List[CustomContactProperty],
    )

    assert [p.name for p in props] == ['closedate', 'geo']
    assert props[1].type == 'object_coordinates'


def test_malformed_json_is_a_parse_error():
    with pytest.raises(HubSpotJsonParseError):
        deserialize('{"contacts": ', ContactStatistics)


def test_wrong_shape_is_a_mapping_error():
    with pytest.raises(HubSpotJsonMappingError):
        deserialize('[1, 2, 3]', ContactStatistics)


def test_parse_and_mapping_errors_are_not_status_errors():
    with pytest.raises(HubSpotConnectorError) as exc_info:
        deserialize('{"contacts": "many"}', ContactStatistics)

    assert isinstance(exc_info.value, HubSpotJsonMappingError)
    assert exc_info.value.status_code is None


def test_transform_object_to_json_encodes_models():
    body = transform_object_to_json({'vids': [1, 2]})
    assert body == '{"vids": [1, 2]}'

    assert transform_object_to_json(ContactStatistics(contacts=3)) == '{"contacts": 3}'


def test_transform_object_to_json_failure():
    with pytest.raises(HubSpotConnectorError) as exc_info:
        transform_object_to_json({'when': object()})

    assert 'Cannot generate the Json' in str(exc_info.value)
