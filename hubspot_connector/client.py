"""
HubSpot Client Utilities
HTTP dispatch, response/error classification, JSON (de)serialization and
OAuth redirect parsing shared by every HubSpot call.
"""

import json
import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional

import requests
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from hubspot_connector.exceptions import (
    HubSpotAccessTokenExpiredError,
    HubSpotConfigurationError,
    HubSpotConnectorError,
    HubSpotInvalidScopeError,
    HubSpotJsonMappingError,
    HubSpotJsonParseError,
    HubSpotNoAccessTokenError,
    HubSpotOAuthError,
)
from hubspot_connector.models.oauth import OAuthCredentials

logger = logging.getLogger(__name__)

# Default timeout for all API calls (seconds)
REQUEST_TIMEOUT = 15

APPLICATION_JSON = 'application/json'
APPLICATION_FORM_URLENCODED = 'application/x-www-form-urlencoded'


class HubSpotWebResourceMethods(Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'
    REFRESH = 'REFRESH'


# logical method -> (HTTP verb, Content-Type)
_DISPATCH = {
    HubSpotWebResourceMethods.GET: ('GET', APPLICATION_JSON),
    HubSpotWebResourceMethods.POST: ('POST', APPLICATION_JSON),
    HubSpotWebResourceMethods.PUT: ('PUT', APPLICATION_JSON),
    HubSpotWebResourceMethods.DELETE: ('DELETE', APPLICATION_JSON),
    HubSpotWebResourceMethods.REFRESH: ('POST', APPLICATION_FORM_URLENCODED),
}


@dataclass(frozen=True)
class WebResource:
    """A URL plus query parameters bound to a requests session.

    ``query_param`` returns a new resource, so a base resource can be
    shared between calls.
    """
    session: requests.Session
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    timeout: float = REQUEST_TIMEOUT

    def query_param(self, name: str, value) -> 'WebResource':
        """Add a query parameter; None values are left out."""
        if value is None:
            return self
        params = dict(self.params)
        params[name] = str(value)
        return replace(self, params=params)


# ======================================================
# JSON
# ======================================================

_ANY = TypeAdapter(Any)


@lru_cache(maxsize=None)
def _adapter(expected_type: Any) -> TypeAdapter:
    return TypeAdapter(expected_type)


def transform_object_to_json(obj: Any) -> str:
    """Serialize a model (or list/dict of models) to a JSON string."""
    try:
        return json.dumps(_ANY.dump_python(obj, mode='json', by_alias=True, exclude_none=True))
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise HubSpotConnectorError('Cannot generate the Json from object') from e


def deserialize(body: str, expected_type: Any = str) -> Any:
    """Return ``body`` as is for str, otherwise decode JSON into ``expected_type``."""
    if expected_type is str:
        return body
    try:
        return _adapter(expected_type).validate_json(body)
    except ValidationError as e:
        if any(err['type'] == 'json_invalid' for err in e.errors()):
            raise HubSpotJsonParseError('ERROR - Error Parsing the JSON') from e
        raise HubSpotJsonMappingError('ERROR - Error Mapping the JSON') from e


# ======================================================
# HTTP
# ======================================================

def web_resource_call(resource: WebResource, method: HubSpotWebResourceMethods,
                      request_body: Optional[str] = None) -> requests.Response:
    """Issue exactly one request for ``method`` with the matching Content-Type."""
    try:
        verb, content_type = _DISPATCH[method]
    except KeyError:
        raise HubSpotConfigurationError(f'Unsupported HubSpot call method: {method!r}') from None

    data = request_body.encode('utf-8') if isinstance(request_body, str) else request_body
    logger.debug(f'HubSpot {method.value} {resource.url}')
    return resource.session.request(
        verb,
        resource.url,
        params=resource.params,
        data=data,
        headers={'Content-Type': content_type, 'Accept': APPLICATION_JSON},
        timeout=resource.timeout,
    )


def _raise_for_status(response: requests.Response) -> None:
    # 204 has no entity and is classified by handle_http_error with the rest.
    if response.status_code == 204 or not 200 <= response.status_code < 300:
        raise requests.HTTPError(f'HTTP {response.status_code}', response=response)


def _response_text(response: Optional[requests.Response]) -> str:
    if response is None:
        return ''
    try:
        return response.text or ''
    except Exception:
        return ''


def handle_http_error(error: requests.HTTPError, user_id: Optional[str]) -> None:
    """Classify an HTTP error: 204 returns None, everything else raises."""
    response = error.response
    status_code = response.status_code if response is not None else None

    if status_code == 204:
        return None

    message = _response_text(response)
    if status_code == 401:
        raise HubSpotAccessTokenExpiredError(
            f'The access token for the userId {user_id} has expired',
            user_id=user_id,
            response_body=message,
        ) from error

    logger.error(f'HubSpot returned HTTP {status_code}: {message[:200]}')
    raise HubSpotConnectorError(
        f'ERROR - statusCode: {status_code} - message: {message}',
        status_code=status_code,
        response_body=message,
    ) from error


def web_resource_get(resource: WebResource, user_id: Optional[str],
                     method: HubSpotWebResourceMethods = HubSpotWebResourceMethods.GET,
                     request_body: Optional[str] = None, expected_type: Any = str) -> Any:
    """Call ``resource`` and return the body as ``expected_type``.

    Returns None for 204 No Content.

    Raises:
        HubSpotAccessTokenExpiredError: HubSpot answered 401
        HubSpotJsonParseError / HubSpotJsonMappingError: unexpected payload
        HubSpotConnectorError: any other failure
    """
    try:
        response = web_resource_call(resource, method, request_body)
        _raise_for_status(response)
    except requests.HTTPError as e:
        return handle_http_error(e, user_id)
    except requests.RequestException as e:
        raise HubSpotConnectorError(f'ERROR - {e}') from e

    return deserialize(response.text, expected_type)


# ======================================================
# OAUTH
# ======================================================

PATTERN_ACCESS_TOKEN = re.compile(r'access_token=([^&]+)&?')
PATTERN_EXPIRES_AT = re.compile(r'expires_in=([^&]+)&?')
PATTERN_REFRESH_TOKEN = re.compile(r'refresh_token=([^&]+)&?')
PATTERN_USERID = re.compile(r'userid=([^&]+)&?')
PATTERN_ERROR = re.compile(r'error=([^&]+)&?')
_TOKEN_VALUE = re.compile(r'((?:access|refresh)_token=)[^&]+')


def _find(pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(1) if m else None


def mask_tokens(text: str) -> str:
    """Replace access and refresh token values in a redirect with ***."""
    return _TOKEN_VALUE.sub(r'\1***', text)


def authenticate_response(input_request: str) -> OAuthCredentials:
    """Extract credentials from the URL-encoded authorization redirect.

    Raises:
        HubSpotConfigurationError: empty input
        HubSpotInvalidScopeError / HubSpotOAuthError: the redirect carries ``error=``
        HubSpotNoAccessTokenError: no ``access_token`` in the input
    """
    if not input_request:
        raise HubSpotConfigurationError('The parameter inputRequest can not be empty')

    err_desc = _find(PATTERN_ERROR, input_request)
    if err_desc is not None:
        if err_desc == 'invalid_scope':
            raise HubSpotInvalidScopeError(
                'The configuration is requesting a scope that the service application '
                'does not have available.'
            )
        raise HubSpotOAuthError(f'The service has responded with an error message: {err_desc}')

    user_id = _find(PATTERN_USERID, input_request)
    access_token = _find(PATTERN_ACCESS_TOKEN, input_request)
    expires_at = _find(PATTERN_EXPIRES_AT, input_request)
    refresh_token = _find(PATTERN_REFRESH_TOKEN, input_request)

    if access_token is None:
        logger.error(f'Cannot find the access_token in the response: {mask_tokens(input_request)}')
        raise HubSpotNoAccessTokenError(
            'The response of the authentication process does not have an access token. '
            f'Url: {input_request}'
        )

    logger.debug(f'Received credentials for user: {user_id}')
    return OAuthCredentials(
        user_id=user_id,
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )
