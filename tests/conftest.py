"""
Shared test fixtures for the HubSpot connector tests.
All external services (HubSpot HTTP, Supabase) are mocked.
"""

import json
import os
import sys

import pytest
import requests
from unittest.mock import MagicMock

# Ensure project root is on sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set env vars BEFORE any package imports
os.environ.setdefault('SUPABASE_URL', 'https://test.supabase.co')
os.environ.setdefault('SUPABASE_KEY', 'test-key')
os.environ.setdefault('HUBSPOT_CLIENT_ID', 'test-client-id')
os.environ.setdefault('HUBSPOT_HUB_ID', '237093')
os.environ.setdefault('HUBSPOT_CALLBACK_URL', 'https://app.example.com/hubspot/callback')

from hubspot_connector.connector import HubSpotConnector  # noqa: E402
from hubspot_connector.credentials import InMemoryObjectStore  # noqa: E402
from hubspot_connector.models import OAuthCredentials  # noqa: E402

USER_ID = '1'
ACCESS_TOKEN = 'test-access-token'
REFRESH_TOKEN = 'test-refresh-token'


def make_response(status_code=200, body=None):
    """Build a fake requests.Response. Dicts/lists are JSON-encoded."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    response.text = body if body is not None else ''
    return response


@pytest.fixture(autouse=True)
def mock_supabase(monkeypatch):
    """Mock the Supabase client globally so no real DB calls are made."""
    mock_client = MagicMock()

    def mock_create_client(url, key):
        return mock_client

    monkeypatch.setattr('supabase.create_client', mock_create_client)
    monkeypatch.setattr('hubspot_connector.credentials.create_client', mock_create_client)
    return mock_client


@pytest.fixture
def mock_session():
    """A requests.Session whose request() returns an empty 200 by default."""
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def object_store():
    return InMemoryObjectStore()


@pytest.fixture
def connector(mock_session, object_store):
    """Initialized connector with credentials already stored for USER_ID."""
    c = HubSpotConnector(
        client_id='test-client-id',
        hub_id='237093',
        scope='contacts-rw offline',
        callback_url='https://app.example.com/hubspot/callback',
        object_store=object_store,
        session_factory=lambda: mock_session,
    )
    c.initialize()
    object_store.store(USER_ID, OAuthCredentials(
        user_id=USER_ID,
        access_token=ACCESS_TOKEN,
        refresh_token=REFRESH_TOKEN,
        expires_at='21600',
    ))
    return c


def last_call(session):
    """(verb, url, kwargs) of the most recent session.request call."""
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs
