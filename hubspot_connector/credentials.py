"""
HubSpot Credential Storage
The host application supplies an ObjectStore; the connector only reads and
writes OAuthCredentials through HubSpotCredentialsManager.
"""

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

import pytz
from supabase import Client, create_client

from hubspot_connector.exceptions import HubSpotConnectorError, HubSpotNoAccessTokenError
from hubspot_connector.models.oauth import OAuthCredentials

logger = logging.getLogger(__name__)


class ObjectStore(ABC):
    """Key/value store for credentials, keyed by user id."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        pass

    @abstractmethod
    def retrieve(self, key: str) -> Optional[OAuthCredentials]:
        pass

    @abstractmethod
    def store(self, key: str, value: OAuthCredentials) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class InMemoryObjectStore(ObjectStore):
    """Process-local store. Credentials are lost on restart."""

    def __init__(self):
        self._data: Dict[str, OAuthCredentials] = {}

    def contains(self, key: str) -> bool:
        return key in self._data

    def retrieve(self, key: str) -> Optional[OAuthCredentials]:
        return self._data.get(key)

    def store(self, key: str, value: OAuthCredentials) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SupabaseObjectStore(ObjectStore):
    """Credentials persisted in the ``hubspot_credentials`` Supabase table."""

    TABLE = 'hubspot_credentials'

    def __init__(self, url: str = '', key: str = '', table: str = TABLE):
        url = url or os.getenv('SUPABASE_URL')
        key = key or os.getenv('SUPABASE_KEY')
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")
        self.supabase: Client = create_client(url, key)
        self.table = table

    def _select(self, key: str) -> list:
        try:
            result = self.supabase.table(self.table) \
                .select('*') \
                .eq('user_id', key) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f'HubSpot credentials lookup failed for user {key}: {e}')
            raise HubSpotConnectorError(f'Cannot read credentials for user {key}') from e
        return result.data or []

    def contains(self, key: str) -> bool:
        return bool(self._select(key))

    def retrieve(self, key: str) -> Optional[OAuthCredentials]:
        rows = self._select(key)
        if not rows:
            return None
        row = rows[0]
        return OAuthCredentials(
            user_id=row.get('user_id'),
            access_token=row.get('access_token'),
            refresh_token=row.get('refresh_token'),
            expires_at=row.get('expires_at'),
        )

    def store(self, key: str, value: OAuthCredentials) -> None:
        data = {
            'user_id': key,
            'access_token': value.access_token,
            'refresh_token': value.refresh_token,
            'expires_at': value.expires_at,
            'updated_at': datetime.now(pytz.UTC).isoformat(),
        }
        try:
            existing = self.supabase.table(self.table) \
                .select('id') \
                .eq('user_id', key) \
                .execute()

            if existing.data:
                self.supabase.table(self.table) \
                    .update(data) \
                    .eq('id', existing.data[0]['id']) \
                    .execute()
            else:
                self.supabase.table(self.table) \
                    .insert(data) \
                    .execute()
        except Exception as e:
            logger.error(f'HubSpot credentials save failed for user {key}: {e}')
            raise HubSpotConnectorError(f'Cannot save credentials for user {key}') from e

    def remove(self, key: str) -> None:
        try:
            self.supabase.table(self.table) \
                .delete() \
                .eq('user_id', key) \
                .execute()
        except Exception as e:
            logger.error(f'HubSpot credentials delete failed for user {key}: {e}')
            raise HubSpotConnectorError(f'Cannot delete credentials for user {key}') from e


class HubSpotCredentialsManager:
    """Reads and replaces per-user OAuthCredentials in an ObjectStore."""

    def __init__(self, object_store: ObjectStore):
        self.object_store = object_store

    def has_credentials(self, user_id: str) -> bool:
        return bool(user_id) and self.object_store.contains(user_id)

    def get_credentials(self, user_id: str) -> OAuthCredentials:
        creds = self.object_store.retrieve(user_id) if user_id else None
        if creds is None or not creds.access_token:
            raise HubSpotNoAccessTokenError(
                f'There is no access token stored for the userId {user_id}. '
                'Call authenticate first.'
            )
        return creds

    def set_credentials(self, user_id: str, credentials: OAuthCredentials) -> None:
        self.object_store.store(user_id, credentials)
        logger.info(f'Stored HubSpot credentials for user {user_id}')

    def remove_credentials(self, user_id: str) -> None:
        self.object_store.remove(user_id)
        logger.info(f'Removed HubSpot credentials for user {user_id}')
