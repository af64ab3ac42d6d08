"""
Per-user HubSpot client cache
Clients hold HTTP sessions only. Credentials live in the object store, so a
fresh manager (e.g. after a restart) rebuilds clients on demand.
"""

from typing import Callable, Dict

from hubspot_connector.hubspot_client import HubSpotClient


class HubSpotClientsManager:

    def __init__(self):
        self._clients: Dict[str, HubSpotClient] = {}

    def get_client(self, user_id: str, factory: Callable[[], HubSpotClient]) -> HubSpotClient:
        """Return the cached client for user_id, building it with factory if needed."""
        client = self._clients.get(user_id)
        if client is None:
            client = factory()
            self._clients[user_id] = client
        return client

    def remove_client(self, user_id: str) -> None:
        client = self._clients.pop(user_id, None)
        if client is not None:
            client.session.close()

    def __len__(self) -> int:
        return len(self._clients)
