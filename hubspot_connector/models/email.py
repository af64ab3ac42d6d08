"""
Email subscription models
"""

from typing import List, Optional

from hubspot_connector.models.common import HubSpotModel


class EmailSubscriptionDefinitions(HubSpotModel):
    id: Optional[int] = None
    portal_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    active: Optional[bool] = None
    internal: Optional[bool] = None
    category: Optional[str] = None
    channel: Optional[str] = None
    internal_name: Optional[str] = None


class EmailSubscription(HubSpotModel):
    """Subscription types defined for a portal."""
    subscription_definitions: Optional[List[EmailSubscriptionDefinitions]] = None
