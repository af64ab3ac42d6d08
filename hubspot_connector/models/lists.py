"""
Contact list models
A list's filters are OR-ed groups of AND-ed filters; on the wire this is
an array of arrays of filter objects.
"""

from typing import Any, List, Optional

from pydantic import Field, model_serializer, model_validator

from hubspot_connector.models.common import HubSpotModel


class HubSpotListFilter(HubSpotModel):
    property: Optional[str] = None
    operator: Optional[str] = None
    value: Optional[str] = None
    type: Optional[str] = None


class HubSpotListFilters(HubSpotModel):
    """One AND-group of filters, written as a bare JSON array."""
    filters: List[HubSpotListFilter] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def _from_array(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {'filters': data}
        return data

    @model_serializer(mode='wrap')
    def _to_array(self, handler):
        return handler(self)['filters']


class HubSpotListMetaData(HubSpotModel):
    size: Optional[int] = None
    processing: Optional[str] = None
    error: Optional[str] = None
    last_processing_state_change_at: Optional[int] = None
    last_size_change_at: Optional[int] = None


class HubSpotList(HubSpotModel):
    list_id: Optional[str] = None
    portal_id: Optional[str] = None
    internal_list_id: Optional[str] = None
    name: Optional[str] = None
    dynamic: Optional[bool] = None
    list_type: Optional[str] = None
    deleteable: Optional[bool] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    meta_data: Optional[HubSpotListMetaData] = None
    filters: Optional[List[HubSpotListFilters]] = None


class HubSpotNewList(HubSpotModel):
    """Request body for creating a list."""
    name: Optional[str] = None
    dynamic: Optional[bool] = None
    portal_id: Optional[str] = None
    filters: Optional[List[HubSpotListFilters]] = None


class HubSpotListLists(HubSpotModel):
    lists: Optional[List[HubSpotList]] = None
    offset: Optional[int] = None
    has_more: Optional[bool] = Field(None, alias='has-more')


class HubSpotListAddContactToListResponse(HubSpotModel):
    updated: Optional[List[int]] = None
    discarded: Optional[List[int]] = None
    invalid_vids: Optional[List[int]] = None
    invalid_emails: Optional[List[str]] = None
