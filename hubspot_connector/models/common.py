"""
HubSpot Model Base
Shared pydantic configuration for every payload exchanged with HubSpot.

Wire names are the camelCase form of the attribute name (``group_name`` ->
``groupName``); fields whose wire name differs (``portal-id``, ``has-more``)
set an explicit ``Field(alias=...)``. Unknown keys are ignored on read and
None values are dropped on write.
"""

import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HubSpotModel(BaseModel):

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
        coerce_numbers_to_str=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: aliases, enum values, no None fields."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
