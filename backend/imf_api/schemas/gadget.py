"""
Gadget Schemas
Request and response models for the gadgets API. Field names are camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from imf_api.models.gadget import GadgetStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GadgetCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    # Omitted or null means Available
    status: Optional[GadgetStatus] = None


class GadgetUpdate(CamelModel):
    """
    Freeform patch. Any status is accepted from any prior status; the
    guarded terminal transitions live on the decommission and
    self-destruct endpoints.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[GadgetStatus] = None

    @field_validator("name", "status")
    @classmethod
    def reject_explicit_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v


class GadgetResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    codename: str
    status: GadgetStatus
    decommissioned_at: Optional[datetime] = None

    @field_serializer("decommissioned_at")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        # SQLite hands back naive datetimes; stored values are always UTC
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class GadgetWithProbability(GadgetResponse):
    # Generated per response, never persisted
    mission_success_probability: str


class DecommissionResponse(CamelModel):
    message: str
    gadget: GadgetResponse


class SelfDestructResponse(CamelModel):
    message: str
    confirmation_code: str
