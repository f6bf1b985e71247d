import json
from pydantic import Field, field_validator
from typing import Any, List, Literal, Optional
from datetime import datetime

from app.core.casing import extract_resource_id
from app.core.schemas import ApiModel, not_null

ShootStatus = Literal["idea", "planning", "scheduled", "completed"]
ReferenceType = Literal["image", "link", "instagram"]

SUPPLEMENTARY_ROLE = "Participant"


def _parse_instagram_links(value: Any) -> Any:
    # Form clients post the list as a JSON-encoded string
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError:
            raise ValueError("instagramLinks must be a list or a JSON-encoded list")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ShootBase(ApiModel):
    date: Optional[datetime] = None
    time: Optional[str] = Field(default=None, pattern=r"^\d{1,2}:\d{2}$")
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    location_id: Optional[str] = None
    location_notes: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    reminder_time: Optional[str] = None
    calendar_event_id: Optional[str] = None
    calendar_event_url: Optional[str] = None
    docs_id: Optional[str] = None
    docs_url: Optional[str] = None

    @field_validator("date", "time", "location_id", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return _blank_to_none(v)


class ShootCreate(ShootBase):
    title: str = Field(min_length=1)
    status: ShootStatus = "idea"
    instagram_links: List[str] = Field(default_factory=list)
    is_public: bool = False

    @field_validator("instagram_links", mode="before")
    @classmethod
    def parse_links(cls, v):
        if v is None:
            return []
        return _parse_instagram_links(v)


class ShootUpdate(ShootBase):
    title: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ShootStatus] = None
    instagram_links: Optional[List[str]] = None
    is_public: Optional[bool] = None

    @field_validator("instagram_links", mode="before")
    @classmethod
    def parse_links(cls, v):
        return _parse_instagram_links(v)

    @field_validator("title", "status", "instagram_links", "is_public")
    @classmethod
    def required_columns(cls, v):
        return not_null(v)


class ShootResponse(ApiModel):
    id: str
    team_id: str
    user_id: str
    title: str
    status: ShootStatus = "idea"
    date: Optional[datetime] = None
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    location_id: Optional[str] = None
    location_notes: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    instagram_links: List[str] = Field(default_factory=list)
    is_public: bool = False
    reminder_time: Optional[str] = None
    calendar_event_id: Optional[str] = None
    calendar_event_url: Optional[str] = None
    docs_id: Optional[str] = None
    docs_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("instagram_links", mode="before")
    @classmethod
    def null_links(cls, v):
        return v or []


# References

class ReferenceCreate(ApiModel):
    type: ReferenceType = "image"
    url: str = Field(min_length=1)
    notes: Optional[str] = None


class ReferenceResponse(ApiModel):
    id: str
    shoot_id: str
    type: str
    url: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


# Participants

class ParticipantCreate(ApiModel):
    """A participant descriptor. A null personnel_id marks a manual participant."""
    personnel_id: Optional[str] = None
    name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    email: Optional[str] = None

    @field_validator("personnel_id", "email", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return _blank_to_none(v)


class ParticipantResponse(ApiModel):
    id: str
    shoot_id: str
    personnel_id: Optional[str] = None
    name: str
    role: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


# Catalog associations

class ShootEquipmentCreate(ApiModel):
    equipment_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class ShootPropCreate(ApiModel):
    prop_id: str = Field(min_length=1)


class ShootCostumeCreate(ApiModel):
    costume_id: str = Field(min_length=1)


class ShootEquipmentResponse(ApiModel):
    id: str
    shoot_id: str
    equipment_id: str
    quantity: int = 1


class ShootPropResponse(ApiModel):
    id: str
    shoot_id: str
    prop_id: str


class ShootCostumeResponse(ApiModel):
    id: str
    shoot_id: str
    costume_id: str


def _extract_ids(value: Any, keys: tuple) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("must be a list")
    ids = []
    for position, item in enumerate(value):
        try:
            resource_id = extract_resource_id(item, keys)
        except TypeError:
            resource_id = None
        if not resource_id:
            raise ValueError(f"item {position} has no id")
        ids.append(resource_id)
    return ids


class ShootResourcesUpdate(ApiModel):
    """Desired association state for a shoot.

    Id lists accept bare ids, join rows ({"equipmentId": ...}) or full
    resource objects ({"id": ...}). Duplicates are kept as submitted.
    """
    equipment_ids: List[str] = Field(default_factory=list)
    prop_ids: List[str] = Field(default_factory=list)
    costume_ids: List[str] = Field(default_factory=list)
    personnel_ids: List[str] = Field(default_factory=list)
    participants: List[ParticipantCreate] = Field(default_factory=list)

    @field_validator("equipment_ids", mode="before")
    @classmethod
    def equipment_ids_from_items(cls, v):
        return _extract_ids(v, ("equipment_id", "id"))

    @field_validator("prop_ids", mode="before")
    @classmethod
    def prop_ids_from_items(cls, v):
        return _extract_ids(v, ("prop_id", "id"))

    @field_validator("costume_ids", mode="before")
    @classmethod
    def costume_ids_from_items(cls, v):
        return _extract_ids(v, ("costume_id", "id"))

    @field_validator("personnel_ids", mode="before")
    @classmethod
    def personnel_ids_from_items(cls, v):
        return _extract_ids(v, ("personnel_id", "id"))

    @field_validator("participants", mode="before")
    @classmethod
    def null_participants(cls, v):
        return v or []


class ResourcesUpdateResult(ApiModel):
    success: bool = True
    equipment: int = 0
    props: int = 0
    costumes: int = 0
    participants: int = 0


# Public sharing

class PublicLocation(ApiModel):
    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class PublicParticipant(ApiModel):
    name: str
    role: str


class PublicShootResponse(ApiModel):
    id: str
    title: str
    status: str
    date: Optional[datetime] = None
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    description: Optional[str] = None
    color: Optional[str] = None
    instagram_links: List[str] = Field(default_factory=list)
    location: Optional[PublicLocation] = None
    references: List[ReferenceResponse] = Field(default_factory=list)
    participants: List[PublicParticipant] = Field(default_factory=list)
