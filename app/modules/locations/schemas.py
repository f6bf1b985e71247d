from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.schemas import ApiModel, not_null


class LocationCreate(ApiModel):
    name: str = Field(min_length=1)
    address: Optional[str] = None
    place_id: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    notes: Optional[str] = None
    image_url: Optional[str] = None


class LocationUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    place_id: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def required_columns(cls, v):
        return not_null(v)


class LocationResponse(ApiModel):
    id: str
    team_id: str
    name: str
    address: Optional[str] = None
    place_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
