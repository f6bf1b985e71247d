from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.schemas import ApiModel, not_null


class PersonnelCreate(ApiModel):
    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    instagram: Optional[str] = None
    notes: Optional[str] = None
    avatar_url: Optional[str] = None


class PersonnelUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    instagram: Optional[str] = None
    notes: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def required_columns(cls, v):
        return not_null(v)


class PersonnelResponse(ApiModel):
    id: str
    team_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    instagram: Optional[str] = None
    notes: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
