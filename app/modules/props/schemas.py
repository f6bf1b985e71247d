from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.schemas import ApiModel, not_null


class PropCreate(ApiModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None
    available: bool = True
    image_url: Optional[str] = None


class PropUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None
    available: Optional[bool] = None
    image_url: Optional[str] = None

    @field_validator("name", "available")
    @classmethod
    def required_columns(cls, v):
        return not_null(v)


class PropResponse(ApiModel):
    id: str
    team_id: str
    name: str
    category: Optional[str] = None
    description: Optional[str] = None
    available: bool = True
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
