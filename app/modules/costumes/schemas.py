from pydantic import Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime

from app.core.schemas import ApiModel, not_null

CostumeStatus = Literal["planning", "in_progress", "completed"]


class CostumeCreate(ApiModel):
    character_name: str = Field(min_length=1)
    series: Optional[str] = None
    status: CostumeStatus = "planning"
    completion_percentage: int = Field(default=0, ge=0, le=100)
    todos: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    image_url: Optional[str] = None


class CostumeUpdate(ApiModel):
    character_name: Optional[str] = Field(default=None, min_length=1)
    series: Optional[str] = None
    status: Optional[CostumeStatus] = None
    completion_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    todos: Optional[List[str]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("character_name", "status", "completion_percentage", "todos")
    @classmethod
    def required_columns(cls, v):
        return not_null(v)


class CostumeResponse(ApiModel):
    id: str
    team_id: str
    character_name: str
    series: Optional[str] = None
    status: str = "planning"
    completion_percentage: int = 0
    todos: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
