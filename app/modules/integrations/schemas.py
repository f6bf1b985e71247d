from pydantic import Field, field_validator
from typing import List, Optional

from app.core.schemas import ApiModel


class CalendarEventResponse(ApiModel):
    calendar_event_id: str
    calendar_event_url: Optional[str] = None


class DocsExportResponse(ApiModel):
    docs_id: str
    docs_url: str


class ReminderResult(ApiModel):
    sent: int = 0
    skipped: int = 0
    failed: int = 0


class PlacePrediction(ApiModel):
    description: str
    place_id: Optional[str] = None
    main_text: Optional[str] = None
    secondary_text: Optional[str] = None


class PlacesResponse(ApiModel):
    predictions: List[PlacePrediction] = Field(default_factory=list)


class UploadRequest(ApiModel):
    content_type: str = "image/jpeg"

    @field_validator("content_type")
    @classmethod
    def images_only(cls, v: str) -> str:
        v = v.strip().lower()
        if not v.startswith("image/"):
            raise ValueError("Only image uploads are supported")
        return v


class UploadResponse(ApiModel):
    upload_url: str
    object_path: str
    provider: str
