import logging
from fastapi import APIRouter, Depends, Query
from supabase import Client
from typing import Optional

from app.core.context import AppContext, get_context
from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import (
    BadRequestError, IntegrationError, IntegrationUnavailableError, NotFoundError
)
from app.database.supabase_client import get_supabase
from app.modules.integrations.docs import ShootDocument
from app.modules.integrations.email import FALLBACK as EMAIL_FALLBACK, format_when
from app.modules.integrations.schemas import (
    CalendarEventResponse, DocsExportResponse, ReminderResult,
    PlacesResponse, UploadRequest, UploadResponse
)
from app.modules.shoots.schemas import ShootResponse
from app.modules.shoots.service import ShootService

logger = logging.getLogger(__name__)

# Provider calls are blocking, so handlers are plain functions run in the threadpool
router = APIRouter(tags=["integrations"])


def get_shoot_service(supabase: Client = Depends(get_supabase)) -> ShootService:
    return ShootService(supabase)


def _location_label(service: ShootService, shoot: ShootResponse) -> Optional[str]:
    if shoot.location_id:
        location = service.locations.get(shoot.location_id, shoot.team_id)
        if location:
            return f"{location.name}, {location.address}" if location.address else location.name
    return shoot.location_notes


# Calendar

@router.post("/shoots/{shoot_id}/calendar", response_model=CalendarEventResponse)
def sync_calendar_event(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    app_context: AppContext = Depends(get_context)
):
    """Create the shoot's calendar event, or update it if one already exists"""
    shoot = service.get_or_404(shoot_id, ctx.team_id)
    calendar = app_context.calendar
    location = _location_label(service, shoot)

    if shoot.calendar_event_id:
        event = calendar.update_event(shoot.calendar_event_id, shoot, location)
    else:
        event = calendar.create_event(shoot, location)

    service.set_integration_fields(shoot_id, ctx.team_id, {
        "calendar_event_id": event["event_id"],
        "calendar_event_url": event["event_url"] or shoot.calendar_event_url,
    })
    return CalendarEventResponse(
        calendar_event_id=event["event_id"],
        calendar_event_url=event["event_url"] or shoot.calendar_event_url,
    )


@router.delete("/shoots/{shoot_id}/calendar", status_code=204)
def delete_calendar_event(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    app_context: AppContext = Depends(get_context)
):
    shoot = service.get_or_404(shoot_id, ctx.team_id)
    if not shoot.calendar_event_id:
        raise NotFoundError("Shoot has no calendar event")
    app_context.calendar.delete_event(shoot.calendar_event_id)
    service.set_integration_fields(shoot_id, ctx.team_id, {
        "calendar_event_id": None,
        "calendar_event_url": None,
    })
    return None


# Docs

@router.post("/shoots/{shoot_id}/docs", response_model=DocsExportResponse)
def export_shoot_doc(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    app_context: AppContext = Depends(get_context)
):
    """Write the shoot plan to Google Docs; re-exporting rewrites the same document"""
    shoot = service.get_or_404(shoot_id, ctx.team_id)
    document = ShootDocument(
        shoot=shoot,
        location=service.locations.get(shoot.location_id, ctx.team_id) if shoot.location_id else None,
        participants=service.list_participants(shoot_id),
        equipment=service.list_equipment(shoot_id, ctx.team_id),
        props=service.list_props(shoot_id, ctx.team_id),
        costumes=service.list_costumes(shoot_id, ctx.team_id),
        references=service.list_references(shoot_id),
    )
    exported = app_context.docs.export_shoot(document, shoot.docs_id)
    service.set_integration_fields(shoot_id, ctx.team_id, {
        "docs_id": exported["doc_id"],
        "docs_url": exported["doc_url"],
    })
    return DocsExportResponse(docs_id=exported["doc_id"], docs_url=exported["doc_url"])


# Reminders

@router.post("/shoots/{shoot_id}/reminders", response_model=ReminderResult)
def send_reminders(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    app_context: AppContext = Depends(get_context)
):
    """Email a reminder to every participant that has an email address"""
    shoot = service.get_or_404(shoot_id, ctx.team_id)
    if not shoot.date:
        raise BadRequestError("Shoot needs a date before reminders can be sent")

    email = app_context.email
    if not email.configured:
        raise IntegrationUnavailableError("Email is not configured", fallback=EMAIL_FALLBACK)

    when = format_when(shoot.date, shoot.time)
    location = _location_label(service, shoot)
    result = ReminderResult()
    for participant in service.list_participants(shoot_id):
        if not participant.email:
            result.skipped += 1
            continue
        try:
            email.send_reminder(participant.email, participant.name, shoot.title, when, location)
            result.sent += 1
        except IntegrationError as e:
            logger.warning(f"Reminder for shoot {shoot_id} not delivered to participant {participant.id}: {e.detail}")
            result.failed += 1

    if result.failed and not result.sent:
        raise IntegrationError("Failed to send reminder emails", fallback=EMAIL_FALLBACK)
    return result


# Places

@router.get("/places/autocomplete", response_model=PlacesResponse)
def places_autocomplete(
    q: Optional[str] = Query(None),
    ctx: TeamContext = Depends(require_operation("resources:read")),
    app_context: AppContext = Depends(get_context)
):
    query = (q or "").strip()
    if not query:
        raise BadRequestError(
            "Query parameter 'q' is required",
            errors=[{"field": "q", "message": "Query parameter 'q' is required"}]
        )
    return PlacesResponse(predictions=app_context.places.autocomplete(query))


# Uploads

@router.post("/objects/upload", response_model=UploadResponse)
def create_upload_url(
    upload: Optional[UploadRequest] = None,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    app_context: AppContext = Depends(get_context)
):
    """Signed URL the client PUTs an image to; objects are namespaced by team"""
    upload = upload or UploadRequest()
    return app_context.storage.create_upload_url(ctx.team_id, upload.content_type)
