"""
Application context built once at startup and injected into handlers.

Holds the database clients and integration adapters so nothing below the
route layer reaches for module-level connection state.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from supabase import Client

from app.config import Settings
from app.database.supabase_client import create_service_client, create_supabase_client
from app.modules.integrations.calendar import GoogleCalendarService
from app.modules.integrations.docs import GoogleDocsService
from app.modules.integrations.email import ReminderEmailService
from app.modules.integrations.places import PlacesService
from app.modules.integrations.storage import ObjectStorageService


@dataclass
class AppContext:
    settings: Settings
    supabase: Client
    service_supabase: Optional[Client]
    calendar: GoogleCalendarService
    docs: GoogleDocsService
    email: ReminderEmailService
    places: PlacesService
    storage: ObjectStorageService


def build_context(
    settings: Settings,
    supabase: Optional[Client] = None,
    service_supabase: Optional[Client] = None,
) -> AppContext:
    supabase = supabase or create_supabase_client(settings)
    if service_supabase is None:
        service_supabase = create_service_client(settings)
    return AppContext(
        settings=settings,
        supabase=supabase,
        service_supabase=service_supabase,
        calendar=GoogleCalendarService(settings),
        docs=GoogleDocsService(settings),
        email=ReminderEmailService(settings),
        places=PlacesService(settings),
        storage=ObjectStorageService(settings, service_supabase or supabase),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
