from typing import Optional

from fastapi import Request
from supabase import create_client, Client

from app.config import Settings


def create_supabase_client(settings: Settings) -> Client:
    return create_client(settings.supabase_url, settings.supabase_key)


def create_service_client(settings: Settings) -> Optional[Client]:
    """Client with service_role key; bypasses RLS. Needed for storage signing."""
    if not settings.supabase_service_role_key:
        return None
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase(request: Request) -> Client:
    return request.app.state.context.supabase
