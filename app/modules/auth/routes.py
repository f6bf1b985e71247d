from fastapi import APIRouter, Depends, Response
from supabase import Client

from app.core.context import AppContext, get_context
from app.core.dependencies import (
    ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, TeamContext, get_auth_service, get_team_context, get_current_user
)
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import SessionRequest, MeResponse
from app.modules.auth.service import AuthService
from app.modules.users.service import ProfileService
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_MAX_AGE = 30 * 24 * 60 * 60


@router.get("/me", response_model=MeResponse)
async def get_me(
    ctx: TeamContext = Depends(get_team_context),
    supabase: Client = Depends(get_supabase),
):
    """Current user with profile, active team and role in it"""
    profile = ProfileService(supabase).get_profile(ctx.user_id)
    return MeResponse(
        id=ctx.user_id,
        email=ctx.user.get("email"),
        user_metadata=ctx.user.get("user_metadata") or {},
        profile=profile,
        active_team_id=ctx.team_id,
        role=ctx.role,
    )


@router.post("/session", status_code=200)
async def set_session(
    session: SessionRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    app_context: AppContext = Depends(get_context),
):
    """Validate a Supabase session and store it in httpOnly cookies"""
    user = service.get_current_user(session.access_token)
    secure = app_context.settings.auth_cookie_secure
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        secure=secure,
        samesite="strict",
        path="/",
    )
    if session.refresh_token:
        response.set_cookie(
            REFRESH_TOKEN_COOKIE,
            session.refresh_token,
            max_age=REFRESH_COOKIE_MAX_AGE,
            httponly=True,
            secure=secure,
            samesite="strict",
            path="/",
        )
    return {"userId": user["id"]}


@router.delete("/session", status_code=204)
async def clear_session(response: Response, user: Dict = Depends(get_current_user)):
    """Log out by dropping the session cookies"""
    response.delete_cookie(ACCESS_TOKEN_COOKIE, path="/")
    response.delete_cookie(REFRESH_TOKEN_COOKIE, path="/")
    return None
