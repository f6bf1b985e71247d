import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.config import settings
from app.core.context import AppContext, build_context
from app.core.exceptions import AppError
from app.modules.auth import routes as auth_routes
from app.modules.costumes import routes as costumes_routes
from app.modules.equipment import routes as equipment_routes
from app.modules.integrations import routes as integrations_routes
from app.modules.locations import routes as locations_routes
from app.modules.personnel import routes as personnel_routes
from app.modules.props import routes as props_routes
from app.modules.shoots import routes as shoots_routes
from app.modules.teams import routes as teams_routes
from app.modules.users import routes as users_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


def _validation_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(to_camel(part) if "_" in part else part for part in loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


API_ROUTERS = [
    auth_routes.router,
    users_routes.router,
    teams_routes.router,
    personnel_routes.router,
    equipment_routes.router,
    locations_routes.router,
    props_routes.router,
    costumes_routes.router,
    shoots_routes.router,
    shoots_routes.participants_router,
    shoots_routes.references_router,
    shoots_routes.public_router,
    integrations_routes.router,
]


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the application. Without a context, one is built from settings at startup."""
    app_settings = context.settings if context else settings

    limiter = Limiter(key_func=get_remote_address, default_limits=[app_settings.rate_limit])
    app = FastAPI(
        title=app_settings.app_name,
        debug=app_settings.debug,
        redirect_slashes=False,
    )
    app.state.limiter = limiter
    app.state.context = context
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        if app_settings.is_production:
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in API_ROUTERS:
        app.include_router(router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        if app.state.context is None:
            app.state.context = build_context(app_settings)
        logger.info("Application startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown")

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {app_settings.app_name}", "status": "healthy"}

    @app.get("/health")
    @limiter.exempt
    async def health():
        return {"status": "healthy"}

    @app.get("/ready")
    @limiter.exempt
    async def ready(request: Request):
        """Ready once the application context has been built"""
        if request.app.state.context is None:
            return JSONResponse(status_code=503, content={"status": "starting"})
        return {"status": "ready"}

    return app


app = create_app()
