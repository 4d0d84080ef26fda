import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from metaverse_sns.config import settings
from metaverse_sns.core.route_guard import RouteGuardMiddleware
from metaverse_sns.core.session import SessionRequired
from metaverse_sns.modules.auth import routes as auth_routes
from metaverse_sns.modules.profiles import routes as profiles_routes
from metaverse_sns.modules.avatars import routes as avatars_routes
from metaverse_sns.modules.search import routes as search_routes
from metaverse_sns.modules.session import routes as session_routes
from metaverse_sns.modules.pages import routes as pages_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)


@app.exception_handler(SessionRequired)
async def session_required_handler(request: Request, exc: SessionRequired):
    return RedirectResponse(url=settings.sign_in_path, status_code=303)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


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


# Last added is outermost: CORS, then security headers, then the route guard
app.add_middleware(
    RouteGuardMiddleware,
    sign_in_path=settings.sign_in_path,
    home_path=settings.home_path,
    excluded_prefixes=settings.get_guard_excluded_prefixes(),
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(profiles_routes.router, prefix="/api/v1")
app.include_router(avatars_routes.router, prefix="/api/v1")
app.include_router(search_routes.router, prefix="/api/v1")
app.include_router(session_routes.router, prefix="/api/v1")
app.include_router(pages_routes.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/ready")
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready"}
