import logging
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from gitpress.config import get_settings
from gitpress.api.deps import get_post_store, get_session_manager, get_view_cache
from gitpress.api.routes import auth, posts
from gitpress.errors import ConfigurationError
from gitpress.services.post_store import PostStore
from gitpress.services.session_store import SessionManager
from gitpress.services.view_cache import ViewCache

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("gitpress")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Blog posts committed to GitHub as Markdown",
    version="0.1.0",
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(posts.router, prefix="/api/posts", tags=["Posts"])

RECENT_POSTS = 5


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server configuration error."})


@app.get("/")
async def root(
    store: PostStore = Depends(get_post_store),
    cache: ViewCache = Depends(get_view_cache),
):
    recent = cache.get_or_build("/", lambda: store.list_posts()[:RECENT_POSTS])
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": "0.1.0",
        "recent_posts": recent,
        "endpoints": {
            "posts": "/api/posts",
            "login": "/api/auth/github",
            "me": "/api/auth/me",
            "admin": "/admin",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/admin")
async def admin(
    request: Request, sessions: SessionManager = Depends(get_session_manager)
):
    """Protected area: requires a session, otherwise starts the GitHub login."""
    lookup = sessions.read(request)
    if lookup.session is None:
        logger.info(f"No active session for {request.url.path}, redirecting to login")
        response = RedirectResponse("/api/auth/github", status_code=307)
        if lookup.stale:
            sessions.delete_session(response)
        return response
    return {"user": lookup.session.user.model_dump()}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
