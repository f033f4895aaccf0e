import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from blogsite.categories import validate_categories
from blogsite.config import settings
from blogsite.errors import LoginRequired
from blogsite.middleware import RequestLogMiddleware
from blogsite.routers import auth, blogs, home
from blogsite.services.upload_service import UPLOAD_URL_PREFIX

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    validate_categories()
    logger.info("Blogsite starting (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    logger.info("Blogsite stopped")


app = FastAPI(
    title="Blogsite",
    description="Multi-user blog with image uploads and threaded comments",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
)
app.add_middleware(RequestLogMiddleware)

# Uploaded images are served straight from disk.
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Routers
app.include_router(home.router)
app.include_router(auth.router)
app.include_router(blogs.router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse("/login", status_code=302)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    configure_logging()
    uvicorn.run("blogsite.main:app", host=settings.HOST, port=settings.PORT)
