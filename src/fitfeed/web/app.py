"""FastAPI application for the fitfeed web interface."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import AVATARS_BUCKET, IMAGES_BUCKET, get_data_dir, get_storage_dir
from ..data import seed_exercises
from ..db.engine import get_db_path, init_db
from ..db.repositories import WorkoutRepository
from ..errors import FitfeedError, NotFoundError
from ..logging_setup import configure_logging
from ..models.profile import Profile
from ..storage import LocalStorage
from ..utils.helpers import format_duration, time_ago
from .deps import get_templates, require_user
from .routers import auth, exercises, feed, profile, workouts

logger = logging.getLogger(__name__)

# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and seed the exercise library on startup."""
    await init_db(app.state.db_path)
    await seed_exercises(app.state.db_path)
    logger.info("fitfeed started with database %s", app.state.db_path)
    yield


async def handle_fitfeed_error(request: Request, exc: FitfeedError):
    """Render service errors as an error page or a JSON body."""
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    if "text/html" in request.headers.get("accept", ""):
        return get_templates(request).TemplateResponse(
            request,
            "error.html",
            {"user": None, "message": exc.message, "status_code": exc.status_code},
            status_code=exc.status_code,
        )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def media_url(path: str | None, bucket: str = IMAGES_BUCKET) -> str | None:
    return LocalStorage.public_url(bucket, path)


def create_app(data_dir: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        data_dir: Directory for the database and uploaded files; defaults
            to FITFEED_DATA_DIR or the repository's data directory
    """
    configure_logging()
    data_dir = get_data_dir(data_dir)

    app = FastAPI(
        title="fitfeed",
        description="Share workouts, follow friends and keep each other moving",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = get_db_path(data_dir)
    app.state.storage = LocalStorage(get_storage_dir(data_dir))

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.filters["time_ago"] = time_ago
    templates.env.filters["duration"] = format_duration
    templates.env.filters["media_url"] = media_url
    templates.env.globals["AVATARS_BUCKET"] = AVATARS_BUCKET
    app.state.templates = templates

    app.add_exception_handler(FitfeedError, handle_fitfeed_error)

    app.include_router(auth.router)
    app.include_router(feed.router)
    app.include_router(workouts.router)
    app.include_router(profile.router)
    app.include_router(exercises.router)

    @app.get("/", response_class=HTMLResponse)
    async def root(request: Request):
        """Root redirect to the feed."""
        return RedirectResponse(url="/feed", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/media/{bucket}/{path:path}")
    async def media(
        request: Request, bucket: str, path: str, user: Profile = Depends(require_user)
    ):
        """Serve an uploaded avatar or workout image.

        Workout images follow the visibility of their workout.
        """
        if bucket == IMAGES_BUCKET:
            workout = await WorkoutRepository(request.app.state.db_path).get_visible(
                path, user.id
            )
            if workout is None or workout.attachment_url != path:
                raise NotFoundError("File not found")
        storage: LocalStorage = request.app.state.storage
        return FileResponse(storage.file_path(bucket, path))

    return app
