"""FastAPI web application."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ..services.export import export_filename, export_json
from ..services.repository import LogRepository
from ..utils.config import get_settings
from ..utils.exceptions import EmptyExportError
from ..utils.logging_config import setup_logging
from .deps import open_store
from .routes import chart, logs

setup_logging(get_settings().log_level)

# Create FastAPI app
app = FastAPI(
    title="IBS Tracker",
    description="Log symptoms, food and drink, and daily stress",
    version="0.1.0",
)

# Include routers
app.include_router(logs.router, prefix="/logs", tags=["logs"])
app.include_router(chart.router, prefix="/chart", tags=["chart"])


@app.get("/")
async def home():
    """Home page - redirect to the activity log."""
    return RedirectResponse(url="/logs/", status_code=302)


@app.get("/export")
async def export_data():
    """Download all entries as a JSON file."""
    settings = get_settings()

    with open_store() as store:
        entries = LogRepository.from_store(store).all()

    try:
        payload = export_json(entries)
    except EmptyExportError as exc:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    filename = export_filename(settings.export_prefix)
    return Response(
        content=payload,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
