"""Routes for the trends chart."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ...services.charting import build_chart_data, has_enough_data
from ...services.repository import LogRepository
from ..deps import open_store, templates

router = APIRouter()


def _chart_points() -> list[dict]:
    with open_store() as store:
        entries = LogRepository.from_store(store).all()
    return [point.model_dump() for point in build_chart_data(entries)]


@router.get("/", response_class=HTMLResponse)
async def chart_page(request: Request):
    """Symptom and stress trends."""
    points = _chart_points()

    return templates.TemplateResponse(
        request,
        "chart.html",
        {
            "points": points,
            "enough_data": has_enough_data(points),
        },
    )


@router.get("/api/data")
async def chart_data():
    """API endpoint for chart data."""
    points = _chart_points()
    return JSONResponse(content={"points": points, "enough_data": has_enough_data(points)})
