"""Routes for log entries."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ...models.log import LOG_TYPES, SEVERITY_LEVELS, BristolType
from ...services.logbook import Logbook
from ...services.repository import LogRepository
from ...utils.exceptions import IbsTrackerError, StressAlreadyLoggedError
from ..deps import open_store, templates

router = APIRouter()

STRESS_DONE_NOTICE = "You've already logged your stress for today. Come back tomorrow!"


def _redirect_to_list(notice: Optional[str] = None) -> RedirectResponse:
    url = "/logs/"
    if notice:
        url += f"?notice={quote(notice)}"
    return RedirectResponse(url=url, status_code=303)


def _render_form(
    request: Request,
    log_type: str,
    entry=None,
    error: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "logs/form.html",
        {
            "log_type": log_type,
            "entry": entry,
            "error": error,
            "bristol_types": list(BristolType),
            "severities": SEVERITY_LEVELS,
        },
        status_code=status_code,
    )


def _handle_save(request: Request, log_type: str, entry_id: Optional[str], save) -> Response:
    """Run a save handler and turn its outcome into a response."""
    with open_store() as store:
        repository = LogRepository.from_store(store)
        try:
            save(Logbook(repository))
        except StressAlreadyLoggedError as exc:
            return _redirect_to_list(str(exc))
        except IbsTrackerError as exc:
            entry = repository.get(entry_id) if entry_id else None
            return _render_form(request, log_type, entry=entry, error=str(exc), status_code=400)

    return _redirect_to_list()


@router.get("/", response_class=HTMLResponse)
async def list_logs(
    request: Request,
    notice: Optional[str] = Query(default=None),
):
    """Activity log, newest first."""
    with open_store() as store:
        repository = LogRepository.from_store(store)
        entries = repository.sorted_desc()
        stress_today = repository.stress_logged_today()

    return templates.TemplateResponse(
        request,
        "logs/list.html",
        {
            "entries": entries,
            "notice": notice,
            "stress_logged_today": stress_today,
        },
    )


@router.get("/new/{log_type}", response_class=HTMLResponse)
async def new_log_form(request: Request, log_type: str):
    """Show the form for a new entry."""
    if log_type not in LOG_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown log type: {log_type}")

    if log_type == "stress":
        with open_store() as store:
            if LogRepository.from_store(store).stress_logged_today():
                return _redirect_to_list(STRESS_DONE_NOTICE)

    return _render_form(request, log_type)


@router.get("/{entry_id}/edit", response_class=HTMLResponse)
async def edit_log_form(request: Request, entry_id: str):
    """Show the form for editing an entry."""
    with open_store() as store:
        entry = LogRepository.from_store(store).get(entry_id)

    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")

    return _render_form(request, entry.type, entry=entry)


@router.post("/symptom")
async def save_symptom(
    request: Request,
    entry_id: Optional[str] = Form(default=None),
    when: Optional[str] = Form(default=None),
    bowel_movement: Optional[str] = Form(default=None),
    cramps_severity: int = Form(default=0),
    bloating_severity: int = Form(default=0),
    urgency: bool = Form(default=False),
    notes: Optional[str] = Form(default=None),
):
    """Create or update a symptom entry."""
    return _handle_save(
        request,
        "symptom",
        entry_id,
        lambda logbook: logbook.save_symptom(
            entry_id=entry_id,
            when=when if entry_id else None,
            bowel_movement=bowel_movement or None,
            cramps_severity=cramps_severity,
            bloating_severity=bloating_severity,
            urgency=urgency,
            notes=notes,
        ),
    )


@router.post("/intake")
async def save_intake(
    request: Request,
    item: str = Form(default=""),
    entry_id: Optional[str] = Form(default=None),
    when: Optional[str] = Form(default=None),
    quantity: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
):
    """Create or update an intake entry."""
    return _handle_save(
        request,
        "intake",
        entry_id,
        lambda logbook: logbook.save_intake(
            entry_id=entry_id,
            when=when if entry_id else None,
            item=item,
            quantity=quantity,
            notes=notes,
        ),
    )


@router.post("/stress")
async def save_stress(
    request: Request,
    level: int = Form(default=0),
    entry_id: Optional[str] = Form(default=None),
    when: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
):
    """Create or update a stress entry."""
    return _handle_save(
        request,
        "stress",
        entry_id,
        lambda logbook: logbook.save_stress(
            entry_id=entry_id,
            when=when if entry_id else None,
            level=level,
            notes=notes,
        ),
    )


@router.post("/{entry_id}/delete")
async def delete_log(entry_id: str):
    """Delete an entry. Unknown ids are ignored."""
    with open_store() as store:
        Logbook(LogRepository.from_store(store)).delete(entry_id)

    return _redirect_to_list()
