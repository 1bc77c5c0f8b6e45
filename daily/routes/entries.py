from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from ..errors import DailyError
from ..logs import LogContext
from ..models import Entry, Order, normalize_date, utc_now
from ..repository import EntryRepository
from ..services.entry_svc import RECENT_DAYS, entry_from_form, list_recent

router = APIRouter()


class EntryCreate(BaseModel):
    date: Optional[dt.datetime] = None
    type: str = ""
    note: str = ""
    value: float = Field(0.0, allow_inf_nan=False)
    data: Optional[dict[str, Any]] = None


def get_repo(request: Request) -> EntryRepository:
    return request.app.state.repo


@router.get("/api/entries/recent")
def api_entries_recent(days: int = Query(RECENT_DAYS, ge=0), repo: EntryRepository = Depends(get_repo)):
    try:
        items = list_recent(repo, days)
        return {"items": [e.to_dict() for e in items]}
    except DailyError as e:
        LogContext("LIST_RECENT").write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"could not list entries: {e}")


@router.get("/api/entries/range")
def api_entries_range(
    start: dt.datetime,
    end: dt.datetime,
    order: Order = Order.DESCENDING,
    repo: EntryRepository = Depends(get_repo),
):
    if normalize_date(start) > normalize_date(end):
        raise HTTPException(status_code=400, detail="start must not be after end")
    try:
        items = repo.find_between(start, end, order)
        return {"items": [e.to_dict() for e in items]}
    except DailyError as e:
        LogContext("LIST_RANGE").write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"could not list entries: {e}")


@router.get("/api/entries/{entry_id}")
def api_entry_get(entry_id: str, repo: EntryRepository = Depends(get_repo)):
    try:
        entry = repo.get(entry_id)
    except DailyError as e:
        log = LogContext("GET_ENTRY")
        log.set_entity(entry_id)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"could not get entry: {e}")
    if entry is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return entry.to_dict()


@router.post("/api/entries/create", status_code=201)
def api_entry_create(body: EntryCreate, repo: EntryRepository = Depends(get_repo)):
    log = LogContext("CREATE_ENTRY")
    log.set_payload({"type": body.type, "value": body.value})
    entry = Entry(
        date=normalize_date(body.date) if body.date else utc_now(),
        type=body.type,
        note=body.note,
        value=body.value,
        data=body.data or {},
    )
    try:
        entry_id = repo.create(entry)
    except DailyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"could not create new entry: {e}")
    log.set_entity(entry_id)
    log.write("OK")
    return {"message": "ok", "id": entry_id}


@router.post("/new")
async def form_entry_create(request: Request):
    log = LogContext("CREATE_ENTRY_FORM")
    form = await request.form()
    try:
        entry = entry_from_form(form.multi_items())
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=f"could not parse entry: {e}")

    repo = get_repo(request)
    try:
        entry_id = await run_in_threadpool(repo.create, entry)
    except DailyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"could not create new entry: {e}")
    log.set_entity(entry_id)
    log.write("OK")
    return RedirectResponse(f"/api/entries/{entry_id}", status_code=303)
