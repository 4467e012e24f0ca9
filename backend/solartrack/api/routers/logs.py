from fastapi import APIRouter, Depends, HTTPException, Query

from solartrack.core.deps import get_store
from solartrack.crud.logs import add_log, add_note, get_log, list_logs, list_messages, update_log
from solartrack.schemas.domain import WorkLog
from solartrack.schemas.entries import NoteIn, WorkLogIn, WorkLogUpdate
from solartrack.services.reports.performance import work_entries
from solartrack.services.storage import KeyValueStore

router = APIRouter()

@router.get("", response_model=list[WorkLog], response_model_exclude_none=True)
def get_logs(
    project_id: str | None = Query(None),
    include_messages: bool = Query(False),
    store: KeyValueStore = Depends(get_store),
):
    logs = list_logs(store, project_id)
    return logs if include_messages else work_entries(logs)

@router.post("", response_model=WorkLog, response_model_exclude_none=True)
def post_log(data: WorkLogIn, store: KeyValueStore = Depends(get_store)):
    return add_log(store, data)

@router.put("/{log_id}", response_model=WorkLog, response_model_exclude_none=True)
def put_log(log_id: str, data: WorkLogUpdate, store: KeyValueStore = Depends(get_store)):
    log = get_log(store, log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Log not found")
    return update_log(store, log, data)

@router.get("/notes", response_model=list[WorkLog], response_model_exclude_none=True)
def get_notes(channel_id: str = Query(...), store: KeyValueStore = Depends(get_store)):
    return list_messages(store, channel_id)

@router.post("/notes", response_model=WorkLog, response_model_exclude_none=True)
def post_note(data: NoteIn, store: KeyValueStore = Depends(get_store)):
    return add_note(store, data)
