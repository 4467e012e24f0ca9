from fastapi import APIRouter, Depends, HTTPException

from solartrack.core.deps import get_store
from solartrack.crud.workers import add_worker, get_worker, list_workers, update_worker
from solartrack.schemas.domain import Worker
from solartrack.schemas.entries import WorkerIn, WorkerUpdate
from solartrack.services.storage import KeyValueStore

router = APIRouter()

@router.get("", response_model=list[Worker], response_model_exclude_none=True)
def get_workers(store: KeyValueStore = Depends(get_store)):
    return list_workers(store)

@router.post("", response_model=Worker, response_model_exclude_none=True)
def post_worker(data: WorkerIn, store: KeyValueStore = Depends(get_store)):
    return add_worker(store, data)

@router.put("/{worker_id}", response_model=Worker, response_model_exclude_none=True)
def put_worker(worker_id: str, data: WorkerUpdate, store: KeyValueStore = Depends(get_store)):
    w = get_worker(store, worker_id)
    if not w:
        raise HTTPException(status_code=404, detail="Worker not found")
    return update_worker(store, w, data)
