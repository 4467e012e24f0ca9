import uuid

from solartrack.core.logging import logger
from solartrack.schemas.domain import Worker
from solartrack.schemas.entries import WorkerIn, WorkerUpdate
from solartrack.services.storage import KEY_WORKERS, KeyValueStore

def list_workers(store: KeyValueStore) -> list[Worker]:
    return [Worker.model_validate(w) for w in store.get(KEY_WORKERS, [])]

def get_worker(store: KeyValueStore, worker_id: str) -> Worker | None:
    return next((w for w in list_workers(store) if w.id == worker_id), None)

def add_worker(store: KeyValueStore, data: WorkerIn, worker_id: str | None = None) -> Worker:
    w = Worker(id=worker_id or uuid.uuid4().hex, **data.model_dump())
    store.set(KEY_WORKERS, [x.to_wire() for x in list_workers(store)] + [w.to_wire()])
    logger.info("worker_added", worker_id=w.id, role=w.role.value)
    return w

def update_worker(store: KeyValueStore, w: Worker, data: WorkerUpdate) -> Worker:
    changes = data.model_dump(exclude_unset=True)
    w = w.model_copy(update=changes)
    store.set(KEY_WORKERS, [(w if x.id == w.id else x).to_wire() for x in list_workers(store)])
    logger.info("worker_updated", worker_id=w.id, fields=sorted(changes))
    return w
