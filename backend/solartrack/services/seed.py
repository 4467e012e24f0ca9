from sqlalchemy.orm import Session

from solartrack.db.session import SessionLocal
from solartrack.core.logging import logger
from solartrack.crud.logs import add_note
from solartrack.crud.projects import create_project, list_projects
from solartrack.crud.workers import add_worker, list_workers
from solartrack.schemas.domain import WorkerRole
from solartrack.schemas.entries import NoteIn, WorkerIn
from solartrack.services.storage import KeyValueStore, SqlKeyValueStore

DEMO_WORKERS = [
    ("CURRENT_USER", WorkerIn(name="Já", role=WorkerRole.leader, avatar_color="#f59e0b")),
    ("w2", WorkerIn(name="Karel Novák", role=WorkerRole.monteur, avatar_color="#3b82f6", rate_hourly=15)),
    ("w3", WorkerIn(name="Petr Svoboda", role=WorkerRole.stringer, avatar_color="#22c55e", rate_hourly=18)),
]

def seed_store(store: KeyValueStore) -> None:
    if not list_workers(store):
        for worker_id, data in DEMO_WORKERS:
            add_worker(store, data, worker_id=worker_id)
    if not list_projects(store):
        p = create_project(store, "FVE Demo Park A")
        add_note(store, NoteIn(channel_id=p.id, worker_id="w2", text="Na sekci 2E chybí profily."))
        logger.info("demo_seeded", project_id=p.id)

def seed_demo():
    db: Session = SessionLocal()
    try:
        seed_store(SqlKeyValueStore(db))
    finally:
        db.close()
