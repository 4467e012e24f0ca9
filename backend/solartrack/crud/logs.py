import uuid

from solartrack.core.logging import logger
from solartrack.crud.projects import apply_log_to_project, get_project, save_project
from solartrack.schemas.domain import WorkLog, WorkType
from solartrack.schemas.entries import NoteIn, WorkLogIn, WorkLogUpdate
from solartrack.services.reports.performance import messages
from solartrack.services.storage import KEY_LAST_WORKER, KEY_LOGS, KeyValueStore
from solartrack.services.timeutils import now_ms


def list_logs(store: KeyValueStore, project_id: str | None = None) -> list[WorkLog]:
    logs = [WorkLog.model_validate(l) for l in store.get(KEY_LOGS, [])]
    if project_id is not None:
        logs = [l for l in logs if l.project_id == project_id]
    return logs

def _save_logs(store: KeyValueStore, logs: list[WorkLog]) -> None:
    store.set(KEY_LOGS, [l.to_wire() for l in logs])

def get_log(store: KeyValueStore, log_id: str) -> WorkLog | None:
    return next((l for l in list_logs(store) if l.id == log_id), None)


def add_log(store: KeyValueStore, data: WorkLogIn) -> WorkLog:
    log = WorkLog(
        id=uuid.uuid4().hex,
        timestamp=now_ms(),
        synced=False,
        **data.model_dump(),
    )
    # newest first, as the feed shows it
    _save_logs(store, [log] + list_logs(store))
    store.set(KEY_LAST_WORKER, log.worker_id)

    project = get_project(store, log.project_id)
    if project is not None:
        updated = apply_log_to_project(project, log)
        if updated is not project:
            save_project(store, updated)
    logger.info("log_added", log_id=log.id, project_id=log.project_id, type=log.type.value, tables=log.table_count)
    return log


def update_log(store: KeyValueStore, log: WorkLog, data: WorkLogUpdate) -> WorkLog:
    # edits produce a modified copy that needs syncing again
    changes = data.model_dump(exclude_unset=True)
    edited = log.model_copy(update={**changes, "synced": False})
    _save_logs(store, [edited if l.id == log.id else l for l in list_logs(store)])
    logger.info("log_updated", log_id=log.id, fields=sorted(changes))
    return edited


def add_note(store: KeyValueStore, data: NoteIn) -> WorkLog:
    return add_log(
        store,
        WorkLogIn(
            project_id=data.channel_id,
            worker_id=data.worker_id,
            type=WorkType.hourly,
            note=data.text,
            duration_minutes=0,
        ),
    )


def list_messages(store: KeyValueStore, channel_id: str) -> list[WorkLog]:
    return messages(list_logs(store), channel_id)
