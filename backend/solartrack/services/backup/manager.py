"""
Backup envelope: create, parse (with legacy payload support) and restore.

A restore validates the whole payload before touching the store and then
writes projects, logs and workers together.
"""
import json
from typing import Any

from pydantic import ValidationError

from solartrack.core.config import settings
from solartrack.core.logging import logger
from solartrack.schemas.backup import Backup, BackupData, BackupMeta, RestoreMode, RestoreResult
from solartrack.schemas.domain import Project, Worker, WorkLog
from solartrack.services.backup.merge import merge_entities
from solartrack.services.storage import (
    KEY_LAST_WORKER,
    KEY_LOGS,
    KEY_PROJECTS,
    KEY_WORKERS,
    KeyValueStore,
)
from solartrack.services.timeutils import now_ms


class BackupFormatError(ValueError):
    pass


def create_backup(store: KeyValueStore, exported_by: str | None = None) -> Backup:
    data = BackupData(
        projects=[Project.model_validate(p) for p in store.get(KEY_PROJECTS, [])],
        logs=[WorkLog.model_validate(l) for l in store.get(KEY_LOGS, [])],
        workers=[Worker.model_validate(w) for w in store.get(KEY_WORKERS, [])],
    )
    backup = Backup(
        meta=BackupMeta(
            version=settings.BACKUP_SCHEMA_VERSION,
            timestamp=now_ms(),
            app_name=settings.APP_NAME,
            exported_by=exported_by or store.get(KEY_LAST_WORKER, "UNKNOWN"),
        ),
        data=data,
    )
    logger.info(
        "backup_created",
        projects=len(data.projects),
        logs=len(data.logs),
        workers=len(data.workers),
    )
    return backup


def parse_backup(raw: str | bytes | dict[str, Any]) -> Backup:
    if isinstance(raw, (str, bytes)):
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("backup_malformed_json", error=str(e))
            raise BackupFormatError(f"Backup is not valid JSON: {e}") from e
    else:
        payload = raw

    if not isinstance(payload, dict):
        raise BackupFormatError("Backup must be a JSON object")

    if "data" not in payload:
        # legacy bare payload: {projects, logs, workers}
        payload = {"meta": {"version": 0}, "data": payload}

    try:
        return Backup.model_validate(payload)
    except ValidationError as e:
        logger.error("backup_invalid", errors=e.error_count())
        raise BackupFormatError(f"Backup does not match the expected format: {e}") from e


def restore_backup(store: KeyValueStore, backup: Backup, mode: RestoreMode) -> RestoreResult:
    matched = backup.meta.app_name == settings.APP_NAME
    if not matched:
        logger.warning("backup_app_name_mismatch", app_name=backup.meta.app_name, expected=settings.APP_NAME)

    incoming = {
        KEY_PROJECTS: [p.to_wire() for p in backup.data.projects],
        KEY_LOGS: [l.to_wire() for l in backup.data.logs],
        KEY_WORKERS: [w.to_wire() for w in backup.data.workers],
    }

    if mode == RestoreMode.replace:
        staged = incoming
    else:
        staged = {key: merge_entities(store.get(key, []), items) for key, items in incoming.items()}

    store.set_many(staged)

    result = RestoreResult(
        mode=mode,
        projects=len(staged[KEY_PROJECTS]),
        logs=len(staged[KEY_LOGS]),
        workers=len(staged[KEY_WORKERS]),
        app_name_matched=matched,
    )
    logger.info("backup_restored", **result.model_dump(mode="json"))
    return result
