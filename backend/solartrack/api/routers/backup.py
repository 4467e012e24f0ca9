from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from solartrack.core.deps import get_store
from solartrack.schemas.backup import Backup, RestoreMode, RestoreResult
from solartrack.services.backup.manager import BackupFormatError, create_backup, parse_backup, restore_backup
from solartrack.services.storage import KeyValueStore

router = APIRouter()

@router.get("/export", response_model=Backup, response_model_exclude_none=True)
def export_backup(exported_by: str | None = Query(None), store: KeyValueStore = Depends(get_store)):
    return create_backup(store, exported_by)

@router.post("/import", response_model=RestoreResult)
def import_backup(
    mode: RestoreMode = Query(RestoreMode.merge),
    file: UploadFile = File(...),
    store: KeyValueStore = Depends(get_store),
):
    try:
        backup = parse_backup(file.file.read())
    except BackupFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return restore_backup(store, backup, mode)
