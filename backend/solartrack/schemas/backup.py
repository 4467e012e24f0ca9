from enum import Enum

from pydantic import Field

from solartrack.schemas.domain import Project, WireModel, Worker, WorkLog


class RestoreMode(str, Enum):
    replace = "REPLACE"
    merge = "MERGE"

class BackupMeta(WireModel):
    version: int = 0
    timestamp: int = 0
    app_name: str = ""
    exported_by: str = "UNKNOWN"

class BackupData(WireModel):
    projects: list[Project] = Field(default_factory=list)
    logs: list[WorkLog] = Field(default_factory=list)
    workers: list[Worker] = Field(default_factory=list)

class Backup(WireModel):
    meta: BackupMeta
    data: BackupData

class RestoreResult(WireModel):
    mode: RestoreMode
    projects: int
    logs: int
    workers: int
    app_name_matched: bool = True
