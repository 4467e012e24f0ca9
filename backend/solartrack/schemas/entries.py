from pydantic import Field

from solartrack.schemas.domain import (
    LegacyTableIdModel,
    ProjectMode,
    ProjectSettings,
    Table,
    TableSize,
    TableStatus,
    WireModel,
    WorkerRole,
    WorkType,
)


class ProjectCreate(WireModel):
    name: str = Field(..., min_length=1)
    # either structured tables or raw text to parse
    tables: list[Table] | None = None
    tables_text: str | None = None
    settings: ProjectSettings | None = None

class ProjectUpdate(WireModel):
    name: str | None = None
    total_tables: int | None = None
    settings: ProjectSettings | None = None

class TablesAppend(WireModel):
    tables: list[Table] | None = None
    tables_text: str | None = None

class TablesParseIn(WireModel):
    text: str = ""

class TablesParseOut(WireModel):
    tables: list[Table]
    detected_mode: ProjectMode

class TableRangeIn(WireModel):
    prefix: str = ""
    start: int | str | None = None
    end: int | str | None = None
    suffix: str = ""
    size: TableSize | None = None
    offset: int = 0

class WorkLogIn(LegacyTableIdModel):
    project_id: str
    worker_id: str
    type: WorkType
    table_ids: list[str] | None = None
    size: TableSize | None = None
    status: TableStatus | None = None
    note: str | None = None
    start_time: int | None = None
    end_time: int | None = None
    duration_minutes: float = 0.0

class WorkLogUpdate(LegacyTableIdModel):
    worker_id: str | None = None
    table_ids: list[str] | None = None
    size: TableSize | None = None
    status: TableStatus | None = None
    note: str | None = None
    start_time: int | None = None
    end_time: int | None = None
    duration_minutes: float | None = None

class NoteIn(WireModel):
    # project id, or "dm_<a>_<b>" for a direct conversation
    channel_id: str
    worker_id: str
    text: str = Field(..., min_length=1)

class WorkerIn(WireModel):
    name: str = Field(..., min_length=1)
    role: WorkerRole = WorkerRole.helper
    rate_hourly: float | None = None
    rate_string: float | None = None
    is_active: bool = True
    avatar_color: str | None = None

class WorkerUpdate(WireModel):
    name: str | None = None
    role: WorkerRole | None = None
    rate_hourly: float | None = None
    rate_string: float | None = None
    is_active: bool | None = None
    avatar_color: str | None = None
