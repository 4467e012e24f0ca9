"""
Wire-compatible domain entities.

Field names serialise in camelCase and enums keep their exact string values,
so a stored blob or a backup file round-trips without translation.
"""
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ProjectMode(str, Enum):
    flexible = "A"  # size chosen per work event
    strict = "B"  # sizes fixed at project setup

class TableSize(str, Enum):
    small = "S"
    medium = "M"
    large = "L"

class TableStatus(str, Enum):
    pending = "PENDING"
    in_progress = "IN_PROGRESS"
    done = "DONE"
    issue = "ISSUE"

class WorkType(str, Enum):
    table = "TABLE"
    hourly = "HOURLY"

class WorkerRole(str, Enum):
    leader = "LEADER"
    stringer = "STRINGER"
    monteur = "MONTEUR"
    helper = "HELPER"

class LogKind(str, Enum):
    work = "WORK"
    message = "MESSAGE"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Table(WireModel):
    id: str
    label: str
    order_index: int = 0
    size: TableSize | None = None
    status: TableStatus = TableStatus.pending

    @model_validator(mode="before")
    @classmethod
    def _label_from_id(cls, data: Any) -> Any:
        # early exports stored tables without a label
        if isinstance(data, dict) and not data.get("label") and data.get("id"):
            data = {**data, "label": data["id"]}
        return data


class StringsPerTable(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    small: float | None = Field(default=None, alias="S")
    medium: float | None = Field(default=None, alias="M")
    large: float | None = Field(default=None, alias="L")
    fallback: float | None = Field(default=None, alias="default")

    def for_size(self, size: TableSize) -> float | None:
        if size == TableSize.small:
            return self.small
        if size == TableSize.medium:
            return self.medium
        return self.large


class ProjectSettings(WireModel):
    strings_per_table: StringsPerTable = Field(default_factory=StringsPerTable)
    kwp_per_string: float | None = None
    currency: str = "EUR"


class Project(WireModel):
    id: str
    name: str
    mode: ProjectMode = ProjectMode.flexible
    created_at: int = 0
    total_tables: int | None = None
    completed_tables: int = 0
    tables: list[Table] | None = None
    settings: ProjectSettings | None = None


class LegacyTableIdModel(WireModel):
    """Accepts the old singular `tableId` wherever `tableIds` is expected."""

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_table_id(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        legacy = data.pop("tableId", None) or data.pop("table_id", None)
        if data.get("tableIds") is None and data.get("table_ids") is None and legacy:
            data["tableIds"] = [legacy]
        return data


class WorkLog(LegacyTableIdModel):
    id: str
    project_id: str
    worker_id: str
    type: WorkType
    # single normalised list; legacy singular tableId is folded in on input
    table_ids: list[str] | None = None
    size: TableSize | None = None
    status: TableStatus | None = None
    note: str | None = None
    timestamp: int
    start_time: int | None = None
    end_time: int | None = None
    duration_minutes: float = 0.0
    synced: bool = False

    @property
    def table_count(self) -> int:
        return len(self.table_ids or [])

    @property
    def kind(self) -> LogKind:
        if self.type == WorkType.hourly and not self.duration_minutes and (self.note or "").strip():
            return LogKind.message
        return LogKind.work

    @property
    def is_message(self) -> bool:
        return self.kind == LogKind.message


class Worker(WireModel):
    id: str
    name: str
    role: WorkerRole = WorkerRole.helper
    rate_hourly: float | None = None
    rate_string: float | None = None
    is_active: bool = True
    avatar_color: str | None = None
