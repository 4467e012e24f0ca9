"""
Conversion rules: table size -> strings -> kWp, and work log -> strings.

Every function takes optional per-project settings; anything the project
does not override falls back to the constants below.
"""
from typing import Iterable

from solartrack.schemas.domain import ProjectSettings, Table, TableSize, WorkLog, WorkType

STRINGS_PER_SIZE: dict[TableSize, float] = {
    TableSize.small: 1.0,
    TableSize.medium: 1.5,
    TableSize.large: 2.0,
}
DEFAULT_STRINGS = 1.5
DEFAULT_KWP_PER_STRING = 19.6


def strings_for_size(size: TableSize | None, settings: ProjectSettings | None = None) -> float:
    per_table = settings.strings_per_table if settings else None
    if size is None:
        if per_table and per_table.fallback is not None:
            return per_table.fallback
        return DEFAULT_STRINGS

    if per_table:
        v = per_table.for_size(size)
        if v is not None:
            return v
        if per_table.fallback is not None:
            return per_table.fallback
    return STRINGS_PER_SIZE.get(size, DEFAULT_STRINGS)


def strings_to_kwp(strings: float, settings: ProjectSettings | None = None) -> float:
    factor = settings.kwp_per_string if settings and settings.kwp_per_string is not None else DEFAULT_KWP_PER_STRING
    return strings * factor


def log_strings(log: WorkLog, settings: ProjectSettings | None = None) -> float:
    if log.type != WorkType.table:
        return 0.0
    return log.table_count * strings_for_size(log.size, settings)


def total_strings_from_tables(tables: Iterable[Table], settings: ProjectSettings | None = None) -> float:
    return sum((strings_for_size(t.size, settings) for t in tables), 0.0)
