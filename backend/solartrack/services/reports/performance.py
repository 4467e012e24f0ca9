"""
Performance aggregation over work logs.

Everything here is recomputed from the full log list on every call; there is
no incremental state.
"""
import datetime as dt
from typing import Iterable

from solartrack.schemas.domain import ProjectSettings, Worker, WorkLog, WorkType
from solartrack.schemas.reports import (
    PerformanceSnapshot,
    ProjectPerformance,
    TimeRange,
    WorkerPerformance,
)
from solartrack.services.rules import log_strings, strings_to_kwp
from solartrack.services.timeutils import local_date, now_local, start_of_day, start_of_week, to_ms


def create_performance_snapshot(
    logs: Iterable[WorkLog],
    settings: ProjectSettings | None = None,
    tz: str | None = None,
) -> PerformanceSnapshot:
    hours = 0.0
    strings = 0.0
    tables = 0
    active_days: set[dt.date] = set()

    for log in logs:
        hours += (log.duration_minutes or 0) / 60
        if log.type == WorkType.table:
            strings += log_strings(log, settings)
            tables += log.table_count
        active_days.add(local_date(log.timestamp, tz))

    return PerformanceSnapshot(
        hours=hours,
        strings=strings,
        tables=tables,
        strings_per_hour=strings / hours if hours > 0 else 0.0,
        tables_per_day=tables / max(1, len(active_days)),
        kwp=strings_to_kwp(strings, settings),
    )


def range_start_ms(time_range: TimeRange, now: dt.datetime | None = None, tz: str | None = None) -> int | None:
    now = now or now_local(tz)
    if time_range == TimeRange.day:
        return to_ms(start_of_day(now))
    if time_range == TimeRange.week:
        return to_ms(start_of_week(now))
    return None


def filter_by_range(
    logs: Iterable[WorkLog],
    time_range: TimeRange,
    now: dt.datetime | None = None,
    tz: str | None = None,
) -> list[WorkLog]:
    since = range_start_ms(time_range, now, tz)
    if since is None:
        return list(logs)
    return [l for l in logs if l.timestamp >= since]


def calculate_performance(
    logs: Iterable[WorkLog],
    workers: Iterable[Worker],
    time_range: TimeRange = TimeRange.all,
    settings: ProjectSettings | None = None,
    now: dt.datetime | None = None,
    tz: str | None = None,
) -> ProjectPerformance:
    filtered = filter_by_range(logs, time_range, now, tz)
    overall = create_performance_snapshot(filtered, settings, tz)

    by_worker: dict[str, list[WorkLog]] = {}
    for log in filtered:
        by_worker.setdefault(log.worker_id, []).append(log)

    names = {w.id: w.name for w in workers}
    rows = [
        WorkerPerformance(
            worker_id=worker_id,
            worker_name=names.get(worker_id, worker_id),
            **create_performance_snapshot(wlogs, settings, tz).model_dump(),
        )
        for worker_id, wlogs in by_worker.items()
    ]
    # reverse=True keeps insertion order for ties
    rows.sort(key=lambda r: r.strings, reverse=True)

    return ProjectPerformance(
        **overall.model_dump(),
        completed_percent=0.0,  # project totals come from the caller
        workers=rows,
    )


def today_snapshot(
    logs: Iterable[WorkLog],
    settings: ProjectSettings | None = None,
    now: dt.datetime | None = None,
    tz: str | None = None,
) -> PerformanceSnapshot:
    return create_performance_snapshot(filter_by_range(logs, TimeRange.day, now, tz), settings, tz)


def work_entries(logs: Iterable[WorkLog]) -> list[WorkLog]:
    return [l for l in logs if not l.is_message]


def messages(logs: Iterable[WorkLog], channel_id: str | None = None) -> list[WorkLog]:
    out = [l for l in logs if l.is_message and (channel_id is None or l.project_id == channel_id)]
    return sorted(out, key=lambda l: l.timestamp)
