import datetime as dt
import math
from typing import Iterable

from solartrack.core.config import settings as app_settings
from solartrack.schemas.domain import Project, WorkLog, WorkType
from solartrack.schemas.reports import Forecast
from solartrack.services.reports.performance import create_performance_snapshot
from solartrack.services.timeutils import DAY_MS, now_local, to_ms


def forecast_completion(
    project: Project,
    logs: Iterable[WorkLog],
    now: dt.datetime | None = None,
    tz: str | None = None,
) -> Forecast:
    """
    Project the completion date from the trailing window's velocity.

    estimated_days_left == -1 means "cannot estimate" (velocity too low);
    an unset total_tables yields (0, 0, None), which is not "done".
    """
    if not project.total_tables:
        return Forecast(tables_remaining=0, estimated_days_left=0, estimated_completion_date=None)

    now = now or now_local(tz)
    today = now.date()

    remaining = project.total_tables - project.completed_tables
    if remaining <= 0:
        return Forecast(tables_remaining=0, estimated_days_left=0, estimated_completion_date=today)

    window = app_settings.FORECAST_WINDOW_DAYS
    since = to_ms(now) - window * DAY_MS
    recent = [
        l
        for l in logs
        if l.project_id == project.id and l.type == WorkType.table and not l.is_message and l.timestamp > since
    ]
    velocity = create_performance_snapshot(recent, project.settings, tz).tables / window

    if velocity <= app_settings.FORECAST_MIN_VELOCITY:
        return Forecast(tables_remaining=remaining, estimated_days_left=-1, estimated_completion_date=None)

    days_left = math.ceil(remaining / velocity)
    return Forecast(
        tables_remaining=remaining,
        estimated_days_left=days_left,
        estimated_completion_date=today + dt.timedelta(days=days_left),
    )
