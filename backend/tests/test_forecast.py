import datetime as dt

from conftest import NOW, TZ, ts

from solartrack.schemas.domain import Project, WorkLog
from solartrack.services.reports.forecast import forecast_completion


def _project(**kw) -> Project:
    return Project(id="p1", name="FVE Test", **kw)


def _table_log(log_id, when, n, project_id="p1") -> WorkLog:
    return WorkLog.model_validate(
        dict(
            id=log_id,
            projectId=project_id,
            workerId="w1",
            type="TABLE",
            tableIds=[f"t{log_id}_{i}" for i in range(n)],
            timestamp=ts(when),
        )
    )


def test_no_target():
    f = forecast_completion(_project(), [], now=NOW, tz=TZ)
    assert (f.tables_remaining, f.estimated_days_left, f.estimated_completion_date) == (0, 0, None)


def test_already_complete():
    f = forecast_completion(_project(total_tables=100, completed_tables=100), [], now=NOW, tz=TZ)
    assert f.tables_remaining == 0
    assert f.estimated_days_left == 0
    assert f.estimated_completion_date == NOW.date()


def test_low_velocity_cannot_estimate():
    logs = [_table_log("a", NOW - dt.timedelta(days=1), 0)]
    f = forecast_completion(_project(total_tables=50, completed_tables=10), logs, now=NOW, tz=TZ)
    assert (f.tables_remaining, f.estimated_days_left, f.estimated_completion_date) == (40, -1, None)


def test_forecast_from_trailing_week():
    logs = [
        _table_log("a", NOW - dt.timedelta(days=1), 10),
        _table_log("b", NOW - dt.timedelta(days=3), 4),
        # outside the window / other project
        _table_log("old", NOW - dt.timedelta(days=8), 100),
        _table_log("other", NOW - dt.timedelta(days=1), 100, project_id="p2"),
    ]
    f = forecast_completion(_project(total_tables=30, completed_tables=19), logs, now=NOW, tz=TZ)
    # 14 tables / 7 days = 2 per day, 11 remaining -> 6 days
    assert f.tables_remaining == 11
    assert f.estimated_days_left == 6
    assert f.estimated_completion_date == dt.date(2025, 6, 17)
