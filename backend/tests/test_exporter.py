import datetime as dt

import pandas as pd
from conftest import NOW, TZ, ts

from solartrack.schemas.domain import Project, Worker, WorkLog
from solartrack.schemas.reports import TimeRange
from solartrack.services.exports.exporter import (
    CSV_HEADER,
    export_logs_csv,
    export_logs_xlsx,
    export_performance_pdf,
)
from solartrack.services.reports.performance import calculate_performance


def _logs():
    return [
        WorkLog.model_validate(dict(
            id="a", projectId="p1", workerId="w1", type="TABLE", tableIds=["R1-01", "R1-02"],
            size="L", status="DONE", timestamp=ts(NOW), durationMinutes=90, note="hotovo, bez vad\nOK",
        )),
        WorkLog.model_validate(dict(
            id="b", projectId="p1", workerId="ghost", type="HOURLY", timestamp=ts(NOW - dt.timedelta(hours=1)),
            durationMinutes=7.5,
        )),
        WorkLog.model_validate(dict(
            id="c", projectId="p2", workerId="w1", type="HOURLY", timestamp=ts(NOW), durationMinutes=60,
        )),
    ]


def test_export_logs_csv():
    out = export_logs_csv(Project(id="p1", name="Park A"), _logs(), [Worker(id="w1", name="Karel")], tz=TZ)
    lines = out.strip("\n").split("\n")
    assert lines[0] == CSV_HEADER
    assert len(lines) == 3
    assert lines[1] == f'{ts(NOW)},2025-06-11,15:00:00,Karel,TABLE,"R1-01;R1-02",L,DONE,90,"hotovo  bez vad OK"'
    assert lines[2].endswith(',ghost,HOURLY,"",,,7.5,""')


def test_export_logs_xlsx(tmp_path):
    out = export_logs_xlsx(_logs(), tmp_path / "x" / "logs.xlsx", tz=TZ)
    df = pd.read_excel(out, engine="openpyxl")
    assert list(df.columns) == CSV_HEADER.split(",")
    assert len(df) == 3
    assert df.loc[0, "TableIDs"] == "R1-01;R1-02"


def test_export_performance_pdf(tmp_path):
    perf = calculate_performance(_logs(), [Worker(id="w1", name="Karel")], TimeRange.all, now=NOW, tz=TZ)
    out = export_performance_pdf("Park A", perf, tmp_path / "perf.pdf")
    assert out.exists()
    assert out.read_bytes().startswith(b"%PDF")
