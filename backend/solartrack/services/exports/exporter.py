import re
from pathlib import Path
from typing import Iterable

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm

from solartrack.schemas.domain import Project, Worker, WorkLog
from solartrack.schemas.reports import ProjectPerformance
from solartrack.services.timeutils import from_ms

CSV_HEADER = "Timestamp,Date,Time,Worker,Type,TableIDs,Size,Status,Duration(min),Note"

_NOTE_UNSAFE_RE = re.compile(r"[\r\n,]")


def _clean_note(note: str | None) -> str:
    return _NOTE_UNSAFE_RE.sub(" ", note or "").replace('"', "'")


def _fmt_num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def _log_row(log: WorkLog, names: dict[str, str], tz: str | None) -> dict:
    ts = from_ms(log.timestamp, tz)
    return {
        "Timestamp": log.timestamp,
        "Date": ts.strftime("%Y-%m-%d"),
        "Time": ts.strftime("%H:%M:%S"),
        "Worker": names.get(log.worker_id, log.worker_id),
        "Type": log.type.value,
        "TableIDs": ";".join(log.table_ids or []),
        "Size": log.size.value if log.size else "",
        "Status": log.status.value if log.status else "",
        "Duration(min)": _fmt_num(log.duration_minutes or 0),
        "Note": _clean_note(log.note),
    }


def export_logs_csv(
    project: Project,
    logs: Iterable[WorkLog],
    workers: Iterable[Worker] = (),
    tz: str | None = None,
) -> str:
    names = {w.id: w.name for w in workers}
    lines = [CSV_HEADER]
    for log in logs:
        if log.project_id != project.id:
            continue
        r = _log_row(log, names, tz)
        lines.append(
            f'{r["Timestamp"]},{r["Date"]},{r["Time"]},{r["Worker"]},{r["Type"]},'
            f'"{r["TableIDs"]}",{r["Size"]},{r["Status"]},{r["Duration(min)"]},"{r["Note"]}"'
        )
    return "\n".join(lines) + "\n"


def export_logs_xlsx(
    logs: Iterable[WorkLog],
    out_path: Path,
    workers: Iterable[Worker] = (),
    tz: str | None = None,
) -> Path:
    names = {w.id: w.name for w in workers}
    df = pd.DataFrame([_log_row(l, names, tz) for l in logs], columns=CSV_HEADER.split(","))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(out_path, engine="xlsxwriter") as w:
        df.to_excel(w, index=False, sheet_name="logs")
    return out_path


def export_performance_pdf(project_name: str, perf: ProjectPerformance, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(out_path), pagesize=A4)
    width, height = A4
    y = height - 20*mm
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20*mm, y, f"Performance Report: {project_name}")
    y -= 10*mm
    c.setFont("Helvetica", 11)
    lines = [
        f"Hours: {perf.hours:.2f}",
        f"Tables: {perf.tables}",
        f"Strings: {perf.strings:.2f}",
        f"kWp: {perf.kwp:.2f}",
        f"Strings/hour: {perf.strings_per_hour:.2f}",
        f"Tables/day: {perf.tables_per_day:.2f}",
    ]
    for ln in lines:
        c.drawString(20*mm, y, ln)
        y -= 7*mm

    y -= 5*mm
    c.setFont("Helvetica-Bold", 12)
    c.drawString(20*mm, y, "Workers")
    y -= 8*mm
    c.setFont("Helvetica", 10)
    for w in perf.workers:
        if y < 20*mm:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - 20*mm
        c.drawString(20*mm, y, f"{w.worker_name}: {w.strings:.2f} strings, {w.tables} tables, {w.hours:.2f} h")
        y -= 6*mm
    c.showPage()
    c.save()
    return out_path
