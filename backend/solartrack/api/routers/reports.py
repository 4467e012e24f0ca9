from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse

from solartrack.core.deps import get_store
from solartrack.crud.logs import list_logs
from solartrack.crud.projects import get_project, list_projects
from solartrack.crud.workers import get_worker, list_workers
from solartrack.schemas.reports import EarningsSummary, PerformanceSnapshot, ProjectPerformance, TimeRange
from solartrack.services.economics import calculate_earnings
from solartrack.services.exports.exporter import export_performance_pdf
from solartrack.services.files import export_path
from solartrack.services.reports.performance import calculate_performance, today_snapshot, work_entries
from solartrack.services.storage import KeyValueStore

router = APIRouter()


def _scope(store: KeyValueStore, project_id: str | None):
    if project_id is None:
        return None, work_entries(list_logs(store))
    p = get_project(store, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p, work_entries(list_logs(store, project_id))


@router.get("/performance", response_model=ProjectPerformance)
def performance(
    project_id: str | None = Query(None),
    time_range: TimeRange = Query(TimeRange.all),
    store: KeyValueStore = Depends(get_store),
):
    p, logs = _scope(store, project_id)
    perf = calculate_performance(logs, list_workers(store), time_range, p.settings if p else None)
    if p and p.total_tables:
        perf.completed_percent = round(p.completed_tables / p.total_tables * 100, 1)
    return perf

@router.get("/today", response_model=PerformanceSnapshot)
def today(project_id: str | None = Query(None), store: KeyValueStore = Depends(get_store)):
    p, logs = _scope(store, project_id)
    return today_snapshot(logs, p.settings if p else None)

@router.get("/earnings", response_model=EarningsSummary)
def earnings(
    worker_id: str = Query(...),
    project_id: str | None = Query(None),
    store: KeyValueStore = Depends(get_store),
):
    w = get_worker(store, worker_id)
    if not w:
        raise HTTPException(status_code=404, detail="Worker not found")
    _p, logs = _scope(store, project_id)
    return calculate_earnings(logs, w, list_projects(store))

@router.get("/performance/pdf")
def performance_pdf(
    project_id: str = Query(...),
    time_range: TimeRange = Query(TimeRange.all),
    store: KeyValueStore = Depends(get_store),
):
    p, logs = _scope(store, project_id)
    perf = calculate_performance(logs, list_workers(store), time_range, p.settings)
    out = export_performance_pdf(p.name, perf, export_path(f"performance_{p.id}", "pdf"))
    return FileResponse(out, filename=out.name, media_type="application/pdf")
