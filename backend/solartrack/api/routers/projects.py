from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse

from solartrack.core.deps import get_store
from solartrack.core.logging import logger
from solartrack.crud.logs import list_logs
from solartrack.crud.projects import (
    append_tables,
    create_project,
    delete_project,
    get_project,
    list_projects,
    save_project,
    update_project,
)
from solartrack.crud.workers import list_workers
from solartrack.schemas.domain import Project, Table
from solartrack.schemas.entries import ProjectCreate, ProjectUpdate, TablesAppend
from solartrack.schemas.reports import Forecast, TableSection
from solartrack.services.exports.exporter import export_logs_csv, export_logs_xlsx
from solartrack.services.files import export_path
from solartrack.services.reports.forecast import forecast_completion
from solartrack.services.storage import KeyValueStore
from solartrack.services.tables.organizer import group_tables_by_section
from solartrack.services.tables.parsers import parse_raw_table_input

router = APIRouter()


def _project_or_404(store: KeyValueStore, project_id: str) -> Project:
    p = get_project(store, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p


def _tables_from(tables: list[Table] | None, text: str | None) -> list[Table]:
    if tables:
        return tables
    parsed, _mode = parse_raw_table_input(text)
    return parsed


@router.get("", response_model=list[Project], response_model_exclude_none=True)
def get_projects(store: KeyValueStore = Depends(get_store)):
    return list_projects(store)

@router.post("", response_model=Project, response_model_exclude_none=True)
def post_project(data: ProjectCreate, store: KeyValueStore = Depends(get_store)):
    return create_project(store, data.name, _tables_from(data.tables, data.tables_text), data.settings)

@router.get("/{project_id}", response_model=Project, response_model_exclude_none=True)
def get_one(project_id: str, store: KeyValueStore = Depends(get_store)):
    return _project_or_404(store, project_id)

@router.put("/{project_id}", response_model=Project, response_model_exclude_none=True)
def put_project(project_id: str, data: ProjectUpdate, store: KeyValueStore = Depends(get_store)):
    return update_project(store, _project_or_404(store, project_id), data)

@router.delete("/{project_id}")
def remove_project(project_id: str, store: KeyValueStore = Depends(get_store)):
    if not delete_project(store, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"status": "ok"}


@router.post("/{project_id}/tables", response_model=Project, response_model_exclude_none=True)
def post_tables(project_id: str, data: TablesAppend, store: KeyValueStore = Depends(get_store)):
    p = _project_or_404(store, project_id)
    batch = _tables_from(data.tables, data.tables_text)
    p = save_project(store, append_tables(p, batch))
    logger.info("tables_appended", project_id=project_id, added=len(batch), total=p.total_tables)
    return p


@router.get("/{project_id}/sections", response_model=list[TableSection])
def get_sections(project_id: str, store: KeyValueStore = Depends(get_store)):
    p = _project_or_404(store, project_id)
    return [TableSection(section=k, tables=ts) for k, ts in group_tables_by_section(p.tables or [])]


@router.get("/{project_id}/forecast", response_model=Forecast)
def get_forecast(project_id: str, store: KeyValueStore = Depends(get_store)):
    p = _project_or_404(store, project_id)
    return forecast_completion(p, list_logs(store, project_id))


@router.get("/{project_id}/export/csv", response_class=PlainTextResponse)
def export_csv(project_id: str, store: KeyValueStore = Depends(get_store)):
    p = _project_or_404(store, project_id)
    content = export_logs_csv(p, list_logs(store, project_id), list_workers(store))
    filename = "_".join(p.name.split()) + "_export.csv"
    return PlainTextResponse(
        content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{project_id}/export/xlsx")
def export_xlsx(project_id: str, store: KeyValueStore = Depends(get_store)):
    p = _project_or_404(store, project_id)
    out = export_logs_xlsx(list_logs(store, project_id), export_path(f"logs_{p.id}", "xlsx"), list_workers(store))
    return FileResponse(out, filename=out.name, media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
