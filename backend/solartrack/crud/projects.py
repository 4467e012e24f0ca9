import uuid

from solartrack.core.logging import logger
from solartrack.schemas.domain import Project, ProjectSettings, Table, TableStatus, WorkLog, WorkType
from solartrack.schemas.entries import ProjectUpdate
from solartrack.services.storage import KEY_PROJECTS, KeyValueStore
from solartrack.services.tables.parsers import detect_mode, make_table_id
from solartrack.services.tables.organizer import sort_tables_by_order
from solartrack.services.timeutils import now_ms


def list_projects(store: KeyValueStore) -> list[Project]:
    return [Project.model_validate(p) for p in store.get(KEY_PROJECTS, [])]

def save_projects(store: KeyValueStore, projects: list[Project]) -> None:
    store.set(KEY_PROJECTS, [p.to_wire() for p in projects])

def get_project(store: KeyValueStore, project_id: str) -> Project | None:
    return next((p for p in list_projects(store) if p.id == project_id), None)

def recompute_completed(project: Project) -> Project:
    done = sum(1 for t in project.tables or [] if t.status == TableStatus.done)
    return project.model_copy(update={"completed_tables": done})

def _put(store: KeyValueStore, project: Project) -> Project:
    projects = list_projects(store)
    for i, p in enumerate(projects):
        if p.id == project.id:
            projects[i] = project
            break
    else:
        projects.insert(0, project)
    save_projects(store, projects)
    return project


def create_project(
    store: KeyValueStore,
    name: str,
    tables: list[Table] | None = None,
    settings: ProjectSettings | None = None,
) -> Project:
    tables = tables or []
    p = Project(
        id=uuid.uuid4().hex,
        name=name,
        # fixed at creation, not re-evaluated later
        mode=detect_mode(tables),
        created_at=now_ms(),
        total_tables=0,
        tables=[],
        settings=settings,
    )
    # same id collision handling as a later batch
    p = append_tables(p, tables)
    _put(store, p)
    logger.info("project_created", project_id=p.id, mode=p.mode.value, tables=len(tables))
    return p


def update_project(store: KeyValueStore, p: Project, data: ProjectUpdate) -> Project:
    update = {}
    if data.name is not None:
        update["name"] = data.name
    if data.total_tables is not None:
        update["total_tables"] = data.total_tables
    if data.settings is not None:
        update["settings"] = data.settings
    p = p.model_copy(update=update)
    _put(store, p)
    logger.info("project_updated", project_id=p.id, fields=sorted(update))
    return p


def delete_project(store: KeyValueStore, project_id: str) -> bool:
    projects = list_projects(store)
    kept = [p for p in projects if p.id != project_id]
    if len(kept) == len(projects):
        return False
    save_projects(store, kept)
    logger.info("project_deleted", project_id=project_id)
    return True


def append_tables(project: Project, tables: list[Table]) -> Project:
    existing = sort_tables_by_order(project.tables or [])
    taken = {t.id for t in existing}
    next_index = (existing[-1].order_index + 1) if existing else 0

    added: list[Table] = []
    for t in sort_tables_by_order(tables):
        order_index = next_index + len(added)
        table_id = t.id if t.id not in taken else make_table_id(t.label, order_index)
        while table_id in taken:
            table_id = f"{table_id}_"
        taken.add(table_id)
        added.append(t.model_copy(update={"id": table_id, "order_index": order_index}))

    all_tables = existing + added
    return recompute_completed(project.model_copy(update={"tables": all_tables, "total_tables": len(all_tables)}))


def apply_log_to_project(project: Project, log: WorkLog) -> Project:
    """Set the log's status (and size, when given) on its tables; recount DONE."""
    if log.type != WorkType.table or log.status is None or not log.table_ids:
        return project

    ids = set(log.table_ids)
    tables = [
        t.model_copy(update={"status": log.status, "size": log.size or t.size}) if t.id in ids else t
        for t in project.tables or []
    ]
    return recompute_completed(project.model_copy(update={"tables": tables}))


def save_project(store: KeyValueStore, project: Project) -> Project:
    return _put(store, project)
