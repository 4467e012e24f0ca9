from fastapi import APIRouter
from solartrack.api.routers import projects, tables, logs, workers, reports, backup

api_router = APIRouter()
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(workers.router, prefix="/workers", tags=["workers"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(backup.router, prefix="/backup", tags=["backup"])
