from typing import Iterable

from solartrack.schemas.domain import Project, Worker, WorkLog, WorkType
from solartrack.schemas.reports import EarningsSummary
from solartrack.services.rules import log_strings

CURRENCY = "EUR"


def calculate_log_earnings(log: WorkLog, worker: Worker, projects: Iterable[Project]) -> float:
    # a log only ever pays out to its own worker
    if log.worker_id != worker.id:
        return 0.0

    if log.type == WorkType.hourly:
        return (log.duration_minutes or 0) / 60 * (worker.rate_hourly or 0.0)

    if log.type == WorkType.table:
        project = next((p for p in projects if p.id == log.project_id), None)
        return log_strings(log, project.settings if project else None) * (worker.rate_string or 0.0)

    return 0.0


def calculate_earnings(logs: Iterable[WorkLog], worker: Worker, projects: Iterable[Project]) -> EarningsSummary:
    projects = list(projects)
    hourly_total = 0.0
    piecework_total = 0.0
    for log in logs:
        amount = calculate_log_earnings(log, worker, projects)
        if log.type == WorkType.hourly:
            hourly_total += amount
        else:
            piecework_total += amount

    return EarningsSummary(
        total=hourly_total + piecework_total,
        hourly_total=hourly_total,
        piecework_total=piecework_total,
        currency=CURRENCY,
    )
