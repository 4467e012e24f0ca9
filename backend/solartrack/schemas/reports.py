import datetime as dt
from enum import Enum

from solartrack.schemas.domain import Table, WireModel


class TimeRange(str, Enum):
    day = "DAY"
    week = "WEEK"
    all = "ALL"

class PerformanceSnapshot(WireModel):
    hours: float = 0.0
    strings: float = 0.0
    tables: int = 0
    strings_per_hour: float = 0.0
    tables_per_day: float = 0.0
    kwp: float = 0.0

class WorkerPerformance(PerformanceSnapshot):
    worker_id: str
    worker_name: str

class ProjectPerformance(PerformanceSnapshot):
    completed_percent: float = 0.0
    workers: list[WorkerPerformance] = []

class Forecast(WireModel):
    tables_remaining: int
    estimated_days_left: int
    # None: no target defined, or velocity too low to estimate
    estimated_completion_date: dt.date | None = None

class EarningsSummary(WireModel):
    total: float = 0.0
    hourly_total: float = 0.0
    piecework_total: float = 0.0
    currency: str = "EUR"

class TableSection(WireModel):
    section: str
    tables: list[Table]
