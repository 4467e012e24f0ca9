"""
Local-time helpers. Timestamps are epoch milliseconds; "local" means the
zone configured in settings.LOCAL_TZ.
"""
import datetime as dt
from zoneinfo import ZoneInfo

from solartrack.core.config import settings

DAY_MS = 24 * 60 * 60 * 1000


def local_tz(tz: str | None = None) -> ZoneInfo:
    return ZoneInfo(tz or settings.LOCAL_TZ)


def now_local(tz: str | None = None) -> dt.datetime:
    return dt.datetime.now(local_tz(tz))


def now_ms() -> int:
    return int(dt.datetime.now(dt.timezone.utc).timestamp() * 1000)


def to_ms(d: dt.datetime) -> int:
    return int(d.timestamp() * 1000)


def from_ms(ts: int | float, tz: str | None = None) -> dt.datetime:
    return dt.datetime.fromtimestamp(ts / 1000, tz=local_tz(tz))


def local_date(ts: int | float, tz: str | None = None) -> dt.date:
    return from_ms(ts, tz).date()


def start_of_day(now: dt.datetime) -> dt.datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: dt.datetime) -> dt.datetime:
    # Monday start
    midnight = start_of_day(now)
    return midnight - dt.timedelta(days=midnight.weekday())
