import os

# before any solartrack import reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO", "false")
os.environ.setdefault("LOCAL_TZ", "Europe/Prague")
os.environ.setdefault("EXPORT_DIR", "/tmp/solartrack-test-exports")

import datetime as dt
from zoneinfo import ZoneInfo

import pytest

from solartrack.services.storage import MemoryKeyValueStore

TZ = "Europe/Prague"
# a Wednesday afternoon
NOW = dt.datetime(2025, 6, 11, 15, 0, tzinfo=ZoneInfo(TZ))


def ts(d: dt.datetime) -> int:
    return int(d.timestamp() * 1000)


@pytest.fixture
def store():
    return MemoryKeyValueStore()
