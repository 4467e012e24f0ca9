from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from solartrack.core.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # sqlite file lives next to the exports by default
        db_path = url.split("///", 1)[1] if "///" in url else ""
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return {"check_same_thread": False}
    return {}


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
