from typing import Any

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from solartrack.db.base import Base
from solartrack.db.models._mixins import TimestampMixin

class KeyValueEntry(Base, TimestampMixin):
    __tablename__ = "kv_entry"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
