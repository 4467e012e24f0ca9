"""
Key-value persistence port. Collections are stored as JSON blobs in their
wire form; domain code never sees the store, only materialised lists.
"""
import copy
from typing import Any, Mapping, Protocol

from sqlalchemy.orm import Session

from solartrack.db.models.kv_entry import KeyValueEntry

KEY_PROJECTS = "mst_projects"
KEY_LOGS = "mst_logs"
KEY_WORKERS = "mst_workers"
KEY_LAST_WORKER = "mst_last_worker"


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def set_many(self, values: Mapping[str, Any]) -> None: ...


class SqlKeyValueStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str, default: Any = None) -> Any:
        row = self.db.get(KeyValueEntry, key)
        if row is None or row.value is None:
            return default
        return row.value

    def _put(self, key: str, value: Any) -> None:
        row = self.db.get(KeyValueEntry, key)
        if row is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            row.value = value

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        # one transaction for the whole mapping
        try:
            for k, v in values.items():
                self._put(k, v)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class MemoryKeyValueStore:
    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def set_many(self, values: Mapping[str, Any]) -> None:
        staged = {k: copy.deepcopy(v) for k, v in values.items()}
        self._data.update(staged)
