from fastapi import Depends
from sqlalchemy.orm import Session

from solartrack.db.session import SessionLocal
from solartrack.services.storage import KeyValueStore, SqlKeyValueStore

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)
