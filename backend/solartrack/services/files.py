"""
Where exports are written and how uploads reach readers that need a path.
"""
import datetime as dt
import shutil
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import UploadFile

from solartrack.core.config import settings
from solartrack.core.logging import logger

def ensure_dirs():
    Path(settings.EXPORT_DIR).mkdir(parents=True, exist_ok=True)

def export_path(prefix: str, ext: str) -> Path:
    ensure_dirs()
    stamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
    return Path(settings.EXPORT_DIR) / f"{prefix}_{stamp}.{ext}"

def save_upload(file: UploadFile, dest_path: Path) -> None:
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    with dest_path.open("wb") as f:
        shutil.copyfileobj(file.file, f)

@contextmanager
def staged_upload(file: UploadFile, suffix: str) -> Iterator[Path]:
    """Copy an upload into EXPORT_DIR for the duration of the block; removed on exit."""
    ensure_dirs()
    path = Path(settings.EXPORT_DIR) / f"upload_{uuid.uuid4().hex}{suffix}"
    save_upload(file, path)
    logger.debug("upload_staged", filename=file.filename, path=str(path))
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
