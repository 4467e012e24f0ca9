from fastapi import APIRouter, File, HTTPException, UploadFile

from solartrack.schemas.domain import Table
from solartrack.schemas.entries import TableRangeIn, TablesParseIn, TablesParseOut
from solartrack.services.files import staged_upload
from solartrack.services.tables.parsers import (
    generate_table_range,
    parse_csv_import,
    parse_raw_table_input,
    parse_xlsx_import,
)

router = APIRouter()

@router.post("/parse", response_model=TablesParseOut, response_model_exclude_none=True)
def parse_text(data: TablesParseIn):
    tables, mode = parse_raw_table_input(data.text)
    return TablesParseOut(tables=tables, detected_mode=mode)

@router.post("/range", response_model=list[Table], response_model_exclude_none=True)
def make_range(data: TableRangeIn):
    return generate_table_range(data.prefix, data.start, data.end, data.suffix, data.size, data.offset)

@router.post("/import", response_model=list[Table], response_model_exclude_none=True)
def import_tables(file: UploadFile = File(...)):
    name = (file.filename or "").lower()
    if name.endswith(".csv") or name.endswith(".txt"):
        return parse_csv_import(file.file.read().decode("utf-8-sig", errors="replace"))
    if name.endswith(".xlsx"):
        with staged_upload(file, ".xlsx") as path:
            return parse_xlsx_import(str(path))
    raise HTTPException(status_code=400, detail="Only .csv, .txt or .xlsx supported")
