"""
Table inventory parsers: free text, numeric ranges, CSV and XLSX lists.

Malformed input never raises here: empty or unreadable input yields an empty
list and unknown size tokens leave the table without a size.
"""
from __future__ import annotations

import re
from typing import Any, Optional

import pandas as pd

from solartrack.core.logging import logger
from solartrack.schemas.domain import ProjectMode, Table, TableSize, TableStatus

RANGE_MAX_TABLES = 1000

_ID_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9-]")
_SPLIT_RE = re.compile(r"[\n,]+")
_FIELD_RE = re.compile(r"[,;]")
# "2E01 L", "R1-M", or a bare trailing size letter
_SIZE_SUFFIX_RE = re.compile(r"(?:^|[\s-])([SML])$", re.IGNORECASE)

_SIZE_TOKENS = {
    "S": TableSize.small,
    "SMALL": TableSize.small,
    "M": TableSize.medium,
    "MEDIUM": TableSize.medium,
    "L": TableSize.large,
    "LARGE": TableSize.large,
}


def make_table_id(label: str, disambiguator: Any) -> str:
    return f"{_ID_UNSAFE_RE.sub('_', label)}_{disambiguator}"


def detect_size_suffix(line: str) -> Optional[TableSize]:
    m = _SIZE_SUFFIX_RE.search(line.strip())
    if not m:
        return None
    return _SIZE_TOKENS[m.group(1).upper()]


def size_from_token(v: Any) -> Optional[TableSize]:
    if v is None or (isinstance(v, float) and v != v):
        return None
    return _SIZE_TOKENS.get(str(v).strip().upper())


def detect_mode(tables: list[Table]) -> ProjectMode:
    return ProjectMode.strict if any(t.size is not None for t in tables) else ProjectMode.flexible


def parse_raw_table_input(text: str | None) -> tuple[list[Table], ProjectMode]:
    if not text or not text.strip():
        return [], ProjectMode.flexible

    lines = [ln.strip() for ln in _SPLIT_RE.split(text)]
    lines = [ln for ln in lines if ln]

    tables = [
        Table(
            id=make_table_id(line, i),
            label=line,
            order_index=i,
            size=detect_size_suffix(line),
            status=TableStatus.pending,
        )
        for i, line in enumerate(lines)
    ]
    return tables, detect_mode(tables)


def _to_int(v: Any) -> Optional[int]:
    if v is None or (isinstance(v, float) and v != v):
        return None
    try:
        if isinstance(v, (int, float)):
            return int(v)
        s = str(v).strip()
        if not s:
            return None
        return int(float(s))
    except (TypeError, ValueError):
        return None


def generate_table_range(
    prefix: str,
    start: Any,
    end: Any,
    suffix: str = "",
    size: TableSize | None = None,
    offset: int = 0,
) -> list[Table]:
    a = _to_int(start)
    b = _to_int(end)
    if a is None or b is None:
        return []

    step = 1 if a <= b else -1
    tables: list[Table] = []
    n = a
    while (n <= b if step > 0 else n >= b) and len(tables) < RANGE_MAX_TABLES:
        label = f"{prefix or ''}{n:02d}{suffix or ''}"
        pos = offset + len(tables)
        tables.append(
            Table(id=make_table_id(label, pos), label=label, order_index=pos, size=size, status=TableStatus.pending)
        )
        n += step

    if len(tables) >= RANGE_MAX_TABLES and (n <= b if step > 0 else n >= b):
        logger.warning("table_range_truncated", start=a, end=b, cap=RANGE_MAX_TABLES)
    return tables


def _is_header(line: str) -> bool:
    return line.startswith("ID") or line.startswith("id")


def _rows_to_tables(rows: list[tuple[str, Any]]) -> list[Table]:
    tables: list[Table] = []
    for label, size_token in rows:
        pos = len(tables)
        tables.append(
            Table(
                id=make_table_id(label, pos),
                label=label,
                order_index=pos,
                size=size_from_token(size_token),
                status=TableStatus.pending,
            )
        )
    return tables


def parse_csv_import(content: str | None) -> list[Table]:
    if not content:
        return []
    rows: list[tuple[str, Any]] = []
    for raw in content.split("\n"):
        line = raw.strip()
        if not line or _is_header(line):
            continue
        parts = _FIELD_RE.split(line)
        label = parts[0].strip()
        if not label:
            continue
        rows.append((label, parts[1] if len(parts) > 1 else None))
    return _rows_to_tables(rows)


def parse_xlsx_import(path: str) -> list[Table]:
    try:
        df = pd.read_excel(path, sheet_name=0, header=None, engine="openpyxl", dtype=str)
    except (ValueError, OSError) as e:
        logger.warning("table_xlsx_unreadable", path=path, error=str(e))
        return []

    rows: list[tuple[str, Any]] = []
    for r in df.itertuples(index=False):
        first = r[0] if len(r) > 0 else None
        if first is None or (isinstance(first, float) and first != first):
            continue
        label = str(first).strip()
        if not label or _is_header(label):
            continue
        rows.append((label, r[1] if len(r) > 1 else None))
    return _rows_to_tables(rows)
