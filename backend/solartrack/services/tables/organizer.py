import re
from typing import Iterable

from solartrack.schemas.domain import Table

FALLBACK_SECTION = "Zóna 1"

_SECTION_SPLIT_RE = re.compile(r"[-_ .]")


def sort_tables_by_order(tables: Iterable[Table]) -> list[Table]:
    # sorted() is stable: equal orderIndex keeps input order
    return sorted(tables, key=lambda t: t.order_index)


def section_key(label: str) -> str:
    """First segment of the label ("R1" from "R1-05", "1" from "1.12")."""
    parts = _SECTION_SPLIT_RE.split(label)
    if len(parts) >= 2:
        return parts[0]
    return FALLBACK_SECTION


def group_tables_by_section(tables: Iterable[Table]) -> list[tuple[str, list[Table]]]:
    groups: dict[str, list[Table]] = {}
    for t in sort_tables_by_order(tables):
        groups.setdefault(section_key(t.label), []).append(t)
    # dict keeps first-appearance order of the keys
    return list(groups.items())
