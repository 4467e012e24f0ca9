import random

import openpyxl

from solartrack.schemas.domain import ProjectMode, Table, TableSize, TableStatus
from solartrack.services.tables.organizer import (
    FALLBACK_SECTION,
    group_tables_by_section,
    section_key,
    sort_tables_by_order,
)
from solartrack.services.tables.parsers import (
    RANGE_MAX_TABLES,
    generate_table_range,
    parse_csv_import,
    parse_raw_table_input,
    parse_xlsx_import,
)


def test_parse_raw_detects_sizes_and_strict_mode():
    tables, mode = parse_raw_table_input("2E01 L\n2E02 M\n2E03")
    assert [t.size for t in tables] == [TableSize.large, TableSize.medium, None]
    assert [t.label for t in tables] == ["2E01 L", "2E02 M", "2E03"]
    assert [t.order_index for t in tables] == [0, 1, 2]
    assert all(t.status == TableStatus.pending for t in tables)
    assert mode == ProjectMode.strict


def test_parse_raw_plain_numbers_is_flexible():
    tables, mode = parse_raw_table_input("1\n2\n3")
    assert len(tables) == 3
    assert all(t.size is None for t in tables)
    assert mode == ProjectMode.flexible


def test_parse_raw_empty_input():
    assert parse_raw_table_input("") == ([], ProjectMode.flexible)
    assert parse_raw_table_input("  \n ") == ([], ProjectMode.flexible)


def test_parse_raw_splits_on_commas_and_keeps_duplicates_unique():
    tables, _ = parse_raw_table_input("A1, A1,\n\nR1-s , 1.5")
    assert [t.label for t in tables] == ["A1", "A1", "R1-s", "1.5"]
    assert len({t.id for t in tables}) == 4
    assert tables[0].id == "A1_0"
    assert tables[3].id == "1_5_3"
    assert tables[2].size == TableSize.small


def test_size_suffix_needs_separator():
    tables, mode = parse_raw_table_input("ROWL\nTABLE-M")
    assert tables[0].size is None
    assert tables[1].size == TableSize.medium
    assert mode == ProjectMode.strict


def test_generate_range_basic():
    tables = generate_table_range("R", 1, 3, "", None, 0)
    assert [t.label for t in tables] == ["R01", "R02", "R03"]
    assert [t.order_index for t in tables] == [0, 1, 2]
    assert len({t.id for t in tables}) == 3


def test_generate_range_descending_with_offset_and_size():
    tables = generate_table_range("2E", 12, 9, "-L", TableSize.large, 5)
    assert [t.label for t in tables] == ["2E12-L", "2E11-L", "2E10-L", "2E09-L"]
    assert [t.order_index for t in tables] == [5, 6, 7, 8]
    assert all(t.size == TableSize.large for t in tables)


def test_generate_range_single_and_malformed():
    assert [t.label for t in generate_table_range("A", 7, 7)] == ["A07"]
    assert generate_table_range("A", "x", 3) == []
    assert generate_table_range("A", None, 3) == []
    assert [t.label for t in generate_table_range("", "1", "2")] == ["01", "02"]


def test_generate_range_is_capped():
    tables = generate_table_range("R", 1, 50000)
    assert len(tables) == RANGE_MAX_TABLES
    assert tables[-1].label == "R1000"


def test_parse_csv_import():
    csv = "ID;Size\nA-01;L\nA-02,medium\n\nA-03;xl\nB-01\n"
    tables = parse_csv_import(csv)
    assert [t.label for t in tables] == ["A-01", "A-02", "A-03", "B-01"]
    assert [t.size for t in tables] == [TableSize.large, TableSize.medium, None, None]
    assert [t.order_index for t in tables] == [0, 1, 2, 3]


def test_parse_csv_import_empty():
    assert parse_csv_import("") == []
    assert parse_csv_import("id,size\n") == []


def test_parse_xlsx_import(tmp_path):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["ID", "Size"])
    ws.append(["R1-01", "S"])
    ws.append(["R1-02", "large"])
    ws.append(["R2-01", None])
    path = tmp_path / "tables.xlsx"
    wb.save(path)

    tables = parse_xlsx_import(str(path))
    assert [t.label for t in tables] == ["R1-01", "R1-02", "R2-01"]
    assert [t.size for t in tables] == [TableSize.small, TableSize.large, None]


def test_parse_xlsx_import_missing_file(tmp_path):
    assert parse_xlsx_import(str(tmp_path / "missing.xlsx")) == []


def test_sort_is_order_defining():
    tables, _ = parse_raw_table_input("\n".join(f"T{i}" for i in range(20)))
    shuffled = sort_tables_by_order(tables)
    random.Random(7).shuffle(shuffled)
    assert sort_tables_by_order(shuffled) == sort_tables_by_order(tables)


def test_sort_never_uses_label():
    tables = [Table(id="b", label="B", order_index=0), Table(id="a", label="A", order_index=1)]
    assert [t.id for t in sort_tables_by_order(tables)] == ["b", "a"]


def test_group_keeps_first_appearance_order():
    tables, _ = parse_raw_table_input("B-1\nA-1\nB-2")
    groups = group_tables_by_section(tables)
    assert [k for k, _ in groups] == ["B", "A"]
    assert [t.label for t in groups[0][1]] == ["B-1", "B-2"]


def test_group_fallback_bucket():
    tables, _ = parse_raw_table_input("17\n18\n1.05")
    groups = group_tables_by_section(tables)
    assert [k for k, _ in groups] == [FALLBACK_SECTION, "1"]
    assert section_key("R1_05") == "R1"
    assert section_key("2E01 L") == "2E01"
