from solartrack.schemas.domain import ProjectSettings, StringsPerTable, Table, TableSize, WorkLog, WorkType
from solartrack.services.rules import (
    log_strings,
    strings_for_size,
    strings_to_kwp,
    total_strings_from_tables,
)


def _log(**kw) -> WorkLog:
    base = dict(id="l1", projectId="p1", workerId="w1", type="TABLE", timestamp=0, durationMinutes=0)
    base.update(kw)
    return WorkLog.model_validate(base)


def test_default_strings_per_size():
    assert strings_for_size(TableSize.small) == 1.0
    assert strings_for_size(TableSize.medium) == 1.5
    assert strings_for_size(TableSize.large) == 2.0
    assert strings_for_size(None) == 1.5


def test_override_changes_only_that_size():
    s = ProjectSettings(strings_per_table=StringsPerTable(S=3.0))
    assert strings_for_size(TableSize.small, s) == 3.0
    assert strings_for_size(TableSize.medium, s) == 1.5
    assert strings_for_size(TableSize.large, s) == 2.0


def test_project_default_used_for_missing_size_and_unsized():
    s = ProjectSettings.model_validate({"stringsPerTable": {"L": 4, "default": 2.5}, "currency": "EUR"})
    assert strings_for_size(TableSize.large, s) == 4
    assert strings_for_size(TableSize.small, s) == 2.5
    assert strings_for_size(None, s) == 2.5


def test_kwp_factor():
    assert abs(strings_to_kwp(10) - 196.0) < 1e-9
    assert strings_to_kwp(10, ProjectSettings(kwp_per_string=10.0)) == 100.0


def test_hourly_log_has_no_strings():
    assert log_strings(_log(type="HOURLY", durationMinutes=480, note="montáž")) == 0
    assert log_strings(_log(type="HOURLY", tableIds=["a", "b"], size="L")) == 0


def test_table_log_strings():
    assert log_strings(_log(tableIds=["a", "b", "c"], size="L")) == 6.0
    assert log_strings(_log(tableIds=["a", "b"])) == 3.0
    # legacy singular id
    assert log_strings(_log(tableId="a", size="S")) == 1.0
    assert log_strings(_log()) == 0


def test_plural_ids_win_over_legacy_id():
    log = _log(tableIds=["a", "b"], tableId="z")
    assert log.table_ids == ["a", "b"]
    assert "tableId" not in log.to_wire()


def test_total_strings_from_tables():
    tables = [
        Table(id="a", label="a", size=TableSize.small),
        Table(id="b", label="b", size=TableSize.large),
        Table(id="c", label="c"),
    ]
    assert total_strings_from_tables(tables) == 4.5
    assert total_strings_from_tables([]) == 0
