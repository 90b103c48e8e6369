"""Unit tests for the data layer (raw log, table renderers, log store)."""

import json
import pytest
from datetime import datetime

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from openpyxl import load_workbook

from src.data.log_store import LogStore, safe_filename
from src.data.models import DailyRecord, SessionRecord
from src.data.raw_log import RawLogStore
from src.data.table_renderers import (
    CsvTableRenderer, JsonTableRenderer, XlsxTableRenderer, get_renderer,
)
from src.errors import PersistenceWriteError


def make_record(day="03/02/2024", start="09:00:00", end="10:00:00",
                ms=3600000, project="demo") -> SessionRecord:
    return SessionRecord(date=day, start_time=start, end_time=end,
                         project=project, total_duration_ms=ms)


class TestSessionRecord:
    def test_to_dict_keys(self):
        data = make_record().to_dict()
        assert data == {
            "date": "03/02/2024",
            "duration": "01:00:00",
            "startTime": "09:00:00",
            "endTime": "10:00:00",
            "project": "demo",
            "totalDurationMs": 3600000,
        }

    def test_from_dict_rederives_duration(self):
        data = make_record().to_dict()
        data["duration"] = "99:99:99"
        assert SessionRecord.from_dict(data).duration == "01:00:00"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            make_record(ms=-1)


class TestRawLog:
    def test_creates_empty_array(self, tmp_path: Path):
        store = RawLogStore(tmp_path / "work-logs.json")
        assert json.loads(store.path.read_text()) == []

    def test_append_keeps_history(self, tmp_path: Path):
        store = RawLogStore(tmp_path / "work-logs.json")
        store.append(make_record(start="09:00:00"))
        store.append(make_record(start="11:00:00", project="other"))
        entries = json.loads(store.path.read_text())
        assert len(entries) == 2
        assert entries[1]["project"] == "other"
        assert [r.start_time for r in store.load()] == ["09:00:00", "11:00:00"]

    def test_corrupt_log_is_not_overwritten(self, tmp_path: Path):
        path = tmp_path / "work-logs.json"
        path.write_text("{oops", encoding="utf-8")
        store = RawLogStore(path)
        with pytest.raises(PersistenceWriteError):
            store.append(make_record())
        assert path.read_text() == "{oops"


@pytest.mark.parametrize("renderer_cls", [CsvTableRenderer, JsonTableRenderer, XlsxTableRenderer])
class TestRenderers:
    def test_write_then_load(self, tmp_path: Path, renderer_cls):
        renderer = renderer_cls()
        path = tmp_path / f"demo.{renderer.extension}"
        table = [
            DailyRecord("02/02/2024", "00:30:00", ["09:00:00 - 09:30:00"]),
            DailyRecord("03/02/2024", "01:15:00",
                        ["09:00:00 - 10:00:00", "14:00:00 - 14:15:00"]),
        ]
        renderer.write(path, table, datetime(2024, 2, 3, 18, 0, 0))
        assert renderer.load(path) == table

    def test_missing_file_is_empty(self, tmp_path: Path, renderer_cls):
        assert renderer_cls().load(tmp_path / "nope") == []

    def test_unreadable_file_is_empty(self, tmp_path: Path, renderer_cls):
        path = tmp_path / "broken"
        path.write_bytes(b"\x00\x01 not a table")
        assert renderer_cls().load(path) == []


class TestXlsxLayout:
    def test_sheet_layout(self, tmp_path: Path):
        path = tmp_path / "demo.xlsx"
        XlsxTableRenderer().write(
            path, [DailyRecord("03/02/2024", "01:00:00", ["09:00:00 - 10:00:00"])],
            datetime(2024, 2, 3, 18, 0, 0),
        )
        wb = load_workbook(path)
        ws = wb["Work Sessions"]
        assert "Work Sessions Log" in ws["A1"].value
        assert [ws.cell(row=2, column=c).value for c in (1, 2, 3)] == [
            "Date", "Total Duration", "Work Sessions",
        ]
        assert ws["A3"].value == "03/02/2024"
        assert ws["A5"].value.startswith("Generated on: 2024-02-03 18:00:00")
        assert ws.protection.sheet
        assert "A1:C1" in [str(r) for r in ws.merged_cells.ranges]


class TestLogStore:
    def test_save_writes_both_views(self, tmp_path: Path):
        store = LogStore(tmp_path, "demo", renderer=CsvTableRenderer())
        store.save(make_record())
        assert store.raw_log.path.name == "work-logs.json"
        assert store.table_path.name == "demo.csv"
        assert len(store.sessions()) == 1
        assert store.daily_table()[0].total_duration == "01:00:00"

    def test_same_day_merges_in_table(self, tmp_path: Path):
        store = LogStore(tmp_path, "demo", renderer=XlsxTableRenderer())
        store.save(make_record(start="09:00:00", end="10:00:00", ms=3600000))
        store.save(make_record(start="11:00:00", end="11:20:00", ms=1200000))
        table = store.daily_table()
        assert len(table) == 1
        assert table[0].total_duration == "01:20:00"
        assert len(table[0].work_sessions) == 2

    def test_raw_log_failure_reports_nothing_saved(self, tmp_path: Path):
        store = LogStore(tmp_path, "demo", renderer=CsvTableRenderer())
        store.raw_log.path.write_text("not json", encoding="utf-8")
        with pytest.raises(PersistenceWriteError) as info:
            store.save(make_record())
        assert info.value.raw_log_saved is False
        assert info.value.record == make_record()
        assert not store.table_path.exists()

    def test_table_failure_reports_raw_saved(self, tmp_path: Path, monkeypatch):
        store = LogStore(tmp_path, "demo", renderer=CsvTableRenderer())

        def boom(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(store.renderer, "write", boom)
        with pytest.raises(PersistenceWriteError) as info:
            store.save(make_record())
        assert info.value.raw_log_saved is True
        assert info.value.table_saved is False
        assert len(store.sessions()) == 1

    def test_sessions_filters_by_project(self, tmp_path: Path):
        store = LogStore(tmp_path, "demo", renderer=JsonTableRenderer())
        other = LogStore(tmp_path, "other", renderer=JsonTableRenderer())
        store.save(make_record())
        other.save(make_record(project="other"))
        assert len(store.sessions()) == 1
        assert len(store.sessions(project_only=False)) == 2

    def test_rebuild_table_from_raw_log(self, tmp_path: Path):
        store = LogStore(tmp_path, "demo", renderer=CsvTableRenderer())
        store.save(make_record(day="04/02/2024"))
        store.save(make_record(day="03/02/2024", ms=60000))
        store.save(make_record(day="04/02/2024", start="12:00:00", end="12:30:00", ms=1800000))
        before = store.daily_table()

        store.table_path.unlink()
        rebuilt = store.rebuild_table()
        assert rebuilt == before
        assert store.daily_table() == before
        assert [r.date for r in rebuilt] == ["03/02/2024", "04/02/2024"]

    def test_project_name_is_made_file_safe(self, tmp_path: Path):
        store = LogStore(tmp_path, "client/site:v2", renderer=CsvTableRenderer())
        assert store.table_path.parent == tmp_path
        assert safe_filename("") == "unknown-project"


def test_get_renderer():
    assert isinstance(get_renderer("XLSX"), XlsxTableRenderer)
    assert isinstance(get_renderer("csv"), CsvTableRenderer)
    with pytest.raises(ValueError, match="Unknown table format"):
        get_renderer("pdf")
