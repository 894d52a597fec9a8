import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from todo_api.db import SQLiteTodoGateway
from todo_api.models import new_record


def test_find_all_empty(gateway):
    assert gateway.find_all() == []


def test_save_new_assigns_id_and_created_at(gateway):
    before = datetime.now(timezone.utc)
    saved = gateway.save(new_record("buy milk"))
    assert isinstance(saved["id"], int)
    assert saved["title"] == "buy milk"
    assert saved["done"] is False
    assert isinstance(saved["created_at"], datetime)
    assert saved["created_at"] >= before
    assert saved["created_at"].utcoffset() == timedelta(0)


def test_find_by_id_absent_returns_none(gateway):
    assert gateway.find_by_id(99999) is None
    assert gateway.exists_by_id(99999) is False


def test_find_by_id_roundtrip(gateway):
    saved = gateway.save(new_record("walk dog", done=True))
    assert gateway.find_by_id(saved["id"]) == saved
    assert gateway.exists_by_id(saved["id"]) is True


def test_save_existing_overwrites_title_and_done_only(gateway):
    saved = gateway.save(new_record("draft"))
    changed = dict(saved, title="final", done=True, created_at=datetime(2000, 1, 1))
    result = gateway.save(changed)
    assert result["id"] == saved["id"]
    assert result["title"] == "final"
    assert result["done"] is True
    assert result["created_at"] == saved["created_at"]
    assert gateway.find_by_id(saved["id"]) == result
    assert len(gateway.find_all()) == 1


def test_save_with_unknown_id_inserts_under_that_id(gateway):
    record = dict(new_record("imported"), id=42)
    saved = gateway.save(record)
    assert saved["id"] == 42
    assert gateway.exists_by_id(42)
    assert gateway.save(new_record("next"))["id"] > 42


def test_ids_unique_and_not_reused_after_delete(gateway):
    first = gateway.save(new_record("a"))
    second = gateway.save(new_record("b"))
    assert first["id"] != second["id"]
    gateway.delete_by_id(second["id"])
    third = gateway.save(new_record("c"))
    assert third["id"] not in {first["id"], second["id"]}


def test_ids_outside_64_bits_are_absent(gateway):
    gateway.save(new_record("present"))
    for todo_id in (2**63, -(2**63) - 1):
        assert gateway.find_by_id(todo_id) is None
        assert gateway.exists_by_id(todo_id) is False
        gateway.delete_by_id(todo_id)
    assert len(gateway.find_all()) == 1


def test_delete_by_id(gateway):
    saved = gateway.save(new_record("gone"))
    gateway.delete_by_id(saved["id"])
    assert gateway.find_by_id(saved["id"]) is None
    assert gateway.exists_by_id(saved["id"]) is False
    # deleting an absent id is silent
    gateway.delete_by_id(saved["id"])


def test_find_all_ordered_by_id(gateway):
    ids = [gateway.save(new_record(f"t{i}"))["id"] for i in range(4)]
    assert [r["id"] for r in gateway.find_all()] == ids


def test_returned_records_are_copies(gateway):
    saved = gateway.save(new_record("original"))
    fetched = gateway.find_by_id(saved["id"])
    fetched["title"] = "mutated"
    assert gateway.find_by_id(saved["id"])["title"] == "original"


class TestSQLitePersistence:
    def test_data_survives_new_gateway_instance(self, tmp_path):
        path = str(tmp_path / "todos.db")
        saved = SQLiteTodoGateway(path).save(new_record("persisted", done=True))

        reopened = SQLiteTodoGateway(path)
        assert reopened.find_by_id(saved["id"]) == saved

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "todos.db"
        SQLiteTodoGateway(str(path))
        assert path.exists()

    def test_title_not_null_enforced(self, tmp_path):
        gw = SQLiteTodoGateway(str(tmp_path / "todos.db"))
        with pytest.raises(sqlite3.IntegrityError):
            gw.save({"id": None, "title": None, "done": False, "created_at": None})
