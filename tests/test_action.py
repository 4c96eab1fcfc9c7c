from __future__ import annotations

import pytest

from instant_store import Action, Database, EditBuffer, KeyedRecord
from instant_store.errors import TypeMismatchError


@pytest.fixture
def db(db_path) -> Database:
    db = Database(db_path)
    db.set("a", 1)
    db.set("nested", {"list": [1, 2]})
    return db


def test_factory_and_alias(db):
    action = db.make_edit_buffer()
    assert isinstance(action, Action)
    assert isinstance(db.action(), EditBuffer)
    assert action.db is db


def test_edits_stay_in_memory_until_commit(db, db_path):
    before = db_path.read_text(encoding="utf-8")
    action = db.make_edit_buffer()

    action.set("k", "v").delete("a")
    assert action.get("k") == "v"
    assert db.get("k") is None
    assert db.get("a") == 1
    assert db_path.read_text(encoding="utf-8") == before

    assert action.commit() is db
    assert db.get("k") == "v"
    assert db.exists("a") is False


def test_rollback_after_commit_restores_snapshot(db):
    action = db.make_edit_buffer()
    action.set("k", "v")
    action.commit()
    assert db.get("k") == "v"

    assert action.rollback() is db
    assert db.cache() == {"a": 1, "nested": {"list": [1, 2]}}


def test_nested_mutation_does_not_leak_into_snapshot(db):
    action = db.make_edit_buffer()
    action.get("nested")["list"].append(3)
    assert action.original == {"a": 1, "nested": {"list": [1, 2]}}

    action.commit()
    assert db.get("nested") == {"list": [1, 2, 3]}
    action.rollback()
    assert db.get("nested") == {"list": [1, 2]}


def test_original_is_read_only(db):
    action = db.make_edit_buffer()
    action.original["a"] = 999
    assert action.original["a"] == 1


def test_dropped_buffer_has_no_disk_effect(db, db_path):
    before = db_path.read_text(encoding="utf-8")
    action = db.make_edit_buffer()
    action.set("x", 1).delete("a")
    del action
    assert db_path.read_text(encoding="utf-8") == before


def test_save_and_undo_aliases(db):
    action = db.make_edit_buffer()
    action.set("a", 2)
    action.save()
    assert db.get("a") == 2
    action.undo()
    assert db.get("a") == 1


def test_read_surface(db):
    action = db.make_edit_buffer()
    assert action.keys() == ["a", "nested"]
    assert action.values() == [1, {"list": [1, 2]}]
    assert action.count() == 2
    assert len(action) == 2
    assert list(action) == [1, {"list": [1, 2]}]
    assert "a" in action
    assert action.exists("nested") is True
    assert action.type_of("nested") == "object"
    assert action.type_of("missing") == "undefined"
    assert action.all()[0] == KeyedRecord(key="a", value=1)
    assert action.raw() == action.cache()


def test_math_push_pull_in_memory(db, db_path):
    before = db_path.read_text(encoding="utf-8")
    action = db.make_edit_buffer()

    assert action.math("a", "*", 10) == 10
    assert action.add("a", 5) == 15
    assert action.subtract("a", 1) == 14

    action.set("arr", [1, 2, 3]).push("arr", 4).pull("arr", 2)
    assert action.get("arr") == [1, 3, 4]
    assert db_path.read_text(encoding="utf-8") == before

    with pytest.raises(TypeMismatchError):
        action.math("arr", "+", 1)
    with pytest.raises(TypeMismatchError):
        action.push("a", 1)
    with pytest.raises(TypeMismatchError):
        action.pull("missing", 1)


def test_filter_in_memory(db):
    action = db.make_edit_buffer()
    action.set("b", 2).set("c", 3)
    action.filter(lambda value, key, index: key != "b" and index > 0)
    assert action.keys() == ["a", "b"]
    assert db.exists("c") is True


def test_math_rejects_complex_result_before_buffering(db):
    db.set("x", -8)
    action = db.make_edit_buffer()
    with pytest.raises(ValueError):
        action.math("x", "**", 0.5)
    assert action.get("x") == -8
    action.commit()
    assert db.get("x") == -8


def test_pull_keeps_booleans_and_numbers_apart(db):
    action = db.make_edit_buffer()
    action.set("arr", [True, 1, 0, False]).pull("arr", 1)
    assert action.get("arr") == [True, 0, False]
    assert type(action.get("arr")[0]) is bool
