"""Integration tests: build → compile → execute against an in-memory sqlite3 DB.

Covers every terminal verb, every predicate variant, joins, grouping with
HAVING, paging, NULL handling and driver-error wrapping.
"""
from __future__ import annotations

import sqlite3

import pytest

from fluentql import BuilderConfig, DBAPIExecutor, QueryBuilder
from fluentql.errors import ExecutionError


def _qb(db: sqlite3.Connection, **config) -> QueryBuilder:
    return QueryBuilder.for_connection(db, BuilderConfig(**config))


@pytest.mark.integration
def test_get_all_rows(db):
    rows = _qb(db).table("users").select("id", "name").order_by("id").get()
    assert [r["name"] for r in rows] == ["alice", "bob", "carol", "dave", "erin"]
    assert rows[0] == {"id": 1, "name": "alice"}


@pytest.mark.integration
def test_where_and_or_where(db):
    rows = (
        _qb(db)
        .table("users")
        .select("name")
        .where("age", ">", 50)
        .or_where("name", "bob")
        .order_by("name")
        .get()
    )
    assert [r["name"] for r in rows] == ["bob", "carol", "dave"]


@pytest.mark.integration
def test_leading_or_where_behaves_like_where(db):
    rows = (
        _qb(db)
        .table("users")
        .select("name")
        .or_where("team_id", 1)
        .where("age", ">=", 18)
        .get()
    )
    assert [r["name"] for r in rows] == ["alice"]


@pytest.mark.integration
def test_where_in_and_between(db):
    qb = (
        _qb(db)
        .table("users")
        .select("name")
        .where_in("team_id", [1, 2])
        .where_between("age", [18, 40])
        .order_by("name")
    )
    assert [r["name"] for r in qb.get()] == ["alice", "erin"]


@pytest.mark.integration
def test_null_predicates(db):
    missing = _qb(db).table("users").select("name").where_null("email").order_by("name").get()
    present = _qb(db).table("users").select("name").where_not_null("email").get()
    assert [r["name"] for r in missing] == ["bob", "dave"]
    assert len(present) == 3


@pytest.mark.integration
def test_bulk_where_mapping(db):
    row = _qb(db).table("users").where({"team_id": 2, "name": "erin"}).first()
    assert row is not None
    assert row["age"] == 29


@pytest.mark.integration
def test_joins(db):
    inner = (
        _qb(db)
        .table("users")
        .select("users.name", "teams.name AS team")
        .join("teams", "users.team_id", "teams.id")
        .order_by("users.id")
        .get()
    )
    left = (
        _qb(db)
        .table("users")
        .select("users.name", "teams.name AS team")
        .left_join("teams", "users.team_id", "=", "teams.id")
        .where_null("teams.id")
        .get()
    )
    assert len(inner) == 4
    assert inner[0] == {"name": "alice", "team": "core"}
    assert left == [{"name": "dave", "team": None}]


@pytest.mark.integration
def test_group_by_having(db):
    rows = (
        _qb(db)
        .table("users")
        .select("team_id", "COUNT(*) AS n", "MAX(age) AS oldest")
        .where_not_null("team_id")
        .group_by("team_id")
        .having("COUNT(*)", ">=", 2)
        .having("MAX(age)", ">", 40)
        .get()
    )
    assert rows == [{"team_id": 2, "n": 2, "oldest": 52}]


@pytest.mark.integration
def test_limit_offset_paging(db):
    page = _qb(db).table("users").select("id").order_by("id").limit(2).offset(2).get()
    assert [r["id"] for r in page] == [3, 4]


@pytest.mark.integration
def test_first_and_no_match(db):
    qb = _qb(db).table("users").order_by("age", "desc")
    assert qb.first()["name"] == "dave"
    assert qb.where("age", ">", 100).first() is None


@pytest.mark.integration
def test_insert_returns_rowid(db):
    new_id = _qb(db).table("users").insert({"name": "frank", "age": 41})
    assert new_id == 6
    row = _qb(db).table("users").where("id", new_id).first()
    assert row["name"] == "frank"
    assert row["email"] is None


@pytest.mark.integration
def test_update_returns_affected_count(db):
    count = _qb(db).table("users").where("team_id", 1).update({"team_id": 2, "age": 40})
    assert count == 2
    rows = _qb(db).table("users").select("name").where("team_id", 2).where("age", 40).get()
    assert {r["name"] for r in rows} == {"alice", "bob"}


@pytest.mark.integration
def test_delete_returns_affected_count(db):
    count = _qb(db).table("users").where("age", "<", 18).delete()
    assert count == 1
    assert len(_qb(db).table("users").get()) == 4


@pytest.mark.integration
def test_constraint_violation_wrapped(db):
    with pytest.raises(ExecutionError) as exc_info:
        _qb(db).table("users").insert({"name": "alice"})
    assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)
    assert "UNIQUE" in str(exc_info.value)


@pytest.mark.integration
def test_unknown_table_wrapped(db):
    with pytest.raises(ExecutionError, match="no such table"):
        _qb(db).table("nope").get()


@pytest.mark.integration
def test_executor_can_be_shared_between_builders(db):
    executor = DBAPIExecutor(db)
    QueryBuilder(executor).table("teams").insert({"id": 3, "name": "data"})
    assert executor.last_insert_id() == 3
    assert QueryBuilder(executor).table("teams").where("id", 3).first() == {"id": 3, "name": "data"}
