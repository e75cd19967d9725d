"""Integration tests: build → execute against a real SQLite in-memory DB.

Covers every terminal operation, the SET-then-WHERE binding order, the
``IN`` / ``ILIKE`` dialect mappings, row-model hydration, and driver
error propagation.
"""
from __future__ import annotations

import sqlite3

import pytest
from pydantic import BaseModel

from chainql import Builder, DriverNotConnectedError, SQLiteConfig, SQLiteDriver
from tests.fixtures import load_ddl

pytestmark = pytest.mark.skipif(
    sqlite3.sqlite_version_info < (3, 35, 0),
    reason="RETURNING requires SQLite >= 3.35",
)

SEED = [
    {"name": "Alice", "email": "alice@acme.com", "age": 34, "created_at": "2024-01-01"},
    {"name": "Bob", "email": "bob@acme.com", "age": 17, "created_at": "2024-02-01"},
    {"name": "Charlie", "email": "charlie@acme.com", "age": 25, "created_at": "2024-03-01"},
    {"name": "Diana", "email": None, "age": 41, "created_at": "2024-04-01"},
]


class User(BaseModel):
    id: int
    name: str
    email: str | None = None
    age: int | None = None
    active: int = 1
    created_at: str | None = None


@pytest.fixture()
async def driver():
    async with SQLiteDriver() as drv:
        for stmt in load_ddl("sqlite"):
            await drv.execute(stmt, [])
        yield drv


@pytest.fixture()
async def db(driver) -> Builder:
    builder = Builder(driver)
    await builder.table("users").create_many(SEED)
    return builder


async def test_create_returns_generated_row(driver):
    row = await Builder(driver).table("users").create({"name": "Eve", "age": 29})
    assert row["id"] == 1
    assert row["name"] == "Eve"
    assert row["active"] == 1


async def test_create_then_first_round_trip(db):
    data = {"name": "Frank", "email": "frank@acme.com", "age": 52}
    created = await db.table("users").create(data)
    fetched = await db.table("users").where("id", "=", created["id"]).first()
    for key, value in data.items():
        assert fetched[key] == value


async def test_create_many_keeps_input_order(db):
    rows = await db.table("users").order_by("id").get()
    assert [r["name"] for r in rows] == ["Alice", "Bob", "Charlie", "Diana"]


async def test_where_order_limit_offset(db):
    rows = await (
        db.table("users")
        .select("name")
        .where("age", ">", 18)
        .order_by("age", "desc")
        .limit(2)
        .offset(1)
        .get()
    )
    assert rows == [{"name": "Alice"}, {"name": "Charlie"}]


async def test_distinct(db):
    await db.table("users").create({"name": "Alice", "age": 99})
    rows = await db.table("users").select("name").distinct().order_by("name").get()
    assert [r["name"] for r in rows] == ["Alice", "Bob", "Charlie", "Diana"]


async def test_first_and_missing_row(db):
    alice = await db.table("users").where("email", "=", "alice@acme.com").first()
    assert alice["name"] == "Alice"
    assert await db.table("users").where("email", "=", "nobody@acme.com").first() is None


async def test_count(db):
    assert await db.table("users").count() == 4
    assert await db.table("users").where("age", ">=", 18).count() == 3


async def test_in_and_ilike(db):
    rows = await db.table("users").where("name", "in", ["Bob", "Diana"]).order_by("name").get()
    assert [r["name"] for r in rows] == ["Bob", "Diana"]
    rows = await db.table("users").where("name", "ilike", "c%").get()
    assert [r["name"] for r in rows] == ["Charlie"]


async def test_update_binds_set_before_where(db):
    updated = await (
        db.table("users")
        .where("name", "=", "Bob")
        .where("age", "=", 17)
        .update({"age": 18, "active": 0})
    )
    # UPDATE carries no RETURNING clause, so the driver hands back nothing.
    assert updated == []
    bob = await db.table("users").where("name", "=", "Bob").first()
    assert bob["age"] == 18
    assert bob["active"] == 0
    # Nobody else was touched.
    assert await db.table("users").where("active", "=", 1).count() == 3


async def test_unguarded_update_touches_every_row(db):
    await db.table("users").update({"active": 0})
    assert await db.table("users").where("active", "=", 0).count() == 4


async def test_delete(db):
    await db.table("users").where("age", "<", 18).delete()
    assert await db.table("users").count() == 3
    await db.table("users").delete()
    assert await db.table("users").count() == 0


async def test_table_switch_does_not_leak(db):
    users = db.table("users").where("age", ">", 100)
    await users.table("posts").create({"user_id": 1, "title": "hello"})
    assert await db.table("posts").count() == 1


async def test_rows_hydrated_into_model(db):
    users = db.table("users", User)
    rows = await users.where("age", ">", 40).get()
    assert rows == [
        User(id=4, name="Diana", email=None, age=41, active=1, created_at="2024-04-01")
    ]


async def test_constraint_violation_propagates_and_keeps_earlier_rows(db):
    with pytest.raises(sqlite3.IntegrityError):
        await db.table("users").create_many(
            [
                {"name": "Gina", "email": "gina@acme.com"},
                {"name": "Alice II", "email": "alice@acme.com"},
            ]
        )
    # No transaction: the first insert stays committed.
    assert await db.table("users").where("name", "=", "Gina").count() == 1


async def test_execute_before_connect_fails():
    driver = SQLiteDriver(SQLiteConfig(database=":memory:"))
    with pytest.raises(DriverNotConnectedError):
        await Builder(driver).table("users").get()
