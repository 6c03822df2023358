"""
tests/conftest.py

Shared fixtures: an in-memory SQLite database with foreign keys enforced,
a session bound to it and small sheet builders.
"""

from __future__ import annotations

from collections.abc import Generator, Iterator, Sequence

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers all ORM models on Base.metadata
from db.base import Base
from db.session import build_session_factory

CSV_HEADER = (
    "ID",
    "Product Name",
    "Opening Inventory",
    "Procurement Qty (Day 1)",
    "Procurement Price (Day 1)",
    "Sales Qty (Day 1)",
    "Sales Price (Day 1)",
    "Procurement Qty (Day 2)",
    "Procurement Price (Day 2)",
    "Sales Qty (Day 2)",
    "Sales Price (Day 2)",
)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
def engine() -> Iterator[Engine]:
    sqlite_engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(sqlite_engine)
    try:
        yield sqlite_engine
    finally:
        Base.metadata.drop_all(sqlite_engine)
        sqlite_engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


def render_csv(rows: Sequence[Sequence[object]], header: Sequence[str] = CSV_HEADER) -> bytes:
    """Render *rows* below *header* as UTF-8 CSV bytes."""
    lines = [",".join(header)]
    lines.extend(",".join("" if value is None else str(value) for value in row) for row in rows)
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture()
def sample_csv() -> bytes:
    """Two products over two days; Apple opens at 10 and ends day 2 at 9."""
    return render_csv(
        [
            ("A1", "Apple", 10, 5, 2, 3, 4, 0, 0, 3, 4),
            ("B1", "Banana", 20, 0, 0, 5, 1.5, 10, 1, 0, 0),
        ]
    )


@pytest.fixture()
def csv_header() -> tuple[str, ...]:
    return CSV_HEADER


@pytest.fixture()
def make_csv():
    """Builder for ad-hoc CSV uploads using the two-day header by default."""
    return render_csv
