# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - InMemoryRunner: a QueryRunner over plain dict tables that honours the
#   same QuerySpec fields Supabase does (embeds, filters, OR group, order,
#   inclusive range, limit, exact count, head, single) and raises the same
#   PostgREST error codes for "no rows" and unique violations
# - A small seeded directory (3 categories, 5 tools) and a 45-tool catalog
# =============================================================================

import os
import re
from datetime import datetime, timedelta, timezone
from itertools import count

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from lib.query import FilterOp, Operation, QueryResult, QuerySpec
from lib.supabase_client import NO_ROWS_CODE, UNIQUE_VIOLATION_CODE, SupabaseClientError

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"


# =============================================================================
# In-memory QueryRunner
# =============================================================================

def _like(pattern: str, value) -> bool:
    """Case-insensitive SQL LIKE."""
    regex = "".join(
        ".*" if ch == "%" else "." if ch == "_" else re.escape(ch)
        for ch in pattern
    )
    return re.fullmatch(regex, "" if value is None else str(value), re.IGNORECASE | re.DOTALL) is not None


def _holds(row: dict, f) -> bool:
    if f.op is FilterOp.EQ:
        return row.get(f.column) == f.value
    return _like(f.value, row.get(f.column))


class InMemoryRunner:
    """
    QueryRunner backed by dict rows.

    Attributes:
        tables: table name -> list of row dicts
        calls: every QuerySpec run, in order
        failures: table name -> exception raised for any query on it
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables = {name: [dict(row) for row in rows] for name, rows in (tables or {}).items()}
        self.calls: list[QuerySpec] = []
        self.failures: dict[str, Exception] = {}
        self._ids = count(1)

    def fail(self, table: str, exc: Exception | None = None) -> None:
        self.failures[table] = exc or SupabaseClientError(
            "connection refused",
            code="QUERY_FAILED",
        )

    def calls_for(self, table: str) -> list[QuerySpec]:
        return [spec for spec in self.calls if spec.table == table]

    async def run(self, spec: QuerySpec) -> QueryResult:
        self.calls.append(spec)
        if spec.table in self.failures:
            raise self.failures[spec.table]

        rows = self.tables.setdefault(spec.table, [])
        if spec.operation is Operation.INSERT:
            return self._insert(spec, rows)

        matched = [
            row for row in rows
            if all(_holds(row, f) for f in spec.filters)
            and (not spec.any_of or any(_holds(row, f) for f in spec.any_of))
        ]

        if spec.operation is Operation.UPDATE:
            for row in matched:
                row.update(spec.values)
            return QueryResult(rows=[dict(row) for row in matched])

        if spec.operation is Operation.DELETE:
            self.tables[spec.table] = [
                row for row in rows if not any(row is m for m in matched)
            ]
            return QueryResult(rows=[dict(row) for row in matched])

        if spec.order is not None:
            matched.sort(key=lambda row: row.get(spec.order.column), reverse=spec.order.descending)

        total = len(matched) if spec.count else None
        if spec.row_range is not None:
            start, end = spec.row_range
            matched = matched[start:end + 1]
        if spec.limit is not None:
            matched = matched[:spec.limit]
        if spec.head:
            return QueryResult(rows=[], count=total)

        projected = [self._project(row, spec.columns, spec.embeds) for row in matched]
        if spec.single and len(projected) != 1:
            raise SupabaseClientError(
                "JSON object requested, multiple (or no) rows returned",
                code="QUERY_FAILED",
                remote_code=NO_ROWS_CODE,
            )
        return QueryResult(rows=projected, count=total)

    def _insert(self, spec: QuerySpec, rows: list[dict]) -> QueryResult:
        values = dict(spec.values)
        if spec.table == "favorites" and any(
            row.get("user_id") == values.get("user_id")
            and row.get("tool_id") == values.get("tool_id")
            for row in rows
        ):
            raise SupabaseClientError(
                'duplicate key value violates unique constraint "favorites_user_id_tool_id_key"',
                code="QUERY_FAILED",
                remote_code=UNIQUE_VIOLATION_CODE,
            )
        values.setdefault("id", f"{spec.table}-{next(self._ids)}")
        values.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        rows.append(values)
        return QueryResult(rows=[dict(values)])

    def _project(self, row: dict, columns, embeds) -> dict:
        if "*" in columns:
            out = dict(row)
        else:
            out = {column: row.get(column) for column in columns}
        for embed in embeds:
            target = next(
                (
                    candidate for candidate in self.tables.get(embed.table, [])
                    if candidate.get("id") == row.get(embed.foreign_key)
                ),
                None,
            )
            out[embed.alias] = (
                self._project(target, embed.columns, embed.embeds) if target is not None else None
            )
        return out


# =============================================================================
# Data
# =============================================================================

def make_tool_rows(n: int) -> list[dict]:
    """n tools spread over c1..c3, one minute apart (tool-n is newest)."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        {
            "id": f"tool-{i:02d}",
            "name": f"Tool {i:02d}",
            "description": f"Generated tool number {i}",
            "category_id": f"c{(i % 3) + 1}",
            "is_free": i % 2 == 0,
            "rating": round((i % 10) * 0.5, 1),
            "url": f"https://tools.example.com/{i}",
            "created_at": (base + timedelta(minutes=i)).isoformat(),
        }
        for i in range(1, n + 1)
    ]


@pytest.fixture
def category_rows():
    """Three categories."""
    return [
        {"id": "c1", "name": "Writing", "description": "Copy and editing", "icon": "W"},
        {"id": "c2", "name": "Design", "description": "Images and layout", "icon": "D"},
        {"id": "c3", "name": "Coding", "description": "Developer tools", "icon": "C"},
    ]


@pytest.fixture
def tool_rows():
    """Five hand-picked tools, oldest first."""
    return [
        {
            "id": "t1", "name": "ChatGPT", "description": "Conversational assistant for writing",
            "category_id": "c1", "is_free": True, "rating": 4.8,
            "url": "https://chat.openai.com", "created_at": "2024-01-01T00:00:00+00:00",
        },
        {
            "id": "t2", "name": "Midjourney", "description": "Image generation from prompts",
            "category_id": "c2", "is_free": False, "rating": 4.6,
            "url": "https://midjourney.com", "created_at": "2024-01-02T00:00:00+00:00",
        },
        {
            "id": "t3", "name": "Copilot", "description": "AI pair programmer",
            "category_id": "c3", "is_free": False, "rating": 4.5,
            "url": "https://github.com/features/copilot", "created_at": "2024-01-03T00:00:00+00:00",
        },
        {
            "id": "t4", "name": "Canva Magic", "description": "Design assistant with image tools",
            "category_id": "c2", "is_free": True, "rating": 4.2,
            "url": "https://canva.com", "created_at": "2024-01-04T00:00:00+00:00",
        },
        {
            "id": "t5", "name": "Grammarly", "description": "Writing and grammar checker",
            "category_id": "c1", "is_free": True, "rating": 4.0,
            "url": "https://grammarly.com", "created_at": "2024-01-05T00:00:00+00:00",
        },
    ]


@pytest.fixture
def runner(category_rows, tool_rows):
    """InMemoryRunner seeded with the small directory and no favorites."""
    return InMemoryRunner({
        "categories": category_rows,
        "tools": tool_rows,
        "favorites": [],
    })


@pytest.fixture
def large_runner(category_rows):
    """InMemoryRunner with 45 generated tools."""
    return InMemoryRunner({
        "categories": category_rows,
        "tools": make_tool_rows(45),
        "favorites": [],
    })


@pytest.fixture
def fake_clock():
    """Settable clock: call it for the time, assign `.now` to move it."""
    class Clock:
        now = 0.0

        def __call__(self) -> float:
            return self.now

    return Clock()
