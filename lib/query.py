# =============================================================================
# lib/query.py - Remote Query Shape
# =============================================================================
# Describes one request against the remote database without tying it to a
# transport. A QuerySpec carries everything PostgREST needs:
# - table and column projection (with nested embeds of related tables)
# - equality / substring filters and one OR group
# - ordering, a row range or a row limit
# - exact count, head-only and single-row flags
#
# Anything with `async run(spec) -> QueryResult` is a QueryRunner. The
# Supabase wrapper in lib/supabase_client.py is the production runner;
# tests use an in-memory runner over plain dict rows.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class Operation(str, Enum):
    """Kind of statement a QuerySpec issues."""
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class FilterOp(str, Enum):
    """
    Supported filter operators.

    - eq: exact equality
    - ilike: case-insensitive LIKE pattern (`%` and `_` wildcards)
    """
    EQ = "eq"
    ILIKE = "ilike"


@dataclass(frozen=True)
class Filter:
    """A single `column <op> value` predicate."""
    column: str
    op: FilterOp
    value: Any

    def to_postgrest(self) -> str:
        """
        Render as a PostgREST logic-tree term, e.g. `name.ilike."%gpt%"`.

        Values are double-quoted so reserved characters (`,` `.` `:` `(` `)`)
        inside a user keyword cannot break the OR expression.
        """
        text = str(self.value).replace("\\", "\\\\").replace('"', '\\"')
        return f'{self.column}.{self.op.value}."{text}"'


@dataclass(frozen=True)
class Embed:
    """
    A related table embedded in the projection.

    Example:
        Embed("category", "categories", "category_id", ("id", "name"))
        renders as  category:categories(id, name)
    """
    alias: str
    table: str
    foreign_key: str
    columns: tuple[str, ...] = ("*",)
    embeds: tuple[Embed, ...] = ()

    def render(self) -> str:
        inner = ", ".join([*self.columns, *(e.render() for e in self.embeds)])
        return f"{self.alias}:{self.table}({inner})"


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class QuerySpec:
    """
    One remote statement.

    `row_range` is inclusive on both ends, matching PostgREST's Range header.
    `single` asks for exactly one row; the remote reports an error when zero
    or several rows match.
    """
    table: str
    operation: Operation = Operation.SELECT
    columns: tuple[str, ...] = ("*",)
    embeds: tuple[Embed, ...] = ()
    filters: tuple[Filter, ...] = ()
    any_of: tuple[Filter, ...] = ()
    order: Order | None = None
    row_range: tuple[int, int] | None = None
    limit: int | None = None
    count: bool = False
    head: bool = False
    single: bool = False
    values: dict[str, Any] = field(default_factory=dict)

    def select_clause(self) -> str:
        """Render the projection, e.g. `*, category:categories(id, name)`."""
        return ", ".join([*self.columns, *(e.render() for e in self.embeds)])

    def or_clause(self) -> str | None:
        if not self.any_of:
            return None
        return ",".join(f.to_postgrest() for f in self.any_of)


@dataclass
class QueryResult:
    """Rows returned by a QuerySpec plus the exact count when requested."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    count: int | None = None

    @property
    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


class QueryRunner(Protocol):
    """Executes QuerySpecs against a data store."""

    async def run(self, spec: QuerySpec) -> QueryResult:
        ...
