# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides the production QueryRunner: it renders a QuerySpec
# (see lib/query.py) onto the supabase query builder and executes it.
# It implements the singleton pattern to reuse a single async client.
#
# Every failure is wrapped in SupabaseClientError, which keeps the
# PostgREST / Postgres error code so callers can tell apart:
# - PGRST116: a single-row request matched zero (or several) rows
# - 23505: unique constraint violation
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   result = await SupabaseClient.run(QuerySpec(table="categories"))
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient, acreate_client

from app.config import settings
from lib.query import FilterOp, Operation, QueryResult, QuerySpec

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        remote_code: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        self.remote_code = remote_code

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    @property
    def is_no_rows(self) -> bool:
        """True when a single-row request matched no row."""
        return self.remote_code == NO_ROWS_CODE or NO_ROWS_CODE in self.message

    @property
    def is_unique_violation(self) -> bool:
        return self.remote_code == UNIQUE_VIOLATION_CODE


class SupabaseClient:
    """
    Async QueryRunner backed by Supabase.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods, so the class itself
    can be handed to services wherever a QueryRunner is expected.

    Example:
        spec = QuerySpec(table="tools", order=Order("rating", descending=True), limit=10)
        result = await SupabaseClient.run(spec)
        for row in result.rows:
            print(row["name"])
    """

    _instance: AsyncClient | None = None

    @classmethod
    async def get_client(cls) -> AsyncClient:
        """
        Get or create the singleton Supabase client.

        Uses the anon key so Row Level Security applies to every query.

        Returns:
            AsyncClient: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = await acreate_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_ANON_KEY,
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def build(cls, client: AsyncClient, spec: QuerySpec) -> Any:
        """
        Render a QuerySpec onto the supabase query builder.

        Returns the builder, ready for `await builder.execute()`.
        """
        table = client.table(spec.table)

        if spec.operation is Operation.SELECT:
            query = table.select(
                spec.select_clause(),
                count="exact" if spec.count else None,
                head=True if spec.head else None,
            )
        elif spec.operation is Operation.INSERT:
            query = table.insert(spec.values)
        elif spec.operation is Operation.UPDATE:
            query = table.update(spec.values)
        else:
            query = table.delete()

        for f in spec.filters:
            if f.op is FilterOp.EQ:
                query = query.eq(f.column, f.value)
            else:
                query = query.ilike(f.column, f.value)

        or_clause = spec.or_clause()
        if or_clause:
            query = query.or_(or_clause)

        if spec.order is not None:
            query = query.order(spec.order.column, desc=spec.order.descending)

        if spec.row_range is not None:
            start, end = spec.row_range
            query = query.range(start, end)

        if spec.limit is not None:
            query = query.limit(spec.limit)

        if spec.single:
            query = query.single()

        return query

    @classmethod
    async def run(cls, spec: QuerySpec) -> QueryResult:
        """
        Execute a QuerySpec.

        Args:
            spec: The statement to run

        Returns:
            QueryResult with rows (a single-row response is wrapped in a
            one-element list) and the exact count when requested

        Raises:
            SupabaseClientError: If the query fails
        """
        client = await cls.get_client()

        try:
            response = await cls.build(client, spec).execute()
        except Exception as e:
            remote_code = getattr(e, "code", None)
            message = getattr(e, "message", None) or str(e)
            raise SupabaseClientError(
                message=message,
                code="QUERY_FAILED",
                suggestion="Check that the table exists and the Supabase project is reachable",
                details={"table": spec.table, "operation": spec.operation.value},
                remote_code=str(remote_code) if remote_code else None,
            )

        data = response.data
        if data is None:
            rows: list[dict[str, Any]] = []
        elif isinstance(data, dict):
            rows = [data]
        else:
            rows = list(data)

        logger.debug(f"{spec.operation.value} {spec.table}: {len(rows)} rows")
        return QueryResult(rows=rows, count=response.count)
