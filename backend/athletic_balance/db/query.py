"""Fluent table access over the ORM metadata.

``TableClient(db).table("coaches").select("id, name").eq("id", "coach-fuel").execute()``
builds a SQLAlchemy Core statement with bound parameters, so the same chain
renders ``LIMIT`` on SQLite/PostgreSQL and ``TOP`` on SQL Server.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import status
from sqlalchemy import Table, and_, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import athletic_balance.models  # noqa: F401  registers tables on Base.metadata
from athletic_balance.core.errors import AppError
from athletic_balance.db.base import Base

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _Condition:
    column: str
    value: Any


@dataclass
class TableQuery:
    db: Session
    table: Table
    operation: str = "select"
    columns: list[str] = field(default_factory=list)
    conditions: list[_Condition] = field(default_factory=list)
    order_by: tuple[str, bool] | None = None
    limit_count: int | None = None
    values: dict[str, Any] = field(default_factory=dict)
    on_conflict: str = "id"

    def select(self, columns: str = "*") -> "TableQuery":
        self.operation = "select"
        if columns and columns.strip() != "*":
            self.columns = [self._column_name(name.strip()) for name in columns.split(",") if name.strip()]
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.conditions.append(_Condition(self._column_name(column), value))
        return self

    def order(self, column: str, ascending: bool = False) -> "TableQuery":
        self.order_by = (self._column_name(column), ascending)
        return self

    def limit(self, count: int) -> "TableQuery":
        if count < 0:
            raise AppError("limit must be non-negative", status.HTTP_400_BAD_REQUEST)
        self.limit_count = count
        return self

    def insert(self, row: dict[str, Any]) -> "TableQuery":
        self.operation = "insert"
        self.values = self._row(row)
        return self

    def upsert(self, row: dict[str, Any], on_conflict: str = "id") -> "TableQuery":
        self.operation = "upsert"
        self.values = self._row(row)
        self.on_conflict = self._column_name(on_conflict)
        if self.on_conflict not in self.values:
            raise AppError(
                f"Upsert row must include '{self.on_conflict}'", status.HTTP_400_BAD_REQUEST
            )
        return self

    def update(self, values: dict[str, Any]) -> "TableQuery":
        self.operation = "update"
        self.values = self._row(values)
        return self

    def delete(self) -> "TableQuery":
        self.operation = "delete"
        return self

    def execute(self) -> QueryResult:
        if self.operation in ("update", "delete") and not self.conditions:
            raise AppError(
                f"No condition provided for {self.operation}", status.HTTP_400_BAD_REQUEST
            )
        try:
            data = getattr(self, f"_run_{self.operation}")()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Query on %s failed: %s", self.table.name, exc)
            return QueryResult(error=str(exc.__cause__ or exc))
        return QueryResult(data=data)

    def _column_name(self, name: str) -> str:
        if name not in self.table.c:
            raise AppError(
                f"Unknown column '{name}' for table '{self.table.name}'",
                status.HTTP_400_BAD_REQUEST,
            )
        return name

    def _row(self, row: dict[str, Any]) -> dict[str, Any]:
        if not row:
            raise AppError("No values provided", status.HTTP_400_BAD_REQUEST)
        return {self._column_name(key): value for key, value in row.items()}

    def _where(self):
        return and_(*(self.table.c[cond.column] == cond.value for cond in self.conditions))

    def _primary_key_filter(self, row: dict[str, Any]):
        return and_(*(col == row[col.name] for col in self.table.primary_key.columns))

    def _fetch(self, statement) -> list[dict[str, Any]]:
        return [dict(row) for row in self.db.execute(statement).mappings()]

    def _run_select(self) -> list[dict[str, Any]]:
        targets = [self.table.c[name] for name in self.columns] or [self.table]
        statement = select(*targets)
        if self.conditions:
            statement = statement.where(self._where())
        if self.order_by:
            column = self.table.c[self.order_by[0]]
            statement = statement.order_by(column.asc() if self.order_by[1] else column.desc())
        if self.limit_count is not None:
            statement = statement.limit(self.limit_count)
        return self._fetch(statement)

    def _run_insert(self) -> dict[str, Any] | None:
        result = self.db.execute(insert(self.table).values(**self.values))
        keys = dict(zip(
            (col.name for col in self.table.primary_key.columns),
            result.inserted_primary_key,
        ))
        self.db.commit()
        rows = self._fetch(select(self.table).where(self._primary_key_filter(keys)))
        return rows[0] if rows else None

    def _run_upsert(self) -> dict[str, Any] | None:
        key_column = self.table.c[self.on_conflict]
        key_value = self.values[self.on_conflict]
        existing = self.db.execute(
            select(key_column).where(key_column == key_value)
        ).first()
        if existing is None:
            return self._run_insert()
        changes = {k: v for k, v in self.values.items() if k != self.on_conflict}
        if changes:
            self.db.execute(update(self.table).where(key_column == key_value).values(**changes))
            self.db.commit()
        rows = self._fetch(select(self.table).where(key_column == key_value))
        return rows[0] if rows else None

    def _run_update(self) -> list[dict[str, Any]]:
        pk_columns = list(self.table.primary_key.columns)
        matched = self._fetch(select(*pk_columns).where(self._where()))
        if not matched:
            return []
        self.db.execute(update(self.table).where(self._where()).values(**self.values))
        self.db.commit()
        updated: list[dict[str, Any]] = []
        for keys in matched:
            updated.extend(self._fetch(select(self.table).where(self._primary_key_filter(keys))))
        return updated

    def _run_delete(self) -> list[dict[str, Any]]:
        removed = self._fetch(select(self.table).where(self._where()))
        if removed:
            self.db.execute(delete(self.table).where(self._where()))
            self.db.commit()
        return removed


class TableClient:
    """Entry point for fluent queries, optionally limited to an allow-list of tables."""

    def __init__(self, db: Session, allowed_tables: set[str] | None = None):
        self.db = db
        self.allowed_tables = allowed_tables

    def table(self, name: str) -> TableQuery:
        if self.allowed_tables is not None and name not in self.allowed_tables:
            raise AppError(f"Table '{name}' not found", status.HTTP_404_NOT_FOUND)
        table = Base.metadata.tables.get(name)
        if table is None:
            raise AppError(f"Table '{name}' not found", status.HTTP_404_NOT_FOUND)
        return TableQuery(db=self.db, table=table)
