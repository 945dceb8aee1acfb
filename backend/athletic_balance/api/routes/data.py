import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from athletic_balance.api import deps
from athletic_balance.core.errors import AppError
from athletic_balance.db.query import QueryResult, TableClient, TableQuery
from athletic_balance.db.session import get_db
from athletic_balance.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

EXPOSED_TABLES = {"profiles", "coaches", "coach_sessions"}
RESERVED_PARAMS = {"columns", "order", "direction", "limit"}
# Rows in these tables belong to the user whose id sits in the named column.
OWNER_COLUMNS = {"profiles": "id", "coach_sessions": "user_id"}


def _client(db: Session) -> TableClient:
    return TableClient(db, allowed_tables=EXPOSED_TABLES)


def _conditions(request: Request, reserved: set[str] = frozenset()) -> list[tuple[str, str]]:
    return [(key, value) for key, value in request.query_params.multi_items() if key not in reserved]


def _scoped(query: TableQuery, table: str, user: User) -> TableQuery:
    owner_column = OWNER_COLUMNS.get(table)
    if owner_column is not None:
        query = query.eq(owner_column, user.id)
    return query


def _owned_values(payload: dict[str, Any], table: str, user: User) -> dict[str, Any]:
    owner_column = OWNER_COLUMNS.get(table)
    if owner_column is None:
        return payload
    return {**payload, owner_column: user.id}


def _require_conditions(conditions: list[tuple[str, str]], action: str) -> None:
    if not conditions:
        raise AppError(f"No condition provided for {action}", status.HTTP_400_BAD_REQUEST)


def _unwrap(result: QueryResult, action: str) -> Any:
    if not result.ok:
        logger.error("Data %s error: %s", action, result.error)
        raise AppError(result.error)
    return result.data


@router.get("/data/{table}")
def read_rows(
    table: str,
    request: Request,
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> dict[str, Any]:
    params = request.query_params
    query = _scoped(_client(db).table(table).select(params.get("columns") or "*"), table, current_user)
    for column, value in _conditions(request, RESERVED_PARAMS):
        query = query.eq(column, value)
    if params.get("order"):
        query = query.order(params["order"], ascending=params.get("direction", "DESC").upper() == "ASC")
    if params.get("limit"):
        try:
            limit = int(params["limit"])
        except ValueError as exc:
            raise AppError("limit must be an integer", status.HTTP_400_BAD_REQUEST) from exc
        query = query.limit(limit)
    return {"results": _unwrap(query.execute(), "fetch")}


@router.post("/data/{table}")
def insert_row(
    table: str,
    payload: dict[str, Any] = Body(...),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> dict[str, Any]:
    result = _client(db).table(table).insert(_owned_values(payload, table, current_user)).execute()
    return {"data": _unwrap(result, "insert")}


@router.patch("/data/{table}")
def update_rows(
    table: str,
    request: Request,
    payload: dict[str, Any] = Body(...),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> dict[str, Any]:
    conditions = _conditions(request)
    _require_conditions(conditions, "update")
    query = _client(db).table(table).update(_owned_values(payload, table, current_user))
    query = _scoped(query, table, current_user)
    for column, value in conditions:
        query = query.eq(column, value)
    return {"data": _unwrap(query.execute(), "update")}


@router.delete("/data/{table}")
def delete_rows(
    table: str,
    request: Request,
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> dict[str, Any]:
    conditions = _conditions(request)
    _require_conditions(conditions, "delete")
    query = _scoped(_client(db).table(table).delete(), table, current_user)
    for column, value in conditions:
        query = query.eq(column, value)
    return {"data": _unwrap(query.execute(), "delete")}
