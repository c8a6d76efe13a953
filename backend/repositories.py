from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence
from uuid import uuid4

from sqlalchemy import bindparam, text as sql_text

from backend.constants import (
    COLLECTION_COLUMNS,
    ENTERTAINMENT_TABLE,
    EXPENSES_TABLE,
    PROFILES_TABLE,
    PROJECTS_TABLE,
    TODOS_TABLE,
)
from backend.db import get_sessionmaker

SCOPE_COLUMN = "user_email"

FILTER_OPERATORS = {
    "eq": "=",
    "neq": "<>",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
}

EDITABLE_COLUMNS = {
    EXPENSES_TABLE: {"amount", "description", "category", "date"},
    TODOS_TABLE: {"title", "description", "completed", "due_date"},
    PROJECTS_TABLE: {"title", "description", "status"},
    ENTERTAINMENT_TABLE: {"title", "type", "status"},
}


@dataclass(frozen=True)
class RecordFilter:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class RecordOrder:
    field: str
    descending: bool = False
    nulls_last: bool = False


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _collection_columns(collection: str) -> list[str]:
    columns = COLLECTION_COLUMNS.get(collection)
    if columns is None:
        raise ValueError(f"Unknown collection: {collection}")
    return columns


def _check_column(collection: str, field: str) -> None:
    if field not in _collection_columns(collection):
        raise ValueError(f"Unknown field {field!r} for collection {collection!r}")


def _as_orders(order: RecordOrder | Sequence[RecordOrder] | None) -> list[RecordOrder]:
    if order is None:
        return []
    if isinstance(order, RecordOrder):
        return [order]
    return list(order)


def build_record_query(
    user_email: str,
    collection: str,
    filters: Iterable[RecordFilter] = (),
    order: RecordOrder | Sequence[RecordOrder] | None = None,
    limit: int | None = None,
):
    """Build the scoped SELECT for ``query_records``.

    The owner clause is always present; callers cannot widen the scope. Field
    names are checked against the collection whitelist before they reach SQL.
    """
    columns = _collection_columns(collection)
    clauses = [f"{SCOPE_COLUMN} = :scope_user_email"]
    params: dict[str, Any] = {"scope_user_email": user_email}
    expanding = []
    for index, item in enumerate(filters):
        _check_column(collection, item.field)
        name = f"f{index}_{item.field}"
        if item.op == "in":
            clauses.append(f"{item.field} IN :{name}")
            params[name] = list(item.value or [])
            expanding.append(name)
        elif item.op in FILTER_OPERATORS:
            if item.value is None and item.op in {"eq", "neq"}:
                clauses.append(f"{item.field} IS {'NOT ' if item.op == 'neq' else ''}NULL")
                continue
            clauses.append(f"{item.field} {FILTER_OPERATORS[item.op]} :{name}")
            params[name] = item.value
        else:
            raise ValueError(f"Unsupported filter operator: {item.op}")

    sql = f"SELECT {', '.join(columns)} FROM {collection} WHERE {' AND '.join(clauses)}"
    order_parts = []
    for item in _as_orders(order):
        _check_column(collection, item.field)
        part = f"{item.field} {'DESC' if item.descending else 'ASC'}"
        if item.nulls_last:
            part += " NULLS LAST"
        order_parts.append(part)
    if order_parts:
        sql += f" ORDER BY {', '.join(order_parts)}"
    if limit is not None:
        sql += " LIMIT :row_limit"
        params["row_limit"] = int(limit)

    statement = sql_text(sql)
    if expanding:
        statement = statement.bindparams(*[bindparam(name, expanding=True) for name in expanding])
    return statement, params


async def query_records(
    user_email: str,
    collection: str,
    filters: Iterable[RecordFilter] = (),
    order: RecordOrder | Sequence[RecordOrder] | None = None,
    limit: int | None = None,
) -> list[dict]:
    statement, params = build_record_query(user_email, collection, filters, order, limit)
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(statement, params)).mappings().all()
    return [dict(row) for row in rows]


async def _get_record(collection: str, user_email: str, record_id: str) -> dict | None:
    rows = await query_records(
        user_email,
        collection,
        [RecordFilter("id", "eq", record_id)],
        limit=1,
    )
    return rows[0] if rows else None


async def _insert_record(collection: str, record: dict) -> dict:
    columns = list(record.keys())
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                INSERT INTO {collection} ({', '.join(columns)})
                VALUES ({', '.join(f':{col}' for col in columns)})
                RETURNING {', '.join(_collection_columns(collection))}
                """
            ),
            record,
        )).mappings().fetchone()
        await session.commit()
    return dict(row)


async def _update_record(collection: str, user_email: str, record_id: str, patch: dict) -> dict | None:
    allowed = EDITABLE_COLUMNS[collection]
    params = {"id": record_id, "user_email": user_email}
    updates = []
    for key, value in (patch or {}).items():
        if key not in allowed:
            continue
        updates.append(f"{key} = :{key}")
        params[key] = value
    if not updates:
        return await _get_record(collection, user_email, record_id)
    updates.append("updated_at = :updated_at")
    params["updated_at"] = _utcnow()
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                UPDATE {collection}
                SET {', '.join(updates)}
                WHERE id = :id AND user_email = :user_email
                RETURNING {', '.join(_collection_columns(collection))}
                """
            ),
            params,
        )).mappings().fetchone()
        await session.commit()
    return dict(row) if row else None


async def _delete_record(collection: str, user_email: str, record_id: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {collection} WHERE id = :id AND user_email = :user_email"),
            {"id": record_id, "user_email": user_email},
        )
        await session.commit()
    return bool(result.rowcount)


def _new_record(user_email: str, fields: dict) -> dict:
    now = _utcnow()
    return {
        "id": _new_id(),
        "user_email": user_email,
        **fields,
        "created_at": now,
        "updated_at": now,
    }


# Expenses


async def list_expenses(user_email: str, category: str | None = None) -> list[dict]:
    filters = [RecordFilter("category", "eq", category)] if category else []
    return await query_records(
        user_email,
        EXPENSES_TABLE,
        filters,
        order=[RecordOrder("date", descending=True), RecordOrder("created_at", descending=True)],
    )


async def create_expense(user_email: str, payload: dict) -> dict:
    record = _new_record(
        user_email,
        {
            "amount": payload["amount"],
            "description": payload["description"],
            "category": payload["category"],
            "date": payload["date"],
        },
    )
    return await _insert_record(EXPENSES_TABLE, record)


async def update_expense(user_email: str, expense_id: str, patch: dict) -> dict | None:
    return await _update_record(EXPENSES_TABLE, user_email, expense_id, patch)


async def delete_expense(user_email: str, expense_id: str) -> bool:
    return await _delete_record(EXPENSES_TABLE, user_email, expense_id)


# Todos


async def list_todos(user_email: str) -> list[dict]:
    return await query_records(user_email, TODOS_TABLE, order=RecordOrder("created_at", descending=True))


async def create_todo(user_email: str, payload: dict) -> dict:
    record = _new_record(
        user_email,
        {
            "title": payload["title"],
            "description": payload.get("description"),
            "completed": bool(payload.get("completed", False)),
            "due_date": payload.get("due_date"),
        },
    )
    return await _insert_record(TODOS_TABLE, record)


async def update_todo(user_email: str, todo_id: str, patch: dict) -> dict | None:
    clean = dict(patch or {})
    if clean.get("completed") is None:
        clean.pop("completed", None)
    else:
        clean["completed"] = bool(clean["completed"])
    return await _update_record(TODOS_TABLE, user_email, todo_id, clean)


async def delete_todo(user_email: str, todo_id: str) -> bool:
    return await _delete_record(TODOS_TABLE, user_email, todo_id)


# Projects


async def list_projects(user_email: str) -> list[dict]:
    return await query_records(user_email, PROJECTS_TABLE, order=RecordOrder("created_at", descending=True))


async def create_project(user_email: str, payload: dict) -> dict:
    record = _new_record(
        user_email,
        {
            "title": payload["title"],
            "description": payload.get("description"),
            "status": payload.get("status") or "idea",
        },
    )
    return await _insert_record(PROJECTS_TABLE, record)


async def update_project(user_email: str, project_id: str, patch: dict) -> dict | None:
    return await _update_record(PROJECTS_TABLE, user_email, project_id, patch)


async def delete_project(user_email: str, project_id: str) -> bool:
    return await _delete_record(PROJECTS_TABLE, user_email, project_id)


# Entertainment


async def list_entertainment(user_email: str, item_type: str | None = None) -> list[dict]:
    filters = [RecordFilter("type", "eq", item_type)] if item_type else []
    return await query_records(
        user_email,
        ENTERTAINMENT_TABLE,
        filters,
        order=RecordOrder("created_at", descending=True),
    )


async def get_entertainment(user_email: str, item_id: str) -> dict | None:
    return await _get_record(ENTERTAINMENT_TABLE, user_email, item_id)


async def create_entertainment(user_email: str, payload: dict) -> dict:
    record = _new_record(
        user_email,
        {
            "title": payload["title"],
            "type": payload["type"],
            "status": payload["status"],
        },
    )
    return await _insert_record(ENTERTAINMENT_TABLE, record)


async def update_entertainment(user_email: str, item_id: str, patch: dict) -> dict | None:
    return await _update_record(ENTERTAINMENT_TABLE, user_email, item_id, patch)


async def delete_entertainment(user_email: str, item_id: str) -> bool:
    return await _delete_record(ENTERTAINMENT_TABLE, user_email, item_id)


# Profile


async def get_profile(user_email: str) -> dict | None:
    rows = await query_records(user_email, PROFILES_TABLE, limit=1)
    return rows[0] if rows else None


async def upsert_profile(user_email: str, patch: dict) -> dict:
    clean = {key: patch[key] for key in ("username", "avatar_url") if key in (patch or {})}
    now = _utcnow()
    payload = {"user_email": user_email, "created_at": now, "updated_at": now, **clean}
    columns = list(payload.keys())
    updates = ", ".join([f"{col}=EXCLUDED.{col}" for col in [*clean.keys(), "updated_at"]])
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                INSERT INTO {PROFILES_TABLE} ({', '.join(columns)})
                VALUES ({', '.join(f':{col}' for col in columns)})
                ON CONFLICT(user_email) DO UPDATE SET {updates}
                RETURNING {', '.join(_collection_columns(PROFILES_TABLE))}
                """
            ),
            payload,
        )).mappings().fetchone()
        await session.commit()
    return dict(row)
