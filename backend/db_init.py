from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from backend.constants import (
    ENTERTAINMENT_TABLE,
    EXPENSES_TABLE,
    PROFILES_TABLE,
    PROJECTS_TABLE,
    TODOS_TABLE,
)
from backend.db import get_engine

logger = logging.getLogger(__name__)


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {PROFILES_TABLE} (
                    user_email TEXT PRIMARY KEY,
                    username TEXT,
                    avatar_url TEXT,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {EXPENSES_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_email TEXT NOT NULL,
                    amount NUMERIC(12, 2) NOT NULL CHECK (amount >= 0),
                    description TEXT NOT NULL,
                    category TEXT NOT NULL,
                    date DATE NOT NULL DEFAULT CURRENT_DATE,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {TODOS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_email TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    completed BOOLEAN NOT NULL DEFAULT FALSE,
                    due_date DATE,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {PROJECTS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_email TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'idea',
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {ENTERTAINMENT_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_email TEXT NOT NULL,
                    title TEXT NOT NULL,
                    type TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'backlog',
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        )

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except SQLAlchemyError as exc:
            logger.warning("Index creation skipped: %s", exc)

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{EXPENSES_TABLE}_user_date "
        f"ON {EXPENSES_TABLE} (user_email, date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TODOS_TABLE}_user_pending "
        f"ON {TODOS_TABLE} (user_email, completed, due_date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{PROJECTS_TABLE}_user_status "
        f"ON {PROJECTS_TABLE} (user_email, status)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{ENTERTAINMENT_TABLE}_user_status "
        f"ON {ENTERTAINMENT_TABLE} (user_email, status, created_at)"
    )
