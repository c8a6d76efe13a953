from __future__ import annotations

import logging
from urllib.parse import urlparse, urlunparse, parse_qsl, urlencode

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

ASYNC_DRIVER_PREFIXES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
}


def normalize_database_url(database_url: str) -> str:
    url = str(database_url or "").strip()
    if not url:
        return url
    for prefix, replacement in ASYNC_DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            url = replacement + url[len(prefix) :]
            break
    if not url.startswith("postgresql+asyncpg://"):
        return url
    try:
        parsed = urlparse(url)
        clean = []
        ssl_requested = False
        for key, value in parse_qsl(parsed.query, keep_blank_values=True):
            if key == "sslmode":
                ssl_requested = value != "disable"
                continue
            if key in {"channel_binding", "ssl"}:
                continue
            clean.append((key, value))
        if ssl_requested:
            clean.append(("ssl", "true"))
        url = urlunparse(parsed._replace(query=urlencode(clean)))
    except ValueError:
        logger.debug("Failed to parse database URL query, using it as-is.")
    return url


def is_local_host(database_url: str) -> bool:
    try:
        host = urlparse(database_url).hostname or ""
    except ValueError:
        return True
    return not host or host in {"localhost", "127.0.0.1"}


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        db_url = normalize_database_url(settings.database_url)
        engine_kwargs = {"pool_pre_ping": True, "future": True, "pool_size": 10, "max_overflow": 5}
        if not is_local_host(db_url):
            _engine = create_async_engine(db_url, connect_args={"ssl": True}, **engine_kwargs)
        else:
            _engine = create_async_engine(db_url, **engine_kwargs)
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory
