from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.db_init import init_db
from backend.routes import overview, expenses, todos, projects, entertainment, profile


def create_app(init_database: bool = True) -> FastAPI:
    logging.basicConfig(
        level=os.getenv("BACKEND_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="Life Dashboard API", version="0.1.0")

    app.include_router(overview.router)
    app.include_router(expenses.router)
    app.include_router(todos.router)
    app.include_router(projects.router)
    app.include_router(entertainment.router)
    app.include_router(profile.router)

    if init_database:
        @app.on_event("startup")
        async def _startup():
            await init_db()

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
