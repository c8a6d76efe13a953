from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_email
from backend.schemas import TodoCreate, TodoPatch
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/todos")
async def list_todos(user_email: str = Depends(require_user_email)):
    items = await repositories.list_todos(user_email)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/todos")
async def create_todo(payload: TodoCreate, user_email: str = Depends(require_user_email)):
    try:
        record = await repositories.create_todo(user_email, payload.model_dump())
    except Exception as exc:
        logger.exception("Failed to create todo: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    return jsonable_encoder(record)


@router.patch("/v1/todos/{todo_id}")
async def patch_todo(todo_id: str, payload: TodoPatch, user_email: str = Depends(require_user_email)):
    # due_date and description may be cleared explicitly, so nulls are kept.
    patch = payload.model_dump(exclude_unset=True)
    try:
        record = await repositories.update_todo(user_email, todo_id, patch)
    except Exception as exc:
        logger.exception("Failed to update todo: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if record is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return jsonable_encoder(record)


@router.delete("/v1/todos/{todo_id}")
async def delete_todo(todo_id: str, user_email: str = Depends(require_user_email)):
    try:
        deleted = await repositories.delete_todo(user_email, todo_id)
    except Exception as exc:
        logger.exception("Failed to delete todo: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"ok": True}
