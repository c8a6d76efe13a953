from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_email
from backend.constants import EXPENSE_CATEGORIES
from backend.schemas import ExpenseCreate, ExpensePatch
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/expenses")
async def list_expenses(
    category: str | None = Query(None),
    user_email: str = Depends(require_user_email),
):
    if category and category != "all" and category not in EXPENSE_CATEGORIES:
        raise HTTPException(status_code=400, detail="Unknown category")
    items = await repositories.list_expenses(user_email, None if category == "all" else category)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/expenses")
async def create_expense(payload: ExpenseCreate, user_email: str = Depends(require_user_email)):
    try:
        record = await repositories.create_expense(user_email, payload.model_dump())
    except Exception as exc:
        logger.exception("Failed to create expense: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    return jsonable_encoder(record)


@router.patch("/v1/expenses/{expense_id}")
async def patch_expense(expense_id: str, payload: ExpensePatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        record = await repositories.update_expense(user_email, expense_id, patch)
    except Exception as exc:
        logger.exception("Failed to update expense: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if record is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return jsonable_encoder(record)


@router.delete("/v1/expenses/{expense_id}")
async def delete_expense(expense_id: str, user_email: str = Depends(require_user_email)):
    try:
        deleted = await repositories.delete_expense(user_email, expense_id)
    except Exception as exc:
        logger.exception("Failed to delete expense: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Expense not found")
    return {"ok": True}
