from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_email
from backend.constants import ENTERTAINMENT_TYPES
from backend.schemas import EntertainmentCreate, EntertainmentPatch, status_allowed_for_type
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/entertainment")
async def list_entertainment(
    item_type: str | None = Query(None, alias="type"),
    user_email: str = Depends(require_user_email),
):
    if item_type and item_type not in ENTERTAINMENT_TYPES:
        raise HTTPException(status_code=400, detail="Unknown entertainment type")
    items = await repositories.list_entertainment(user_email, item_type)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/entertainment")
async def create_entertainment(payload: EntertainmentCreate, user_email: str = Depends(require_user_email)):
    try:
        record = await repositories.create_entertainment(user_email, payload.model_dump())
    except Exception as exc:
        logger.exception("Failed to create entertainment item: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    return jsonable_encoder(record)


@router.patch("/v1/entertainment/{item_id}")
async def patch_entertainment(item_id: str, payload: EntertainmentPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "type" in patch or "status" in patch:
        existing = await repositories.get_entertainment(user_email, item_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Entertainment item not found")
        item_type = patch.get("type", existing.get("type"))
        status = patch.get("status", existing.get("status"))
        if not status_allowed_for_type(item_type, status):
            raise HTTPException(status_code=400, detail=f"Status '{status}' is not valid for type '{item_type}'")
    try:
        record = await repositories.update_entertainment(user_email, item_id, patch)
    except Exception as exc:
        logger.exception("Failed to update entertainment item: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if record is None:
        raise HTTPException(status_code=404, detail="Entertainment item not found")
    return jsonable_encoder(record)


@router.delete("/v1/entertainment/{item_id}")
async def delete_entertainment(item_id: str, user_email: str = Depends(require_user_email)):
    try:
        deleted = await repositories.delete_entertainment(user_email, item_id)
    except Exception as exc:
        logger.exception("Failed to delete entertainment item: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Entertainment item not found")
    return {"ok": True}
