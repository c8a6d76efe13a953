from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_email
from backend.schemas import ProfileUpdate
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/profile")
async def get_profile(user_email: str = Depends(require_user_email)):
    profile = await repositories.get_profile(user_email)
    return {"user_email": user_email, "profile": jsonable_encoder(profile) if profile else None}


@router.put("/v1/profile")
async def put_profile(payload: ProfileUpdate, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    if "avatar_url" in patch:
        patch["avatar_url"] = (patch["avatar_url"] or "").strip() or None
    try:
        record = await repositories.upsert_profile(user_email, patch)
    except Exception as exc:
        logger.exception("Failed to update profile: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    return {"user_email": user_email, "profile": jsonable_encoder(record)}
