from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_email
from backend.schemas import ProjectCreate, ProjectPatch
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/projects")
async def list_projects(user_email: str = Depends(require_user_email)):
    items = await repositories.list_projects(user_email)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/projects")
async def create_project(payload: ProjectCreate, user_email: str = Depends(require_user_email)):
    try:
        record = await repositories.create_project(user_email, payload.model_dump())
    except Exception as exc:
        logger.exception("Failed to create project: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    return jsonable_encoder(record)


@router.patch("/v1/projects/{project_id}")
async def patch_project(project_id: str, payload: ProjectPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if patch.get("title") is None:
        patch.pop("title", None)
    if patch.get("status") is None:
        patch.pop("status", None)
    try:
        record = await repositories.update_project(user_email, project_id, patch)
    except Exception as exc:
        logger.exception("Failed to update project: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if record is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return jsonable_encoder(record)


@router.delete("/v1/projects/{project_id}")
async def delete_project(project_id: str, user_email: str = Depends(require_user_email)):
    try:
        deleted = await repositories.delete_project(user_email, project_id)
    except Exception as exc:
        logger.exception("Failed to delete project: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"ok": True}
