from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from backend.auth import optional_user_email
from backend.schemas import OverviewResponse
from backend.services import overview_service

router = APIRouter()


def _overview_payload(overview: overview_service.Overview) -> dict:
    presentation = overview.presentation
    summary = presentation.summary
    collections = overview.collections
    return {
        "authenticated": overview.authenticated,
        "profile": jsonable_encoder(collections.profile) if collections.profile else None,
        "summary": {
            "total_monthly_expense": float(summary.total_monthly_expense),
            "pending_todo_count": summary.pending_todo_count,
            "active_entertainment_count": summary.active_entertainment_count,
        },
        "category_series": [
            {"label": item.label, "value": float(item.value), "color": item.color}
            for item in presentation.category_series
        ],
        "trend_series": [
            {"label": point.label, "value": float(point.value)}
            for point in presentation.trend_series
        ],
        "pending_todos": jsonable_encoder(list(collections.pending_todos)),
        "active_entertainment": jsonable_encoder(list(collections.active_entertainment)),
    }


@router.get("/v1/overview", response_model=OverviewResponse)
async def get_overview(user_email: str | None = Depends(optional_user_email)):
    overview = await overview_service.build_overview(user_email)
    return _overview_payload(overview)
