from __future__ import annotations

from datetime import date as dt_date
from decimal import Decimal
from typing import Optional, List, Dict, Any, Literal

from pydantic import BaseModel, Field, model_validator

from backend.constants import ENTERTAINMENT_STATUS_BY_TYPE

ExpenseCategory = Literal["Food", "Transport", "Shopping", "Bills", "Entertainment", "Other"]
ProjectStatus = Literal["idea", "in_progress", "done"]
EntertainmentType = Literal["game", "movie", "series"]
EntertainmentStatus = Literal["backlog", "playing", "watching", "completed", "watched"]


def status_allowed_for_type(item_type: str, status: str) -> bool:
    return status in ENTERTAINMENT_STATUS_BY_TYPE.get(item_type, [])


class ExpenseCreate(BaseModel):
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1)
    category: ExpenseCategory
    date: dt_date = Field(default_factory=dt_date.today)


class ExpensePatch(BaseModel):
    amount: Optional[Decimal] = Field(None, ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[ExpenseCategory] = None
    date: Optional[dt_date] = None


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[dt_date] = None


class TodoPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[dt_date] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        # Only description and due_date may be cleared with an explicit null.
        for name in ("title", "completed"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null")
        return self


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: ProjectStatus = "idea"


class ProjectPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None


class EntertainmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    type: EntertainmentType
    status: EntertainmentStatus = "backlog"

    @model_validator(mode="after")
    def _status_matches_type(self):
        if not status_allowed_for_type(self.type, self.status):
            raise ValueError(f"Status '{self.status}' is not valid for type '{self.type}'")
        return self


class EntertainmentPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    type: Optional[EntertainmentType] = None
    status: Optional[EntertainmentStatus] = None


class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3)
    avatar_url: Optional[str] = None


class ItemsResponse(BaseModel):
    items: List[Dict[str, Any]]


class ChartPoint(BaseModel):
    label: str
    value: float
    color: Optional[str] = None


class OverviewSummary(BaseModel):
    total_monthly_expense: float
    pending_todo_count: int
    active_entertainment_count: int


class OverviewResponse(BaseModel):
    authenticated: bool
    profile: Optional[Dict[str, Any]] = None
    summary: OverviewSummary
    category_series: List[ChartPoint]
    trend_series: List[ChartPoint]
    pending_todos: List[Dict[str, Any]]
    active_entertainment: List[Dict[str, Any]]
