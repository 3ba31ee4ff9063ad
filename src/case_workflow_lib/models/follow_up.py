"""Follow-up action items.

Action items are created server-side when a section's response (or a
reviewer's override) is accepted. The assigned user then tracks them through
the follow-up endpoints: start, complete, or delay the due date.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from case_workflow_lib.models.actions import SubcaseId

MIN_DELAY_DAYS = 1
MAX_DELAY_DAYS = 90
DEFAULT_DELAY_DAYS = 7


def _as_date(v):
    # Due dates arrive either as "2026-02-10" or as a full timestamp
    if isinstance(v, str) and len(v) > 10:
        return v[:10]
    return v or None


class FollowUpItem(BaseModel):
    """One action item awaiting follow-up by the current user."""

    model_config = ConfigDict(frozen=True)

    action_item_id: SubcaseId = Field(..., description="Action item identifier")
    subcase_id: Optional[SubcaseId] = Field(None, description="Subcase the item was created from")
    status: Optional[str] = Field(None, description="Server status code (opaque)")
    title: str = ""
    description: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to_user_id: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    created_by_user_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    updated_by_user_id: Optional[int] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_from_timestamp(cls, v):
        return _as_date(v)

    @field_validator("started_at", "completed_at", "verified_at", "created_at", "updated_at", mode="before")
    @classmethod
    def blank_timestamp_is_absent(cls, v):
        return v or None

    @field_validator("title", mode="before")
    @classmethod
    def none_title_is_blank(cls, v):
        return "" if v is None else v

    @property
    def is_started(self) -> bool:
        return self.started_at is not None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class DelayResult(BaseModel):
    """Outcome of pushing an action item's due date back."""

    success: bool = False
    previous_due_date: Optional[date] = None
    new_due_date: Optional[date] = None
    delay_days: int = 0

    @field_validator("previous_due_date", "new_due_date", mode="before")
    @classmethod
    def due_date_from_timestamp(cls, v):
        return _as_date(v)
