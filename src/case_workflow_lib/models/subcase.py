"""Subcase models returned by the workflow inbox endpoints.

Subcases are created and mutated exclusively server-side. The client only
holds read-only snapshots and refreshes them after every transition attempt.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from case_workflow_lib.models.actions import SubcaseId


class Subcase(BaseModel):
    """One unit of workflow work as listed in the inbox or archive."""

    model_config = ConfigDict(frozen=True)

    subcase_id: SubcaseId = Field(..., description="Subcase identifier")
    case_type: str = Field(default="INCIDENT", description="INCIDENT or SEASONAL_REPORT")
    incident_id: Optional[SubcaseId] = Field(
        default=None, description="Owning incident; absent for report-type cases"
    )
    seasonal_report_id: Optional[SubcaseId] = Field(default=None)
    target_org_unit_id: Optional[SubcaseId] = Field(
        default=None, description="Organizational unit the subcase is routed to"
    )
    target_org_unit_name: Optional[str] = Field(default=None)
    status: str = Field(default="", description="Workflow status code, opaque to the client")
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
    allowed_actions: List[str] = Field(
        default_factory=list,
        description="Server-declared actions legal for this subcase right now",
    )

    @field_validator("allowed_actions", mode="before")
    @classmethod
    def null_actions_are_empty(cls, v):
        return [] if v is None else v

    @field_validator("target_org_unit_name", mode="before")
    @classmethod
    def blank_unit_name_is_absent(cls, v):
        return v or None

    @property
    def has_incident(self) -> bool:
        return self.incident_id is not None


class IncidentGroup(BaseModel):
    """Bulk target set: rows sharing one incident, or a single unparented row.

    target_subcase_ids is derived from rows, so it always lists exactly the
    row identifiers in the same relative order. A group holds at least one row.
    """

    model_config = ConfigDict(frozen=True)

    incident_id: Optional[SubcaseId] = None
    rows: List[Subcase] = Field(..., min_length=1)

    @computed_field
    @property
    def target_subcase_ids(self) -> List[SubcaseId]:
        return [row.subcase_id for row in self.rows]

    @property
    def group_key(self) -> Tuple[str, SubcaseId]:
        if self.incident_id is not None:
            return ("incident", self.incident_id)
        return ("subcase", self.rows[0].subcase_id)

    @property
    def is_singleton(self) -> bool:
        return len(self.rows) == 1


class SubmittedActionItem(BaseModel):
    """Action item as stored with a submitted response."""

    title: str
    description: str = ""
    due_date: Optional[date] = None
    status: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_blank(cls, v):
        return "" if v is None else v


class SubcaseResponse(BaseModel):
    """Latest SUBMIT_RESPONSE / OVERRIDE payload attached to a subcase.

    Lets reviewers see what they are approving or rejecting.
    """

    explanation_text: str = ""
    is_rejection: bool = False
    rejection_text: str = ""
    action_items: List[SubmittedActionItem] = Field(default_factory=list)
    submitted_by: str = "Unknown"
    submitted_at: Optional[datetime] = None

    @field_validator("explanation_text", "rejection_text", mode="before")
    @classmethod
    def none_text_is_blank(cls, v):
        return "" if v is None else v

    @field_validator("submitted_by", mode="before")
    @classmethod
    def missing_submitter(cls, v):
        return v or "Unknown"

    @field_validator("action_items", mode="before")
    @classmethod
    def null_items_are_empty(cls, v):
        return [] if v is None else v


class ForceCloseResult(BaseModel):
    """Result of force-closing an incident and every one of its subcases."""

    success: bool = False
    incident_id: Optional[SubcaseId] = None
    incident_status: Optional[str] = None
    subcases_closed: List[SubcaseId] = Field(default_factory=list)
    total_subcases_closed: int = 0
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    reason: Optional[str] = None
