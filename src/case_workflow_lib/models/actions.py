"""Action models for workflow transitions.

This module defines the closed set of transition kinds a client can submit
against a subcase, plus the form state those transitions are built from:

- ActionKind: the seven workflow transitions understood by the server
- CaseAction: what an inbox row can offer (VIEW plus every ActionKind)
- ActionItemDraft: a follow-up action item entered alongside a response
- RootCauseFeedback: structured causal-category checklist
- ActionForm: everything a user typed before pressing submit
- ActionRequest: one decision applied uniformly to one or many subcases
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SubcaseId = Union[int, str]


# ============================================================
# Action Kinds
# ============================================================

class ActionKind(str, Enum):
    """
    Workflow transition kinds accepted by POST /case/{id}/act.

    Each kind has exactly one payload shape and one set of required fields.
    """

    SUBMIT_RESPONSE = "SUBMIT_RESPONSE"
    """Section admin submits explanation, action items and root-cause feedback."""

    REJECT = "REJECT"
    """Send the response back at the current review level."""

    APPROVE = "APPROVE"
    """Confirmation only, no body."""

    OVERRIDE = "OVERRIDE"
    """Reviewer replaces the explanation and action items."""

    FORCE_CLOSE = "FORCE_CLOSE"
    """Administrative close of a single subcase."""

    REOPEN = "REOPEN"
    """Resend a processed subcase to its section with a note."""

    DIRECT_APPROVE = "DIRECT_APPROVE"
    """One-step approval carrying a full response, used by bulk approvers."""


class CaseAction(str, Enum):
    """Actions a case row can offer. VIEW opens the case and never submits."""

    VIEW = "VIEW"
    SUBMIT_RESPONSE = "SUBMIT_RESPONSE"
    REJECT = "REJECT"
    APPROVE = "APPROVE"
    OVERRIDE = "OVERRIDE"
    FORCE_CLOSE = "FORCE_CLOSE"
    REOPEN = "REOPEN"
    DIRECT_APPROVE = "DIRECT_APPROVE"

    @property
    def action_kind(self) -> Optional[ActionKind]:
        """Transition kind behind this action, None for VIEW"""
        if self is CaseAction.VIEW:
            return None
        return ActionKind(self.value)

    @property
    def submits(self) -> bool:
        return self is not CaseAction.VIEW


# ============================================================
# Action Items
# ============================================================

class ActionItemDraft(BaseModel):
    """Follow-up action item typed into a response form."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Short title; blank drafts are dropped")
    description: str = Field(default="", description="Free-text description")
    due_date: Optional[date] = Field(default=None, description="Optional due date")

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_blank(cls, v):
        return "" if v is None else v

    @property
    def is_blank(self) -> bool:
        return not self.title.strip()


# ============================================================
# Root Cause Feedback
# ============================================================

class _CauseCategory(BaseModel):
    """Shared shape of a causal category: fixed flags, an "other" flag and its text.

    other_text is only meaningful when other is True. It is carried either way
    and ignored by the server render when the flag is off.
    """

    model_config = ConfigDict(frozen=True)

    other: bool = False
    other_text: str = ""

    @property
    def other_text_applies(self) -> bool:
        return self.other and bool(self.other_text.strip())


class StaffCauses(_CauseCategory):
    training: bool = False
    incentives: bool = False
    competency: bool = False
    understaffed: bool = False
    non_compliance: bool = False
    no_coordination: bool = False


class ProcessCauses(_CauseCategory):
    missing_protocol: bool = False
    not_comprehensive: bool = False
    unclear: bool = False


class EquipmentCauses(_CauseCategory):
    not_available: bool = False
    system_incomplete: bool = False
    hard_to_apply: bool = False


class EnvironmentCauses(_CauseCategory):
    place_nature: bool = False
    surroundings: bool = False
    work_conditions: bool = False


class PreventiveActions(_CauseCategory):
    training_programs: bool = False
    monthly_meetings: bool = False
    increase_staff: bool = False
    mm_committee_actions: bool = False


class RootCauseFeedback(BaseModel):
    """Root-cause checklist submitted with SUBMIT_RESPONSE and DIRECT_APPROVE.

    Four causal categories (staff, process, equipment, environment) plus the
    preventive-measures category.
    """

    model_config = ConfigDict(frozen=True)

    causes_staff: StaffCauses = Field(default_factory=StaffCauses)
    causes_process: ProcessCauses = Field(default_factory=ProcessCauses)
    causes_equipment: EquipmentCauses = Field(default_factory=EquipmentCauses)
    causes_environment: EnvironmentCauses = Field(default_factory=EnvironmentCauses)
    preventive_actions: PreventiveActions = Field(default_factory=PreventiveActions)

    @classmethod
    def blank(cls) -> "RootCauseFeedback":
        """Fresh all-false feedback. Every call returns a new instance."""
        return cls()

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        return self.model_dump(mode="json")


# ============================================================
# Form State & Requests
# ============================================================

class ActionForm(BaseModel):
    """Form state collected by an action dialog.

    Only the fields relevant to the chosen ActionKind are read; the rest are
    ignored by both the validator and the payload builder.
    """

    model_config = ConfigDict(frozen=True)

    explanation_text: str = ""
    rejection_text: str = ""
    reason: str = ""
    action_items: List[ActionItemDraft] = Field(default_factory=list)
    root_cause_feedback: RootCauseFeedback = Field(default_factory=RootCauseFeedback.blank)

    @field_validator("explanation_text", "rejection_text", "reason", mode="before")
    @classmethod
    def none_text_is_blank(cls, v):
        return "" if v is None else v


class ActionRequest(BaseModel):
    """
    One transition decision applied uniformly to every target.

    Bulk submission never mixes per-target payloads: every subcase in
    target_subcase_ids receives the same action_kind and payload.
    """

    model_config = ConfigDict(frozen=True)

    action_kind: ActionKind
    target_subcase_ids: List[SubcaseId] = Field(..., min_length=1)
    payload: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("target_subcase_ids")
    @classmethod
    def unique_targets(cls, v):
        """Ordered set: duplicates keep their first position"""
        seen = set()
        ordered = []
        for subcase_id in v:
            if subcase_id in seen:
                continue
            seen.add(subcase_id)
            ordered.append(subcase_id)
        return ordered

    @property
    def is_bulk(self) -> bool:
        return len(self.target_subcase_ids) > 1
