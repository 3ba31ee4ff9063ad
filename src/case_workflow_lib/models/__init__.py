"""
Workflow data models.

Pydantic models shared by the workflow client and the transition
orchestrator.
"""

from case_workflow_lib.models.actions import (
    # Actions
    ActionKind,
    CaseAction,
    ActionRequest,
    SubcaseId,

    # Form state
    ActionForm,
    ActionItemDraft,

    # Root cause
    RootCauseFeedback,
    StaffCauses,
    ProcessCauses,
    EquipmentCauses,
    EnvironmentCauses,
    PreventiveActions,
)
from case_workflow_lib.models.subcase import (
    Subcase,
    IncidentGroup,
    SubcaseResponse,
    SubmittedActionItem,
    ForceCloseResult,
)
from case_workflow_lib.models.follow_up import (
    FollowUpItem,
    DelayResult,
    MIN_DELAY_DAYS,
    MAX_DELAY_DAYS,
    DEFAULT_DELAY_DAYS,
)
from case_workflow_lib.models.outcome import (
    OutcomeStatus,
    ErrorCategory,
    TargetResult,
    BulkOutcome,
    TransitionOutcome,
)

__all__ = [
    # Actions
    "ActionKind", "CaseAction", "ActionRequest", "SubcaseId",
    # Form state
    "ActionForm", "ActionItemDraft",
    # Root cause
    "RootCauseFeedback", "StaffCauses", "ProcessCauses", "EquipmentCauses",
    "EnvironmentCauses", "PreventiveActions",
    # Subcases
    "Subcase", "IncidentGroup", "SubcaseResponse", "SubmittedActionItem",
    "ForceCloseResult",
    # Follow-up
    "FollowUpItem", "DelayResult", "MIN_DELAY_DAYS", "MAX_DELAY_DAYS", "DEFAULT_DELAY_DAYS",
    # Outcomes
    "OutcomeStatus", "ErrorCategory", "TargetResult", "BulkOutcome",
    "TransitionOutcome",
]
