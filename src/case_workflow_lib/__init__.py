"""Case Workflow Library

Workflow models, the bulk case-action transition orchestrator and the
workflow API client for the incident/complaint tracking system.
"""

__version__ = "0.1.0"

# Export shared models first (no dependencies)
from case_workflow_lib.models import (
    ActionKind, CaseAction, ActionForm, ActionItemDraft, RootCauseFeedback,
    Subcase, IncidentGroup, OutcomeStatus, ErrorCategory, BulkOutcome,
    TransitionOutcome,
)

# Export configuration (no model dependencies)
from case_workflow_lib.config import (
    WorkflowClientSettings,
    get_settings,
    reset_settings,
)

from case_workflow_lib.workflow import (
    build_payload,
    validate_action,
    visible_actions,
    group_by_incident,
    TransitionExecutor,
    CaseActionSubmitter,
    SubmissionState,
)

# Lazy import for the HTTP client so the orchestrator does not pull in
# auth/fastapi unless a client is actually used
def __getattr__(name):
    """Lazy import for WorkflowServiceClient."""
    if name == "WorkflowServiceClient":
        from case_workflow_lib.clients import WorkflowServiceClient
        return WorkflowServiceClient
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

__all__ = [
    # Models
    "ActionKind", "CaseAction", "ActionForm", "ActionItemDraft", "RootCauseFeedback",
    "Subcase", "IncidentGroup", "OutcomeStatus", "ErrorCategory", "BulkOutcome",
    "TransitionOutcome",
    # Orchestrator
    "build_payload", "validate_action", "visible_actions", "group_by_incident",
    "TransitionExecutor", "CaseActionSubmitter", "SubmissionState",
    # Clients (lazy loaded)
    "WorkflowServiceClient",
    # Configuration
    "WorkflowClientSettings",
    "get_settings",
    "reset_settings",
]
