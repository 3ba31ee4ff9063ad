"""Bulk case-action transition orchestrator.

Leaves first: payloads, validation, allowed_actions, grouping; then the
executor that depends on them and the submission state machine on top.
"""

from case_workflow_lib.workflow.payloads import build_payload
from case_workflow_lib.workflow.validation import ValidationResult, validate_action
from case_workflow_lib.workflow.allowed_actions import (
    BULK_ROLE_ACTIONS,
    is_bulk_capable,
    parse_action,
    parse_actions,
    visible_actions,
)
from case_workflow_lib.workflow.grouping import group_by_incident
from case_workflow_lib.workflow.executor import TransitionExecutor, TransitionTransport
from case_workflow_lib.workflow.submission import CaseActionSubmitter, SubmissionState

__all__ = [
    "build_payload",
    "validate_action",
    "ValidationResult",
    "BULK_ROLE_ACTIONS",
    "is_bulk_capable",
    "parse_action",
    "parse_actions",
    "visible_actions",
    "group_by_incident",
    "TransitionExecutor",
    "TransitionTransport",
    "CaseActionSubmitter",
    "SubmissionState",
]
