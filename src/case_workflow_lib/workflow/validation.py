"""Pre-submit validation of required fields per action kind.

Only non-emptiness is enforced here. Stricter presentation rules (for
instance a minimum reason length in a force-close dialog) belong to the
view that shows them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from case_workflow_lib.models.actions import ActionForm, ActionKind
from case_workflow_lib.workflow.payloads import coerce_action_kind, ensure_exhaustive

EXPLANATION_REQUIRED = "Explanation text is required"
REJECTION_REQUIRED = "Rejection text is required"
REOPEN_NOTE_REQUIRED = "Please provide a note explaining why this case is being resent to the section"
REASON_REQUIRED = "Reason is required"


@dataclass(frozen=True)
class ValidationResult:
    """Ok when error is None, otherwise the message of the first violated rule."""

    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


VALID = ValidationResult()


def _require(text: str, message: str) -> ValidationResult:
    if not text.strip():
        return ValidationResult(message)
    return VALID


_RULES: Dict[ActionKind, Callable[[ActionForm], ValidationResult]] = {
    ActionKind.SUBMIT_RESPONSE: lambda form: _require(form.explanation_text, EXPLANATION_REQUIRED),
    ActionKind.DIRECT_APPROVE: lambda form: _require(form.explanation_text, EXPLANATION_REQUIRED),
    ActionKind.OVERRIDE: lambda form: _require(form.explanation_text, EXPLANATION_REQUIRED),
    ActionKind.REJECT: lambda form: _require(form.rejection_text, REJECTION_REQUIRED),
    # Same field as REJECT, labelled as a note to the section in the dialog
    ActionKind.REOPEN: lambda form: _require(form.rejection_text, REOPEN_NOTE_REQUIRED),
    ActionKind.FORCE_CLOSE: lambda form: _require(form.reason, REASON_REQUIRED),
    ActionKind.APPROVE: lambda form: VALID,
}

ensure_exhaustive(_RULES, "action validator")


def validate_action(action_kind: Any, form: ActionForm) -> ValidationResult:
    """Check the required fields for an action kind.

    Fail-fast: returns the first violated rule only. Never mutates form.

    Raises:
        UnknownActionKindError: If action_kind is not one of the seven kinds
    """
    return _RULES[coerce_action_kind(action_kind)](form)
