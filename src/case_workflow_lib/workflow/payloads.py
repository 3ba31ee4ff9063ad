"""Request body construction per action kind.

| Kind                            | Body                                                  |
|---------------------------------|-------------------------------------------------------|
| SUBMIT_RESPONSE, DIRECT_APPROVE | explanation_text, action_items, root_cause_feedback   |
| OVERRIDE                        | explanation_text, action_items                        |
| REJECT, REOPEN                  | rejection_text                                        |
| FORCE_CLOSE                     | reason                                                |
| APPROVE                         | (empty)                                               |
"""

from typing import Any, Callable, Dict, List, Mapping

from case_workflow_lib.errors import UnknownActionKindError
from case_workflow_lib.models.actions import ActionForm, ActionItemDraft, ActionKind

Payload = Dict[str, Any]


def coerce_action_kind(action_kind: Any) -> ActionKind:
    """Resolve a wire code or ActionKind, failing loudly on anything else."""
    if isinstance(action_kind, ActionKind):
        return action_kind
    try:
        return ActionKind(action_kind)
    except ValueError:
        raise UnknownActionKindError(action_kind) from None


def ensure_exhaustive(table: Mapping[ActionKind, Any], name: str) -> None:
    """Fail at import time when a dispatch table misses an ActionKind."""
    missing = [kind.value for kind in ActionKind if kind not in table]
    if missing:
        raise RuntimeError(f"{name} has no entry for: {', '.join(missing)}")


def _action_items(drafts: List[ActionItemDraft]) -> List[Payload]:
    return [
        {
            "title": item.title,
            "description": item.description,
            "due_date": item.due_date.isoformat() if item.due_date else None,
        }
        for item in drafts
        if not item.is_blank
    ]


def _full_response(form: ActionForm) -> Payload:
    return {
        "explanation_text": form.explanation_text,
        "action_items": _action_items(form.action_items),
        "root_cause_feedback": form.root_cause_feedback.to_payload(),
    }


def _override(form: ActionForm) -> Payload:
    return {
        "explanation_text": form.explanation_text,
        "action_items": _action_items(form.action_items),
    }


def _send_back(form: ActionForm) -> Payload:
    # REJECT and REOPEN move in opposite directions but both explain "why"
    return {"rejection_text": form.rejection_text}


def _force_close(form: ActionForm) -> Payload:
    return {"reason": form.reason}


def _confirm_only(form: ActionForm) -> Payload:
    return {}


_BUILDERS: Dict[ActionKind, Callable[[ActionForm], Payload]] = {
    ActionKind.SUBMIT_RESPONSE: _full_response,
    ActionKind.DIRECT_APPROVE: _full_response,
    ActionKind.OVERRIDE: _override,
    ActionKind.REJECT: _send_back,
    ActionKind.REOPEN: _send_back,
    ActionKind.FORCE_CLOSE: _force_close,
    ActionKind.APPROVE: _confirm_only,
}

ensure_exhaustive(_BUILDERS, "payload builder")


def build_payload(action_kind: Any, form: ActionForm) -> Payload:
    """Build the request body for a transition.

    Pure and deterministic: the same (action_kind, form) always yields an
    equal payload, and every call returns a new dict.

    Args:
        action_kind: ActionKind or its wire code
        form: Form state collected by the action dialog

    Returns:
        JSON-ready payload whose keys match the action kind's body shape

    Raises:
        UnknownActionKindError: If action_kind is not one of the seven kinds
    """
    return _BUILDERS[coerce_action_kind(action_kind)](form)
