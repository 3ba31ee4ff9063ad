from __future__ import annotations

from datetime import date

import pytest

from case_workflow_lib.errors import UnknownActionKindError
from case_workflow_lib.models import ActionForm, ActionItemDraft, ActionKind, RootCauseFeedback, StaffCauses
from case_workflow_lib.workflow.payloads import build_payload


def _filled_form() -> ActionForm:
    return ActionForm(
        explanation_text="Patient waited four hours in triage",
        rejection_text="Response does not address the delay",
        reason="Duplicate of #42",
        action_items=[
            ActionItemDraft(title="Add triage nurse", description="Night shift", due_date=date(2026, 2, 10)),
            ActionItemDraft(title="   ", description="dropped"),
            ActionItemDraft(title="Review escalation protocol", due_date=""),
        ],
        root_cause_feedback=RootCauseFeedback(
            causes_staff=StaffCauses(understaffed=True, other=True, other_text="Sick leave"),
        ),
    )


_EXPECTED_KEYS = {
    ActionKind.SUBMIT_RESPONSE: {"explanation_text", "action_items", "root_cause_feedback"},
    ActionKind.DIRECT_APPROVE: {"explanation_text", "action_items", "root_cause_feedback"},
    ActionKind.OVERRIDE: {"explanation_text", "action_items"},
    ActionKind.REJECT: {"rejection_text"},
    ActionKind.REOPEN: {"rejection_text"},
    ActionKind.FORCE_CLOSE: {"reason"},
    ActionKind.APPROVE: set(),
}


def test_every_action_kind_has_an_expected_shape() -> None:
    assert set(_EXPECTED_KEYS) == set(ActionKind)


@pytest.mark.parametrize("kind", list(ActionKind))
def test_payload_fields_match_action_kind_exactly(kind: ActionKind) -> None:
    payload = build_payload(kind, _filled_form())
    assert set(payload) == _EXPECTED_KEYS[kind]


@pytest.mark.parametrize("kind", list(ActionKind))
def test_payload_is_deterministic(kind: ActionKind) -> None:
    form = _filled_form()
    first = build_payload(kind, form)
    second = build_payload(kind, form)
    assert first == second
    assert first is not second


def test_action_items_drop_blank_titles_and_default_due_date_to_none() -> None:
    payload = build_payload(ActionKind.SUBMIT_RESPONSE, _filled_form())
    assert payload["action_items"] == [
        {"title": "Add triage nurse", "description": "Night shift", "due_date": "2026-02-10"},
        {"title": "Review escalation protocol", "description": "", "due_date": None},
    ]


def test_empty_action_item_list_is_valid() -> None:
    form = ActionForm(explanation_text="Handled", action_items=[ActionItemDraft(title="")])
    payload = build_payload(ActionKind.OVERRIDE, form)
    assert payload == {"explanation_text": "Handled", "action_items": []}


def test_root_cause_feedback_is_serialized_by_category() -> None:
    payload = build_payload(ActionKind.DIRECT_APPROVE, _filled_form())
    feedback = payload["root_cause_feedback"]
    assert set(feedback) == {
        "causes_staff",
        "causes_process",
        "causes_equipment",
        "causes_environment",
        "preventive_actions",
    }
    assert feedback["causes_staff"]["understaffed"] is True
    assert feedback["causes_staff"]["other_text"] == "Sick leave"
    assert feedback["causes_process"]["other"] is False


def test_reject_and_reopen_share_rejection_text() -> None:
    form = _filled_form()
    assert build_payload(ActionKind.REJECT, form) == build_payload(ActionKind.REOPEN, form)


def test_wire_code_is_accepted() -> None:
    assert build_payload("FORCE_CLOSE", ActionForm(reason="closing")) == {"reason": "closing"}


def test_approve_has_empty_body() -> None:
    assert build_payload(ActionKind.APPROVE, _filled_form()) == {}


def test_unknown_action_kind_fails_loudly() -> None:
    with pytest.raises(UnknownActionKindError):
        build_payload("ESCALATE", ActionForm())


def test_blank_root_cause_feedback_is_a_fresh_instance() -> None:
    first = ActionForm()
    second = ActionForm()
    assert first.root_cause_feedback == second.root_cause_feedback
    assert first.root_cause_feedback is not second.root_cause_feedback
    assert RootCauseFeedback.blank() is not RootCauseFeedback.blank()
