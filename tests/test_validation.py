from __future__ import annotations

import pytest

from case_workflow_lib.errors import UnknownActionKindError
from case_workflow_lib.models import ActionForm, ActionKind
from case_workflow_lib.workflow.validation import (
    EXPLANATION_REQUIRED,
    REASON_REQUIRED,
    REJECTION_REQUIRED,
    REOPEN_NOTE_REQUIRED,
    validate_action,
)

_BLANKS = ["", "   ", "\n\t "]


@pytest.mark.parametrize("kind", [ActionKind.SUBMIT_RESPONSE, ActionKind.DIRECT_APPROVE, ActionKind.OVERRIDE])
@pytest.mark.parametrize("text", _BLANKS)
def test_explanation_kinds_reject_blank_explanation(kind: ActionKind, text: str) -> None:
    result = validate_action(kind, ActionForm(explanation_text=text))
    assert not result.ok
    assert result.error == EXPLANATION_REQUIRED


@pytest.mark.parametrize("kind", [ActionKind.SUBMIT_RESPONSE, ActionKind.DIRECT_APPROVE, ActionKind.OVERRIDE])
def test_explanation_kinds_accept_explanation(kind: ActionKind) -> None:
    assert validate_action(kind, ActionForm(explanation_text=" fixed ")).ok


@pytest.mark.parametrize("text", _BLANKS)
def test_reject_requires_rejection_text(text: str) -> None:
    result = validate_action(ActionKind.REJECT, ActionForm(rejection_text=text, explanation_text="ignored"))
    assert result.error == REJECTION_REQUIRED


@pytest.mark.parametrize("text", _BLANKS)
def test_reopen_requires_note_to_section(text: str) -> None:
    result = validate_action(ActionKind.REOPEN, ActionForm(rejection_text=text))
    assert result.error == REOPEN_NOTE_REQUIRED


def test_reject_and_reopen_accept_text() -> None:
    form = ActionForm(rejection_text="Missing action items")
    assert validate_action(ActionKind.REJECT, form).ok
    assert validate_action(ActionKind.REOPEN, form).ok


@pytest.mark.parametrize("text", _BLANKS)
def test_force_close_requires_reason(text: str) -> None:
    assert validate_action(ActionKind.FORCE_CLOSE, ActionForm(reason=text)).error == REASON_REQUIRED


def test_force_close_does_not_enforce_a_minimum_length() -> None:
    assert validate_action(ActionKind.FORCE_CLOSE, ActionForm(reason="dup")).ok


def test_approve_is_always_valid() -> None:
    result = validate_action(ActionKind.APPROVE, ActionForm())
    assert result.ok
    assert bool(result) is True


def test_validation_does_not_mutate_form() -> None:
    form = ActionForm(explanation_text="  ")
    before = form.model_dump()
    validate_action(ActionKind.SUBMIT_RESPONSE, form)
    assert form.model_dump() == before


def test_unknown_action_kind_fails_loudly() -> None:
    with pytest.raises(UnknownActionKindError):
        validate_action("ARCHIVE", ActionForm())
