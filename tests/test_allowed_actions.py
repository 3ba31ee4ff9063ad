from __future__ import annotations

import pytest

from case_workflow_lib.models import CaseAction, Subcase
from case_workflow_lib.workflow.allowed_actions import (
    BULK_ROLE_ACTIONS,
    is_bulk_capable,
    parse_action,
    visible_actions,
)


def _subcase(*actions: str) -> Subcase:
    return Subcase(subcase_id=11, incident_id=5, status="PENDING_SECTION", allowed_actions=list(actions))


_ALL_CODES = [
    "VIEW",
    "SUBMIT_RESPONSE",
    "REJECT",
    "APPROVE",
    "OVERRIDE",
    "FORCE_CLOSE",
    "REOPEN",
    "DIRECT_APPROVE",
]


def test_other_roles_see_server_set_unchanged() -> None:
    subcase = _subcase("VIEW", "SUBMIT_RESPONSE", "FORCE_CLOSE")
    assert visible_actions(subcase, "SECTION_ADMIN") == (
        CaseAction.VIEW,
        CaseAction.SUBMIT_RESPONSE,
        CaseAction.FORCE_CLOSE,
    )


def test_bulk_role_is_narrowed_to_view_and_direct_approve() -> None:
    subcase = _subcase(*_ALL_CODES)
    assert visible_actions(subcase, "DIRECT_APPROVER") == (CaseAction.VIEW, CaseAction.DIRECT_APPROVE)


@pytest.mark.parametrize(
    "actions",
    [
        [],
        ["APPROVE", "REJECT"],
        ["FORCE_CLOSE", "teleport", "DIRECT_APPROVE"],
        ["view", "accept", "reject", "SOMETHING_NEW"],
        _ALL_CODES + ["ESCALATE"],
    ],
)
def test_bulk_role_result_is_always_a_subset_of_allow_list(actions: list) -> None:
    result = visible_actions(_subcase(*actions), "direct_approver")
    assert set(result) <= BULK_ROLE_ACTIONS


def test_bulk_role_never_widens_server_set() -> None:
    assert visible_actions(_subcase("APPROVE"), "DIRECT_APPROVER") == ()


def test_unknown_server_action_is_dropped() -> None:
    subcase = _subcase("VIEW", "ESCALATE_TO_MINISTRY", "REJECT")
    assert visible_actions(subcase, "DEPARTMENT_ADMIN") == (CaseAction.VIEW, CaseAction.REJECT)


def test_inbox_aliases_are_recognised() -> None:
    assert parse_action("view") is CaseAction.VIEW
    assert parse_action("accept") is CaseAction.APPROVE
    assert parse_action("reject") is CaseAction.REJECT
    assert parse_action("direct_approve") is CaseAction.DIRECT_APPROVE
    assert parse_action("nonsense") is None


def test_duplicate_server_actions_are_collapsed() -> None:
    assert visible_actions(_subcase("accept", "APPROVE", "view"), None) == (CaseAction.APPROVE, CaseAction.VIEW)


def test_bulk_capable_roles_can_be_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    from case_workflow_lib.config import reset_settings

    monkeypatch.setenv("WORKFLOW_BULK_CAPABLE_ROLES", "quality_lead")
    reset_settings()
    assert is_bulk_capable("QUALITY_LEAD")
    assert not is_bulk_capable("DIRECT_APPROVER")


def test_explicit_bulk_roles_override_settings() -> None:
    subcase = _subcase("VIEW", "REJECT", "DIRECT_APPROVE")
    assert visible_actions(subcase, "WORKER", bulk_capable_roles=["WORKER"]) == (
        CaseAction.VIEW,
        CaseAction.DIRECT_APPROVE,
    )


def test_view_has_no_action_kind() -> None:
    assert CaseAction.VIEW.action_kind is None
    assert not CaseAction.VIEW.submits
    assert CaseAction.DIRECT_APPROVE.action_kind.value == "DIRECT_APPROVE"
