from __future__ import annotations

import asyncio
import json
from datetime import date

import httpx
import pytest

from case_workflow_lib.auth import RequestContext
from case_workflow_lib.clients import WorkflowServiceClient
from case_workflow_lib.models import FollowUpItem

BASE_URL = "http://workflow.test"


def _client(handler, **kwargs) -> WorkflowServiceClient:
    context = RequestContext(user_id="u-31", user_roles=["SECTION_ADMIN"], active_role="SECTION_ADMIN")
    return WorkflowServiceClient(
        base_url=BASE_URL,
        context=context,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _item(action_item_id: int, **overrides) -> dict:
    item = {
        "action_item_id": action_item_id,
        "subcase_id": 12,
        "status": "DRAFT",
        "title": "Retrain night shift",
        "description": None,
        "due_date": "2026-03-01T00:00:00",
        "assigned_to_user_id": 31,
        "started_at": None,
        "completed_at": None,
        "verified_at": None,
        "created_at": "2026-02-02T10:00:00Z",
        "created_by_user_id": 4,
        "updated_at": None,
        "updated_by_user_id": None,
    }
    item.update(overrides)
    return item


def test_get_follow_up_items_parses_items() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["user"] = request.headers["X-User-ID"]
        return httpx.Response(
            200,
            json={"items": [_item(1), _item(2, due_date="2026-04-15", started_at="2026-02-03T08:00:00Z")]},
        )

    items = asyncio.run(_client(handler).get_follow_up_items())

    assert seen == {"path": "/api/v2/workflow/follow-up", "user": "u-31"}
    assert [item.action_item_id for item in items] == [1, 2]
    assert items[0].due_date == date(2026, 3, 1)
    assert items[0].description is None
    assert not items[0].is_started
    assert items[1].due_date == date(2026, 4, 15)
    assert items[1].is_started
    assert not items[1].is_completed


def test_follow_up_list_is_empty_without_items_key() -> None:
    assert asyncio.run(_client(lambda request: httpx.Response(200, json={})).get_follow_up_items()) == []


def test_follow_up_list_forbidden_is_raised() -> None:
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_client(lambda request: httpx.Response(403, json={"detail": "no"})).get_follow_up_items())


def test_follow_up_list_read_is_retried_on_transport_error() -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json={"items": [_item(8)]})

    items = asyncio.run(_client(handler, read_retry_attempts=2).get_follow_up_items())

    assert len(attempts) == 2
    assert items[0].action_item_id == 8


@pytest.mark.parametrize("verb", ["start", "complete"])
def test_status_calls_post_to_item_endpoint(verb: str) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(200, json={"success": True})

    client = _client(handler)
    call = client.start_action_item if verb == "start" else client.complete_action_item

    assert asyncio.run(call(55)) is True
    assert seen == {"method": "POST", "path": f"/api/v2/workflow/follow-up/55/{verb}"}


def test_status_call_without_success_flag_is_false() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))
    assert asyncio.run(client.start_action_item(55)) is False
    assert asyncio.run(client.complete_action_item(55)) is False


def test_status_calls_are_not_retried() -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(_client(handler, read_retry_attempts=3).complete_action_item(9))
    assert len(attempts) == 1


def test_delay_action_item_returns_previous_and_new_due_dates() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "previous_due_date": "2026-03-01",
                "new_due_date": "2026-03-15T00:00:00",
                "delay_days": 14,
            },
        )

    result = asyncio.run(_client(handler).delay_action_item(55, 14))

    assert seen == {"path": "/api/v2/workflow/follow-up/55/delay", "body": {"delay_days": 14}}
    assert result.success
    assert result.previous_due_date == date(2026, 3, 1)
    assert result.new_due_date == date(2026, 3, 15)
    assert result.delay_days == 14


def test_delay_defaults_to_a_week() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "previous_due_date": None, "new_due_date": "2026-02-20"})

    result = asyncio.run(_client(handler).delay_action_item(3))

    assert seen["body"] == {"delay_days": 7}
    assert result.previous_due_date is None


@pytest.mark.parametrize("delay_days", [0, -3, 91])
def test_delay_out_of_range_never_reaches_server(delay_days: int) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"success": True})

    with pytest.raises(ValueError):
        asyncio.run(_client(handler).delay_action_item(3, delay_days))
    assert calls == []


def test_incident_and_seasonal_report_detail_are_returned_as_sent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v2/workflow/incident/40":
            return httpx.Response(200, json={"incident_id": 40, "subcases": [{"subcase_id": 1}]})
        assert request.url.path == "/api/v2/workflow/seasonal-report/901"
        return httpx.Response(200, json={"header": {"season": "2026-Q1"}, "policy_snapshot": None})

    client = _client(handler)

    assert asyncio.run(client.get_incident_detail(40)) == {"incident_id": 40, "subcases": [{"subcase_id": 1}]}
    assert asyncio.run(client.get_seasonal_report_detail(901))["policy_snapshot"] is None


def test_follow_up_item_blank_fields() -> None:
    item = FollowUpItem(action_item_id=1, title=None, due_date="", started_at="")
    assert item.title == ""
    assert item.due_date is None
    assert item.started_at is None
