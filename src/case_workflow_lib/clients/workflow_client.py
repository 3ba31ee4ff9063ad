"""HTTP client for the workflow API (v2)."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from case_workflow_lib.auth.request_context import RequestContext
from case_workflow_lib.clients.base import BaseServiceClient
from case_workflow_lib.config import get_settings
from case_workflow_lib.models import (
    DEFAULT_DELAY_DAYS,
    MAX_DELAY_DAYS,
    MIN_DELAY_DAYS,
    ActionKind,
    DelayResult,
    FollowUpItem,
    ForceCloseResult,
    Subcase,
    SubcaseId,
    SubcaseResponse,
)
from case_workflow_lib.utils import create_read_retry

logger = logging.getLogger(__name__)


class WorkflowServiceClient(BaseServiceClient):
    """Async HTTP client for the workflow endpoints.

    Implements the TransitionTransport protocol through act_on_subcase, so it
    can be handed directly to a TransitionExecutor.

    Usage:
        client = WorkflowServiceClient(context=get_request_context(request))
        rows = await client.get_inbox()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        context: Optional[RequestContext] = None,
        read_retry_attempts: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            base_url: Workflow API base URL (default: WORKFLOW_API_BASE_URL)
            timeout: Request timeout in seconds (default: WORKFLOW_API_TIMEOUT)
            context: User context forwarded on every request
            read_retry_attempts: Attempts for idempotent reads
                (default: WORKFLOW_READ_RETRY_ATTEMPTS)
            transport: Optional httpx transport
        """
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.base_url,
            timeout=timeout if timeout is not None else settings.timeout,
            context=context,
            transport=transport,
        )
        self._read_retry = create_read_retry(
            max_attempts=read_retry_attempts or settings.read_retry_attempts
        )

    async def _get_items(self, path: str) -> List[Subcase]:
        async with self._get_client() as client:
            response = await client.get(f"{self.base_url}{path}", headers=self._headers())
            if response.status_code == 403:
                # Roles without inbox access get an empty list, not an error
                logger.info(f"{path} returned 403, treating as empty")
                return []
            response.raise_for_status()
            items = response.json().get("items") or []
            return [Subcase(**item) for item in items]

    async def get_inbox(self) -> List[Subcase]:
        """Get inbox items for the current user.

        Endpoint: GET /api/v2/workflow/inbox

        Returns:
            Subcases awaiting the user's action; empty on 403

        Raises:
            httpx.HTTPStatusError: On any other HTTP error
        """
        return await self._read_retry(self._get_items)("/api/v2/workflow/inbox")

    async def get_inbox_archive(self) -> List[Subcase]:
        """Get subcases the user already processed (view-only).

        Endpoint: GET /api/v2/workflow/inbox/archive
        """
        return await self._read_retry(self._get_items)("/api/v2/workflow/inbox/archive")

    async def act_on_subcase(
        self,
        subcase_id: SubcaseId,
        action_kind: ActionKind,
        payload: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ) -> bool:
        """Perform a workflow transition on a subcase.

        Endpoint: POST /api/v2/workflow/case/{subcase_id}/act

        Args:
            subcase_id: Subcase identifier
            action_kind: Transition to perform
            payload: Action-specific body built by build_payload
            correlation_id: Optional correlation ID for request tracing

        Returns:
            The server's "success" flag

        Raises:
            httpx.HTTPStatusError: On 400/403/404/409/5xx
            httpx.TransportError: If no response was received
        """
        async with self._get_client() as client:
            response = await client.post(
                f"{self.base_url}/api/v2/workflow/case/{subcase_id}/act",
                json={"action": ActionKind(action_kind).value, "payload": payload or {}},
                headers=self._headers(correlation_id=correlation_id),
            )
            response.raise_for_status()
            if not response.content:
                return True
            body = response.json()
            return bool(body.get("success", True)) if isinstance(body, dict) else True

    async def get_subcase_response(self, subcase_id: SubcaseId) -> SubcaseResponse:
        """Get the latest submitted response (explanation and action items).

        Endpoint: GET /api/v2/workflow/case/{subcase_id}/response
        """

        async def fetch() -> SubcaseResponse:
            async with self._get_client() as client:
                response = await client.get(
                    f"{self.base_url}/api/v2/workflow/case/{subcase_id}/response",
                    headers=self._headers(),
                )
                response.raise_for_status()
                return SubcaseResponse(**response.json())

        return await self._read_retry(fetch)()

    async def force_close_incident(
        self, incident_id: SubcaseId, reason: str, correlation_id: Optional[str] = None
    ) -> ForceCloseResult:
        """Force close an incident and all of its subcases.

        Endpoint: POST /api/v2/workflow/case/{incident_id}/force-close

        Args:
            incident_id: Incident identifier
            reason: Reason for the closure, sent trimmed
            correlation_id: Optional correlation ID for request tracing

        Returns:
            ForceCloseResult listing the closed subcases
        """
        async with self._get_client() as client:
            response = await client.post(
                f"{self.base_url}/api/v2/workflow/case/{incident_id}/force-close",
                json={"reason": reason.strip()},
                headers=self._headers(correlation_id=correlation_id),
            )
            response.raise_for_status()
            result = ForceCloseResult(**response.json())

        logger.info(
            f"Force closed incident {incident_id}: {result.total_subcases_closed} subcases closed"
        )
        return result

    async def _get_json(self, path: str) -> Any:
        async with self._get_client() as client:
            response = await client.get(f"{self.base_url}{path}", headers=self._headers())
            response.raise_for_status()
            return response.json()

    async def _post_follow_up(self, action_item_id: SubcaseId, verb: str, body: Optional[dict] = None) -> Any:
        async with self._get_client() as client:
            response = await client.post(
                f"{self.base_url}/api/v2/workflow/follow-up/{action_item_id}/{verb}",
                json=body,
                headers=self._headers(),
            )
            response.raise_for_status()
            return response.json() if response.content else {}

    async def get_follow_up_items(self) -> List[FollowUpItem]:
        """Get action items the current user has to follow up on.

        Endpoint: GET /api/v2/workflow/follow-up
        """
        body = await self._read_retry(self._get_json)("/api/v2/workflow/follow-up")
        return [FollowUpItem(**item) for item in (body.get("items") or [])]

    async def start_action_item(self, action_item_id: SubcaseId) -> bool:
        """Mark an action item as started.

        Endpoint: POST /api/v2/workflow/follow-up/{action_item_id}/start

        Returns:
            The server's "success" flag (False when absent)
        """
        body = await self._post_follow_up(action_item_id, "start")
        return bool(body.get("success", False))

    async def complete_action_item(self, action_item_id: SubcaseId) -> bool:
        """Mark an action item as completed.

        Endpoint: POST /api/v2/workflow/follow-up/{action_item_id}/complete
        """
        body = await self._post_follow_up(action_item_id, "complete")
        return bool(body.get("success", False))

    async def delay_action_item(
        self, action_item_id: SubcaseId, delay_days: int = DEFAULT_DELAY_DAYS
    ) -> DelayResult:
        """Push an action item's due date back.

        Endpoint: POST /api/v2/workflow/follow-up/{action_item_id}/delay

        The server extends the current due date (or today, when there is
        none) by delay_days.

        Args:
            action_item_id: Action item identifier
            delay_days: Days to add, between MIN_DELAY_DAYS and MAX_DELAY_DAYS

        Returns:
            DelayResult with the previous and new due dates

        Raises:
            ValueError: If delay_days is out of range
        """
        if not MIN_DELAY_DAYS <= delay_days <= MAX_DELAY_DAYS:
            raise ValueError(
                f"delay_days must be between {MIN_DELAY_DAYS} and {MAX_DELAY_DAYS}, got {delay_days}"
            )

        body = await self._post_follow_up(action_item_id, "delay", {"delay_days": delay_days})
        result = DelayResult(**body)
        logger.info(
            f"Delayed action item {action_item_id} by {delay_days} days: "
            f"{result.previous_due_date} -> {result.new_due_date}"
        )
        return result

    async def get_incident_detail(self, incident_id: SubcaseId) -> Dict[str, Any]:
        """Get read-only incident detail for the inbox view action.

        Endpoint: GET /api/v2/workflow/incident/{incident_id}
        """
        return await self._read_retry(self._get_json)(f"/api/v2/workflow/incident/{incident_id}")

    async def get_seasonal_report_detail(self, seasonal_report_id: SubcaseId) -> Dict[str, Any]:
        """Get seasonal report detail (header, classification stats, policy snapshot).

        Endpoint: GET /api/v2/workflow/seasonal-report/{seasonal_report_id}
        """
        return await self._read_retry(self._get_json)(
            f"/api/v2/workflow/seasonal-report/{seasonal_report_id}"
        )
