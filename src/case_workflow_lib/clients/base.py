"""Base client for workflow API calls."""

import json
import logging
from typing import Optional

import httpx

from case_workflow_lib.auth.request_context import RequestContext

logger = logging.getLogger(__name__)


class BaseServiceClient:
    """Base class for workflow API HTTP clients.

    User context is propagated via X-User-* headers so the server can scope
    inbox contents and authorize transitions for the acting user.

    Usage:
        class WorkflowServiceClient(BaseServiceClient):
            async def get_inbox(self) -> List[Subcase]:
                async with self._get_client() as client:
                    response = await client.get(
                        f"{self.base_url}/api/v2/workflow/inbox",
                        headers=self._headers(),
                    )
                    response.raise_for_status()
                    return [Subcase(**item) for item in response.json()["items"]]
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        context: Optional[RequestContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize service client.

        Args:
            base_url: Workflow API base URL (e.g., http://workflow-api:8000)
            timeout: Request timeout in seconds (default: 30.0)
            context: User context forwarded on every request
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.context = context
        self._transport = transport

        logger.info(f"Initialized {self.__class__.__name__} with base_url={base_url}")

    def _headers(self, correlation_id: Optional[str] = None) -> dict:
        """Generate request headers with user context.

        Args:
            correlation_id: Optional correlation ID overriding the context's

        Returns:
            Headers dict with X-User-* headers and correlation ID
        """
        headers = {
            "Content-Type": "application/json",
        }

        context = self.context
        if context is not None:
            if context.user_id:
                headers["X-User-ID"] = context.user_id

            if context.user_email:
                headers["X-User-Email"] = context.user_email

            if context.user_roles:
                headers["X-User-Roles"] = json.dumps(context.user_roles)

            if context.active_role:
                headers["X-Active-Role"] = context.active_role

            correlation_id = correlation_id or context.correlation_id

        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client instance with configured timeout.

        Returns:
            Configured AsyncClient ready for use with async context manager
        """
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
