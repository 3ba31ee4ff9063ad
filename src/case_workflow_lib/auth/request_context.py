"""Request context extraction from API Gateway headers.

The gateway resolves the user's roles and active role after JWT validation
and forwards them as X-User-* headers. This module turns those headers into
the role oracle the allowed-action filter consumes.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import HTTPException, Request, status

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """User request context extracted from API Gateway headers.

    Attributes:
        user_id: User ID from X-User-ID header
        user_email: User email from X-User-Email header
        user_roles: User roles from X-User-Roles header (JSON array)
        active_role: Role currently acted as, from X-Active-Role header;
            defaults to the first role when the header is absent
        correlation_id: Optional correlation ID for request tracing
    """

    user_id: str
    user_email: Optional[str] = None
    user_roles: List[str] = field(default_factory=list)
    active_role: Optional[str] = None
    correlation_id: Optional[str] = None

    def has_role(self, role: str) -> bool:
        return role.upper() in {r.upper() for r in self.user_roles}


def get_request_context(request: Request) -> RequestContext:
    """Extract request context from API Gateway headers.

    Args:
        request: FastAPI request object

    Returns:
        RequestContext with user information

    Raises:
        HTTPException: If required X-User-ID header is missing
    """
    user_id = request.headers.get("X-User-ID")
    if not user_id:
        logger.error("Missing X-User-ID header in request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header required (should be added by API Gateway)",
        )

    user_email = request.headers.get("X-User-Email")
    correlation_id = request.headers.get("X-Correlation-ID")

    # Parse roles from JSON array
    user_roles = []
    roles_header = request.headers.get("X-User-Roles")
    if roles_header:
        try:
            user_roles = json.loads(roles_header)
        except json.JSONDecodeError:
            logger.warning(f"Failed to parse X-User-Roles header: {roles_header}")
    if not isinstance(user_roles, list):
        logger.warning(f"X-User-Roles is not a JSON array: {roles_header}")
        user_roles = []

    active_role = request.headers.get("X-Active-Role")
    if active_role and user_roles and active_role.upper() not in {r.upper() for r in user_roles}:
        logger.warning(f"Active role {active_role} not among user roles, ignoring it")
        active_role = None
    if not active_role and user_roles:
        active_role = user_roles[0]

    return RequestContext(
        user_id=user_id,
        user_email=user_email,
        user_roles=user_roles,
        active_role=active_role,
        correlation_id=correlation_id,
    )
