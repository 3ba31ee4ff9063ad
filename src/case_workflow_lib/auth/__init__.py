"""Authentication utilities for the workflow client.

This module provides request context extraction from API Gateway headers
and the UX-level role guards built on top of it.
"""

from case_workflow_lib.auth.request_context import RequestContext, get_request_context
from case_workflow_lib.auth.roles import UserRole, can_act_on_follow_up, can_act_on_inbox, can_force_close

__all__ = [
    "RequestContext",
    "get_request_context",
    "UserRole",
    "can_act_on_inbox",
    "can_act_on_follow_up",
    "can_force_close",
]
