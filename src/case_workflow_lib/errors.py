"""Workflow error taxonomy.

Transport failures are translated into TransitionError subclasses before they
reach a view. Raw httpx exceptions never cross the executor boundary.
"""

import logging
from typing import Any, Optional

import httpx

from case_workflow_lib.models.outcome import ErrorCategory

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "You are not allowed to perform this action"
STATE_CONFLICT_MESSAGE = "This case is no longer in a valid state for this action"
INVALID_INPUT_MESSAGE = "Invalid input, please check your entries"
NETWORK_MESSAGE = "Network error, check your connection"
GENERIC_MESSAGE = "Failed to perform action"


class WorkflowError(Exception):
    """Base class for all errors raised by case_workflow_lib."""


class UnknownActionKindError(WorkflowError, ValueError):
    """An action kind outside the closed ActionKind set was used.

    This is a caller programming error, not a data condition.
    """

    def __init__(self, action_kind: Any):
        self.action_kind = action_kind
        super().__init__(f"Unknown action kind: {action_kind!r}")


class SubmissionInProgressError(WorkflowError):
    """A submission was attempted while another one is still outstanding."""


class TransitionError(WorkflowError):
    """A transition call failed, already mapped to an ErrorCategory."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    default_message: str = GENERIC_MESSAGE

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class ForbiddenTransitionError(TransitionError):
    category = ErrorCategory.FORBIDDEN
    default_message = FORBIDDEN_MESSAGE


class StateConflictError(TransitionError):
    """The subcase is no longer in a state accepting this transition. Refresh to see it."""

    category = ErrorCategory.STATE_CONFLICT
    default_message = STATE_CONFLICT_MESSAGE


class InvalidInputError(TransitionError):
    """Server-side validation failed; message is the server detail when provided."""

    category = ErrorCategory.INVALID_INPUT
    default_message = INVALID_INPUT_MESSAGE


class NetworkFailureError(TransitionError):
    """No response received. Timeouts and lost connectivity are not distinguished."""

    category = ErrorCategory.NETWORK
    default_message = NETWORK_MESSAGE


def _server_detail(response: httpx.Response) -> Optional[str]:
    """Extract the "detail" field FastAPI-style backends put in error bodies."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return None


def translate_transport_error(exc: BaseException) -> TransitionError:
    """Map any exception raised by a transport call onto the error taxonomy.

    Args:
        exc: Exception raised while performing the transition call

    Returns:
        TransitionError subclass matching the failure category
    """
    if isinstance(exc, TransitionError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        detail = _server_detail(exc.response)

        if status_code == 403:
            return ForbiddenTransitionError(status_code=status_code)
        if status_code == 409:
            return StateConflictError(status_code=status_code)
        if status_code == 400:
            return InvalidInputError(detail, status_code=status_code)
        return TransitionError(detail, status_code=status_code)

    if isinstance(exc, httpx.TransportError):
        return NetworkFailureError()

    logger.error(f"Unexpected transition failure: {type(exc).__name__}: {exc}")
    return TransitionError()
