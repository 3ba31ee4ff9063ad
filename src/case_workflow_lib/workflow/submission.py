"""Submission state machine for an action dialog.

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED
                       |             -> PARTIALLY_SUCCEEDED
                       |             -> FAILED
                       -> FAILED (validation)

The re-entrancy guard is simply "reject new submissions while not IDLE".
The controller records the terminal state in last_state and returns to IDLE
on every path, so a failed or raising submission never locks the dialog.
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Sequence

from case_workflow_lib.errors import SubmissionInProgressError
from case_workflow_lib.models.actions import ActionForm, SubcaseId
from case_workflow_lib.models.outcome import ErrorCategory, OutcomeStatus, TransitionOutcome
from case_workflow_lib.workflow.executor import TransitionExecutor
from case_workflow_lib.workflow.payloads import build_payload, coerce_action_kind
from case_workflow_lib.workflow.validation import validate_action

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    PARTIALLY_SUCCEEDED = "partially_succeeded"
    FAILED = "failed"

    @property
    def in_flight(self) -> bool:
        return self in (SubmissionState.VALIDATING, SubmissionState.SUBMITTING)

    @classmethod
    def from_outcome(cls, status: OutcomeStatus) -> "SubmissionState":
        return cls(status.value)


class CaseActionSubmitter:
    """Validate, build and execute one action submission at a time.

    Usage:
        submitter = CaseActionSubmitter(TransitionExecutor(client))
        outcome = await submitter.submit(ActionKind.REJECT, form, [subcase_id])
        if not outcome.succeeded:
            show_error(outcome.message)
    """

    def __init__(self, executor: TransitionExecutor):
        self.executor = executor
        self.state = SubmissionState.IDLE
        self.last_state: Optional[SubmissionState] = None
        self.last_outcome: Optional[TransitionOutcome] = None
        self.history: List[SubmissionState] = [SubmissionState.IDLE]

    @property
    def busy(self) -> bool:
        return self.state.in_flight

    def _enter(self, state: SubmissionState) -> None:
        self.state = state
        self.history.append(state)

    async def submit(
        self,
        action_kind: Any,
        form: ActionForm,
        target_subcase_ids: Sequence[SubcaseId],
    ) -> TransitionOutcome:
        """Run one submission through the state machine.

        Raises:
            SubmissionInProgressError: If a submission is already outstanding
            UnknownActionKindError: If action_kind is not recognised
        """
        if self.state is not SubmissionState.IDLE:
            raise SubmissionInProgressError(
                f"Cannot submit while a submission is {self.state.value}"
            )

        kind = coerce_action_kind(action_kind)
        terminal = SubmissionState.FAILED
        try:
            self._enter(SubmissionState.VALIDATING)
            validation = validate_action(kind, form)
            if not validation.ok:
                outcome = TransitionOutcome(
                    status=OutcomeStatus.FAILED,
                    action_kind=kind,
                    message=validation.error,
                    error_category=ErrorCategory.VALIDATION,
                )
            else:
                payload = build_payload(kind, form)
                self._enter(SubmissionState.SUBMITTING)
                outcome = await self.executor.execute(kind, target_subcase_ids, payload)

            terminal = SubmissionState.from_outcome(outcome.status)
            self.last_outcome = outcome
            return outcome
        finally:
            self._enter(terminal)
            self.last_state = terminal
            self._enter(SubmissionState.IDLE)
            logger.debug(f"Submission of {kind.value} finished as {terminal.value}")
