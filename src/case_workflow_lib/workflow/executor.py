"""Transition executor: submit one decision against one or many subcases.

Single target:
    One transition call. A failure surfaces the translated server error.

Bulk (more than one target):
    Every call is launched at once and none is cancelled when another fails.
    Subcases under one incident are independent server-side entities, so
    there is no transaction and no rollback. After every call has settled the
    results are reconciled, in input order, into a BulkOutcome:

    - all succeeded          -> SUCCEEDED
    - some succeeded         -> PARTIALLY_SUCCEEDED (caller should refresh)
    - all failed             -> FAILED
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from typing_extensions import Protocol

from case_workflow_lib.errors import GENERIC_MESSAGE, translate_transport_error
from case_workflow_lib.models.actions import ActionKind, ActionRequest, SubcaseId
from case_workflow_lib.models.outcome import (
    BulkOutcome,
    ErrorCategory,
    OutcomeStatus,
    TargetResult,
    TransitionOutcome,
)
from case_workflow_lib.models.subcase import IncidentGroup
from case_workflow_lib.workflow.payloads import coerce_action_kind

logger = logging.getLogger(__name__)

SINGLE_SUCCESS_MESSAGE = "Action completed successfully"


class TransitionTransport(Protocol):
    """Anything that can submit one transition for one subcase.

    Implementations raise on failure and return the server's success flag
    otherwise. A False return is a failed target; whatever they raise is
    translated by the executor.
    """

    async def act_on_subcase(
        self, subcase_id: SubcaseId, action_kind: ActionKind, payload: Dict[str, Any]
    ) -> bool:
        ...


class TransitionExecutor:
    """Submits ActionRequests through a TransitionTransport.

    Usage:
        executor = TransitionExecutor(WorkflowServiceClient(base_url=...))
        outcome = await executor.execute(ActionKind.APPROVE, [7], {})
        if outcome.should_refresh:
            rows = await client.get_inbox()
    """

    def __init__(self, transport: TransitionTransport):
        self.transport = transport

    async def execute(
        self,
        action_kind: Any,
        target_subcase_ids: Sequence[SubcaseId],
        payload: Optional[Dict[str, Any]] = None,
    ) -> TransitionOutcome:
        """Submit one transition against every target.

        Args:
            action_kind: ActionKind or its wire code
            target_subcase_ids: Non-empty list of subcase ids
            payload: Body shared by every target (built by build_payload)

        Returns:
            TransitionOutcome; transport failures never propagate

        Raises:
            UnknownActionKindError: If action_kind is not recognised
            pydantic.ValidationError: If target_subcase_ids is empty
        """
        request = ActionRequest(
            action_kind=coerce_action_kind(action_kind),
            target_subcase_ids=list(target_subcase_ids),
            payload=payload or {},
        )
        if request.is_bulk:
            return await self._execute_bulk(request)
        return await self._execute_single(request)

    async def execute_groups(
        self,
        action_kind: Any,
        groups: Iterable[IncidentGroup],
        payload: Optional[Dict[str, Any]] = None,
    ) -> TransitionOutcome:
        """Submit one transition against every subcase of the given groups."""
        target_ids: List[SubcaseId] = []
        for group in groups:
            target_ids.extend(group.target_subcase_ids)
        return await self.execute(action_kind, target_ids, payload)

    async def _execute_single(self, request: ActionRequest) -> TransitionOutcome:
        [result] = await self._settle_all(request)

        if result.succeeded:
            return TransitionOutcome(
                status=OutcomeStatus.SUCCEEDED,
                action_kind=request.action_kind,
                message=SINGLE_SUCCESS_MESSAGE,
                results=[result],
            )

        return TransitionOutcome(
            status=OutcomeStatus.FAILED,
            action_kind=request.action_kind,
            message=result.message or GENERIC_MESSAGE,
            error_category=result.error_category,
            results=[result],
        )

    async def _execute_bulk(self, request: ActionRequest) -> TransitionOutcome:
        logger.info(
            f"[Transition] Launching {request.action_kind.value} for "
            f"{len(request.target_subcase_ids)} subcases"
        )

        results = await self._settle_all(request)

        bulk = BulkOutcome(total=len(results))
        for result in results:
            bulk.record(result.succeeded)

        logger.info(
            f"[Transition] {request.action_kind.value} settled: "
            f"{bulk.succeeded_count} succeeded, {bulk.failed_count} failed"
        )

        return TransitionOutcome(
            status=bulk.status,
            action_kind=request.action_kind,
            message=bulk.summary(),
            results=results,
            bulk=bulk,
        )

    async def _settle_all(self, request: ActionRequest) -> List[TargetResult]:
        """Launch every call at once and settle each into a TargetResult, in input order."""
        settled = await asyncio.gather(
            *(self._submit_one(request, subcase_id) for subcase_id in request.target_subcase_ids),
            return_exceptions=True,
        )

        results: List[TargetResult] = []
        for subcase_id, result in zip(request.target_subcase_ids, settled):
            if isinstance(result, TargetResult):
                results.append(result)
                continue
            if not isinstance(result, Exception):
                raise result
            logger.error(
                f"[Transition] {request.action_kind.value} for subcase {subcase_id} "
                f"could not be settled: {type(result).__name__}: {result}"
            )
            results.append(
                TargetResult(
                    subcase_id=subcase_id,
                    succeeded=False,
                    error_category=ErrorCategory.UNKNOWN,
                    message=GENERIC_MESSAGE,
                )
            )
        return results

    async def _submit_one(self, request: ActionRequest, subcase_id: SubcaseId) -> TargetResult:
        """Run one transition call and settle it into a TargetResult."""
        try:
            succeeded = await self.transport.act_on_subcase(subcase_id, request.action_kind, request.payload)
        except Exception as e:
            error = translate_transport_error(e)
            logger.warning(
                f"[Transition] {request.action_kind.value} failed for subcase {subcase_id}: "
                f"{error.category.value}: {error.message}"
            )
            return TargetResult(
                subcase_id=subcase_id,
                succeeded=False,
                error_category=error.category,
                message=error.message,
            )

        if succeeded is False:
            logger.warning(
                f"[Transition] {request.action_kind.value} for subcase {subcase_id} "
                f"was not applied by the server"
            )
            return TargetResult(
                subcase_id=subcase_id,
                succeeded=False,
                error_category=ErrorCategory.UNKNOWN,
                message=GENERIC_MESSAGE,
            )

        return TargetResult(subcase_id=subcase_id, succeeded=True)
