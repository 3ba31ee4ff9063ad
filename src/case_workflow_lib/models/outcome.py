"""Outcome models reported by the transition executor."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from case_workflow_lib.models.actions import ActionKind, SubcaseId


class OutcomeStatus(str, Enum):
    """Aggregate result of one submission.

    Exactly one applies for any number of failed targets K in [0, N]:
    SUCCEEDED when K == 0, FAILED when K == N, PARTIALLY_SUCCEEDED otherwise.
    """

    SUCCEEDED = "succeeded"
    PARTIALLY_SUCCEEDED = "partially_succeeded"
    FAILED = "failed"

    @classmethod
    def from_counts(cls, succeeded: int, failed: int) -> "OutcomeStatus":
        if failed == 0:
            return cls.SUCCEEDED
        if succeeded == 0:
            return cls.FAILED
        return cls.PARTIALLY_SUCCEEDED


class ErrorCategory(str, Enum):
    """Failure taxonomy surfaced to the caller."""

    VALIDATION = "validation"  # caught locally, never sent
    FORBIDDEN = "forbidden"  # 403
    STATE_CONFLICT = "state_conflict"  # 409
    INVALID_INPUT = "invalid_input"  # 400
    NETWORK = "network"  # no response
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Resubmitting the same request is safe only after a network failure"""
        return self is ErrorCategory.NETWORK


class TargetResult(BaseModel):
    """Settled result of the transition call for one subcase."""

    subcase_id: SubcaseId
    succeeded: bool
    error_category: Optional[ErrorCategory] = None
    message: Optional[str] = None


class BulkOutcome(BaseModel):
    """Success/failure counters for a bulk submission.

    Filled in through record() only, one call per settled target. Once
    succeeded_count + failed_count == total the counters can no longer change.
    """

    total: int = Field(..., ge=1)
    succeeded_count: int = Field(default=0, ge=0)
    failed_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def counts_within_total(self):
        if self.succeeded_count + self.failed_count > self.total:
            raise ValueError(
                f"Recorded {self.succeeded_count + self.failed_count} results for {self.total} targets"
            )
        return self

    @property
    def settled_count(self) -> int:
        return self.succeeded_count + self.failed_count

    @property
    def is_complete(self) -> bool:
        return self.settled_count == self.total

    @property
    def status(self) -> OutcomeStatus:
        return OutcomeStatus.from_counts(self.succeeded_count, self.failed_count)

    def record(self, succeeded: bool) -> None:
        if self.is_complete:
            raise RuntimeError(f"BulkOutcome already holds all {self.total} results")
        if succeeded:
            self.succeeded_count += 1
        else:
            self.failed_count += 1

    def summary(self) -> str:
        """Human-readable readout, e.g. "2/3 completed, 1 failed." """
        if self.failed_count == 0:
            return f"{self.succeeded_count}/{self.total} completed."
        return f"{self.succeeded_count}/{self.total} completed, {self.failed_count} failed."


class TransitionOutcome(BaseModel):
    """What a submission reports back to the view.

    bulk is only set for multi-target submissions; single-target and locally
    rejected submissions carry error_category instead.
    """

    status: OutcomeStatus
    action_kind: ActionKind
    message: str
    error_category: Optional[ErrorCategory] = None
    results: List[TargetResult] = Field(default_factory=list)
    bulk: Optional[BulkOutcome] = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED

    @property
    def should_refresh(self) -> bool:
        """Whether server state may have changed, so the row list is stale"""
        return self.status is not OutcomeStatus.FAILED

    @property
    def failed_subcase_ids(self) -> List[SubcaseId]:
        return [result.subcase_id for result in self.results if not result.succeeded]
