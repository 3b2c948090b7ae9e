"""Data models for the field update step."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jirafield.selectors import IssueSelector
    from jirafield.step.exceptions import StepError


class RunResult(str, Enum):
    """Overall outcome of one step invocation."""

    SUCCESS = "success"
    UNSTABLE = "unstable"  # succeeded, but some submissions failed
    FAILURE = "failure"
    ABORTED = "aborted"


class OutcomeStatus(str, Enum):
    """What happened to a single issue."""

    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepConfig:
    """Step configuration, fixed for one invocation.

    Attributes:
        selector: Strategy that picks the issues to update.
        field_id: Custom field id, bare ("10010") or canonical ("customfield_10010").
        value_to_add: Value appended to the field when not already present.
    """

    selector: IssueSelector | None
    field_id: str
    value_to_add: str


@dataclass
class RunContext:
    """Information about the build run invoking the step.

    Attributes:
        job_name: Name of the job being run.
        build_number: Build number within the job.
        change_messages: Commit/change messages of the run, for selectors.
        cancel_event: Set by the host to request cancellation.
    """

    job_name: str = ""
    build_number: int | None = None
    change_messages: list[str] = field(default_factory=list)
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()


@dataclass(frozen=True)
class UpdatePayload:
    """Field value to write to one issue."""

    ticket_id: str
    field_id: str
    values: tuple[str, ...]

    def as_fields(self) -> list[tuple[str, list[str]]]:
        return [(self.field_id, list(self.values))]


@dataclass
class TicketOutcome:
    """Result for one issue.

    Attributes:
        ticket_id: Issue key.
        status: UPDATED, SKIPPED or FAILED.
        reason: Why the issue was skipped or failed.
        status_code: HTTP status of a failed submission, if known.
    """

    ticket_id: str
    status: OutcomeStatus
    reason: str | None = None
    status_code: int | None = None


@dataclass
class StepReport:
    """Everything one invocation did."""

    result: RunResult = RunResult.SUCCESS
    field_id: str | None = None
    ticket_ids: list[str] = field(default_factory=list)
    outcomes: list[TicketOutcome] = field(default_factory=list)
    error: StepError | None = None

    @property
    def succeeded(self) -> bool:
        return self.result in (RunResult.SUCCESS, RunResult.UNSTABLE)

    def _with_status(self, status: OutcomeStatus) -> list[TicketOutcome]:
        return [o for o in self.outcomes if o.status is status]

    @property
    def updated(self) -> list[TicketOutcome]:
        return self._with_status(OutcomeStatus.UPDATED)

    @property
    def skipped(self) -> list[TicketOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> list[TicketOutcome]:
        return self._with_status(OutcomeStatus.FAILED)
