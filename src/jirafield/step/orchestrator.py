"""FieldUpdateOrchestrator - Adds a value to an array custom field on Jira issues."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jirafield.fields import merge_field_values, normalize_field_id
from jirafield.jira import FieldNotFoundError, FieldTypeError, RestClientError
from jirafield.logging import STEP_PREFIX
from jirafield.step.exceptions import (
    ConfigurationError,
    ConnectivityError,
    SchemaError,
    StepCancelledError,
    StepError,
)
from jirafield.step.models import (
    OutcomeStatus,
    RunResult,
    StepReport,
    TicketOutcome,
    UpdatePayload,
)

if TYPE_CHECKING:
    from jirafield.jira import JiraSite, RemoteSession
    from jirafield.step.models import RunContext, StepConfig

logger = logging.getLogger(__name__)

# Submission status codes with a dedicated explanation
_STATUS_MESSAGES = {
    404: "Jira issue not found",
    403: "Jira user does not have permission to edit this issue",
    401: "Jira authentication problem",
}


class FieldUpdateOrchestrator:
    """Runs the field update step for one build invocation.

    The run moves through selecting, collecting and submitting. Every
    issue is fetched and merged before anything is written, so a missing
    field aborts the run before any issue is modified. Failures to submit
    an individual issue are recorded and do not stop the others.
    """

    def __init__(self, config: StepConfig, site: JiraSite | None) -> None:
        """Initialize the orchestrator.

        Args:
            config: Step configuration (selector, field id, value).
            site: Jira site of the job, or None if the job has none.
        """
        self.config = config
        self.site = site

    def run(self, context: RunContext) -> StepReport:
        """Run the step.

        Args:
            context: The invoking build run.

        Returns:
            StepReport describing the overall result and each issue.
        """
        report = StepReport()
        try:
            session = self._connect()
            ticket_ids = self._select(context)
            report.ticket_ids = ticket_ids
            if not ticket_ids:
                logger.info("%s Issue list is empty!", STEP_PREFIX)
                return report

            report.field_id = normalize_field_id(self.config.field_id)
            payloads = self._collect(session, ticket_ids, report.field_id, context, report)
            self._submit(session, payloads, context, report)
        except StepCancelledError as e:
            logger.warning("%s %s", STEP_PREFIX, e)
            report.result = RunResult.ABORTED
            report.error = e
        except StepError as e:
            logger.error("%s %s", STEP_PREFIX, e)
            report.result = RunResult.FAILURE
            report.error = e
        return report

    def _connect(self) -> RemoteSession:
        """Check configuration and obtain the Jira session.

        Raises:
            ConfigurationError: No selector is configured.
            ConnectivityError: No site or no session is available.
        """
        if self.config.selector is None:
            raise ConfigurationError("No issue selector found!")
        if self.site is None:
            raise ConnectivityError("No Jira site is configured for this job")
        session = self.site.get_session()
        if session is None:
            raise ConnectivityError(f"Unable to access Jira site {self.site.url}")
        return session

    def _select(self, context: RunContext) -> list[str]:
        """Resolve the issue keys for this run, in a stable order."""
        selector = self.config.selector
        try:
            ticket_ids = selector.find_issue_ids(context, self.site)  # type: ignore[union-attr]
        except RestClientError as e:
            raise ConnectivityError(f"Failed to select issues: {e}") from e
        logger.debug("Selected %d issue(s): %s", len(ticket_ids), sorted(ticket_ids))
        return sorted(ticket_ids)

    def _collect(
        self,
        session: RemoteSession,
        ticket_ids: list[str],
        field_id: str,
        context: RunContext,
        report: StepReport,
    ) -> list[UpdatePayload]:
        """Fetch each issue and build its merged field value.

        Raises:
            SchemaError: The field is missing or not an array on some issue.
            ConnectivityError: An issue could not be fetched.
            StepCancelledError: The run was cancelled.
        """
        payloads = []
        for ticket_id in ticket_ids:
            self._check_cancelled(context)

            try:
                ticket = session.fetch(ticket_id)
            except RestClientError as e:
                raise ConnectivityError(f"Failed to fetch issue {ticket_id}: {e}") from e
            if ticket is None:
                logger.warning("%s Issue %s not found", STEP_PREFIX, ticket_id)
                report.outcomes.append(
                    TicketOutcome(ticket_id, OutcomeStatus.SKIPPED, reason="issue not found")
                )
                continue

            try:
                current = session.get_field_value(ticket, field_id)
            except FieldNotFoundError as e:
                raise SchemaError(f"Field {field_id} not found") from e
            except FieldTypeError as e:
                raise SchemaError(str(e)) from e

            values = merge_field_values(current, self.config.value_to_add)
            payloads.append(UpdatePayload(ticket_id, field_id, tuple(values)))

        return payloads

    def _submit(
        self,
        session: RemoteSession,
        payloads: list[UpdatePayload],
        context: RunContext,
        report: StepReport,
    ) -> None:
        """Submit each payload; failures are logged per issue and never raised."""
        for payload in payloads:
            self._check_cancelled(context)
            try:
                session.submit(payload.ticket_id, payload.as_fields())
            except RestClientError as e:
                self._log_submit_failure(payload.ticket_id, e)
                report.outcomes.append(
                    TicketOutcome(
                        payload.ticket_id,
                        OutcomeStatus.FAILED,
                        reason=str(e),
                        status_code=e.status_code,
                    )
                )
                continue

            logger.info(
                "%s Updated %s: %s = %s",
                STEP_PREFIX,
                payload.ticket_id,
                payload.field_id,
                list(payload.values),
            )
            report.outcomes.append(TicketOutcome(payload.ticket_id, OutcomeStatus.UPDATED))

        # Submission failures leave the run successful, only flagged unstable
        if report.failed:
            report.result = RunResult.UNSTABLE

    def _log_submit_failure(self, ticket_id: str, error: RestClientError) -> None:
        explanation = _STATUS_MESSAGES.get(error.status_code or 0)
        if explanation:
            logger.warning("%s %s - %s", STEP_PREFIX, ticket_id, explanation)
        logger.warning("%s Failed to update Jira issue %s", STEP_PREFIX, ticket_id)
        logger.warning("%s %s", STEP_PREFIX, error)

    @staticmethod
    def _check_cancelled(context: RunContext) -> None:
        if context.cancelled:
            raise StepCancelledError("Run cancelled, stopping")
