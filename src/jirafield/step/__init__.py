"""Field update step - append a value to a custom field on selected issues."""

from jirafield.step.exceptions import (
    ConfigurationError,
    ConnectivityError,
    SchemaError,
    StepCancelledError,
    StepError,
)
from jirafield.step.models import (
    OutcomeStatus,
    RunContext,
    RunResult,
    StepConfig,
    StepReport,
    TicketOutcome,
    UpdatePayload,
)
from jirafield.step.orchestrator import FieldUpdateOrchestrator

__all__ = [
    "ConfigurationError",
    "ConnectivityError",
    "FieldUpdateOrchestrator",
    "OutcomeStatus",
    "RunContext",
    "RunResult",
    "SchemaError",
    "StepCancelledError",
    "StepConfig",
    "StepError",
    "StepReport",
    "TicketOutcome",
    "UpdatePayload",
]
