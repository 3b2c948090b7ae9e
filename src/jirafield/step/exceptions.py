"""Exceptions for the field update step."""


class StepError(Exception):
    """Base exception for errors that end a step invocation."""


class ConfigurationError(StepError):
    """The step is not configured well enough to run."""


class ConnectivityError(StepError):
    """The Jira site or session is unavailable."""


class SchemaError(StepError):
    """The target field does not exist or is not an array field."""


class StepCancelledError(StepError):
    """The host cancelled the run."""
