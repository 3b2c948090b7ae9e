"""Custom exceptions for the Jira client."""

from __future__ import annotations


class JiraError(Exception):
    """Base exception for Jira client errors."""


class RestClientError(JiraError):
    """The Jira REST API rejected a request or could not be reached.

    Attributes:
        status_code: HTTP status code, or None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FieldNotFoundError(JiraError):
    """Field does not exist on the issue."""

    def __init__(self, field_id: str, issue_key: str) -> None:
        super().__init__(f"Field {field_id} not found on {issue_key}")
        self.field_id = field_id
        self.issue_key = issue_key


class FieldTypeError(JiraError):
    """Field exists but does not hold an array value."""
