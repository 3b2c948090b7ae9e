"""Jira client - REST session, site and issue model."""

from jirafield.jira.exceptions import (
    FieldNotFoundError,
    FieldTypeError,
    JiraError,
    RestClientError,
)
from jirafield.jira.models import Ticket
from jirafield.jira.session import JiraSession, RemoteSession
from jirafield.jira.site import JiraSite

__all__ = [
    "FieldNotFoundError",
    "FieldTypeError",
    "JiraError",
    "JiraSession",
    "JiraSite",
    "RemoteSession",
    "RestClientError",
    "Ticket",
]
