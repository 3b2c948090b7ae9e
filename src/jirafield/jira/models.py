"""Data models for the Jira client."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Ticket:
    """A Jira issue as returned by the REST API."""

    key: str
    id: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
