"""Selector protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from jirafield.jira import JiraSite
    from jirafield.step.models import RunContext


class IssueSelector(Protocol):
    """Produces the set of issue keys relevant to a run."""

    def find_issue_ids(self, context: RunContext, site: JiraSite) -> set[str]:
        """Return the issue keys for this run. May be empty."""
        ...
