"""Selector for a fixed list of issue keys."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jirafield.jira import JiraSite
    from jirafield.step.models import RunContext


class ExplicitIssueSelector:
    """Selects exactly the issue keys it was given."""

    def __init__(self, issue_keys: Iterable[str]) -> None:
        self.issue_keys = [key.strip() for key in issue_keys if key and key.strip()]

    def find_issue_ids(self, context: RunContext, site: JiraSite) -> set[str]:
        return set(self.issue_keys)

    def __repr__(self) -> str:
        return f"ExplicitIssueSelector({self.issue_keys!r})"
