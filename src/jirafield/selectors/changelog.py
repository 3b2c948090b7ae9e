"""Selector that scans change messages for issue keys."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jirafield.jira import JiraSite
    from jirafield.step.models import RunContext

logger = logging.getLogger(__name__)

DEFAULT_ISSUE_PATTERN = r"([a-zA-Z][a-zA-Z0-9_]+-[1-9][0-9]*)"


class ChangelogIssueSelector:
    """Selects issues mentioned in the run's change messages.

    Keys are upper-cased so "proj-1" and "PROJ-1" select the same issue.
    If the pattern has a capture group, the first group is the key.
    """

    def __init__(self, pattern: str = DEFAULT_ISSUE_PATTERN) -> None:
        self.pattern = re.compile(pattern)

    def find_issue_ids(self, context: RunContext, site: JiraSite) -> set[str]:
        keys: set[str] = set()
        for message in context.change_messages:
            for match in self.pattern.finditer(message):
                key = match.group(1) if self.pattern.groups else match.group(0)
                keys.add(key.upper())
        logger.debug(
            "Found %d issue key(s) in %d change message(s)",
            len(keys),
            len(context.change_messages),
        )
        return keys
