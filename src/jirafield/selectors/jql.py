"""Selector backed by a JQL search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jirafield.jira import JiraSite
    from jirafield.step.models import RunContext

logger = logging.getLogger(__name__)


class JqlIssueSelector:
    """Selects the issues returned by a JQL query on the run's site."""

    def __init__(self, jql: str, max_results: int | None = None) -> None:
        self.jql = jql
        self.max_results = max_results

    def find_issue_ids(self, context: RunContext, site: JiraSite) -> set[str]:
        session = site.get_session()
        if session is None:
            logger.warning("Cannot run JQL search: no session for %s", site.url)
            return set()
        logger.info("Selecting issues with JQL: %s", self.jql)
        return set(session.search_issue_keys(self.jql, max_results=self.max_results))
