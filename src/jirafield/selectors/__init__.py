"""Issue selectors - decide which Jira issues a run acts on."""

from jirafield.selectors.base import IssueSelector
from jirafield.selectors.changelog import DEFAULT_ISSUE_PATTERN, ChangelogIssueSelector
from jirafield.selectors.explicit import ExplicitIssueSelector
from jirafield.selectors.jql import JqlIssueSelector

__all__ = [
    "DEFAULT_ISSUE_PATTERN",
    "ChangelogIssueSelector",
    "ExplicitIssueSelector",
    "IssueSelector",
    "JqlIssueSelector",
]
