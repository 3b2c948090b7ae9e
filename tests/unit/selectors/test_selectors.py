"""Unit tests for issue selectors."""

from unittest.mock import MagicMock

import pytest

from jirafield.selectors import (
    ChangelogIssueSelector,
    ExplicitIssueSelector,
    JqlIssueSelector,
)
from jirafield.step import RunContext


@pytest.fixture
def site() -> MagicMock:
    """Create a mock JiraSite."""
    site = MagicMock()
    site.url = "https://jira.example.com"
    return site


@pytest.mark.unit
class TestExplicitIssueSelector:
    """Tests for ExplicitIssueSelector."""

    def test_returns_given_keys(self, site: MagicMock) -> None:
        selector = ExplicitIssueSelector(["PROJ-1", "PROJ-2", "PROJ-1"])

        assert selector.find_issue_ids(RunContext(), site) == {"PROJ-1", "PROJ-2"}

    def test_blank_entries_ignored(self, site: MagicMock) -> None:
        selector = ExplicitIssueSelector([" PROJ-1 ", "", "  "])

        assert selector.find_issue_ids(RunContext(), site) == {"PROJ-1"}

    def test_does_not_contact_site(self, site: MagicMock) -> None:
        ExplicitIssueSelector(["PROJ-1"]).find_issue_ids(RunContext(), site)

        site.get_session.assert_not_called()


@pytest.mark.unit
class TestChangelogIssueSelector:
    """Tests for ChangelogIssueSelector."""

    def test_finds_keys_in_messages(self, site: MagicMock) -> None:
        context = RunContext(
            change_messages=[
                "PROJ-12 fix login\n\nAlso touches OPS-3",
                "Refactor without ticket",
                "proj-12: follow-up",
            ]
        )

        keys = ChangelogIssueSelector().find_issue_ids(context, site)

        assert keys == {"PROJ-12", "OPS-3"}

    def test_no_messages(self, site: MagicMock) -> None:
        assert ChangelogIssueSelector().find_issue_ids(RunContext(), site) == set()

    def test_zero_issue_number_not_matched(self, site: MagicMock) -> None:
        context = RunContext(change_messages=["bump UTF-8 and PROJ-0"])

        assert ChangelogIssueSelector().find_issue_ids(context, site) == {"UTF-8"}

    def test_custom_pattern(self, site: MagicMock) -> None:
        context = RunContext(change_messages=["[ABC-7] done, DEF-1 not ours"])

        keys = ChangelogIssueSelector(r"\[(ABC-\d+)\]").find_issue_ids(context, site)

        assert keys == {"ABC-7"}


@pytest.mark.unit
class TestJqlIssueSelector:
    """Tests for JqlIssueSelector."""

    def test_returns_search_results(self, site: MagicMock) -> None:
        session = site.get_session.return_value
        session.search_issue_keys.return_value = ["PROJ-1", "PROJ-2"]

        keys = JqlIssueSelector("fixVersion = 1.0", max_results=10).find_issue_ids(
            RunContext(), site
        )

        assert keys == {"PROJ-1", "PROJ-2"}
        session.search_issue_keys.assert_called_once_with("fixVersion = 1.0", max_results=10)

    def test_no_session_selects_nothing(self, site: MagicMock) -> None:
        site.get_session.return_value = None

        assert JqlIssueSelector("project = PROJ").find_issue_ids(RunContext(), site) == set()
