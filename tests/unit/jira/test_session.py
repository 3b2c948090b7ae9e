"""Unit tests for JiraSession."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from jirafield.jira import (
    FieldNotFoundError,
    FieldTypeError,
    JiraSession,
    RestClientError,
    Ticket,
)

BASE_URL = "https://jira.example.com"


def _session(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> JiraSession:
    """Create a JiraSession backed by a mock transport."""
    return JiraSession(
        BASE_URL,
        username=kwargs.pop("username", "ci"),
        token=kwargs.pop("token", "secret"),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.unit
class TestFetch:
    """Tests for fetch."""

    def test_fetch_returns_ticket(self) -> None:
        """Issue key, id and fields are populated."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "id": "10001",
                    "key": "PROJ-1",
                    "fields": {"summary": "Fix it", "customfield_10010": ["a"]},
                },
            )

        ticket = _session(handler).fetch("PROJ-1")

        assert ticket == Ticket(
            key="PROJ-1",
            id="10001",
            fields={"summary": "Fix it", "customfield_10010": ["a"]},
        )
        assert requests[0].method == "GET"
        assert requests[0].url.path == "/rest/api/2/issue/PROJ-1"

    def test_fetch_missing_issue_returns_none(self) -> None:
        session = _session(lambda request: httpx.Response(404, json={"errorMessages": ["gone"]}))

        assert session.fetch("PROJ-404") is None

    def test_fetch_server_error_raises(self) -> None:
        session = _session(
            lambda request: httpx.Response(500, json={"errorMessages": ["Internal error"]})
        )

        with pytest.raises(RestClientError) as exc_info:
            session.fetch("PROJ-1")

        assert exc_info.value.status_code == 500
        assert "Internal error" in str(exc_info.value)

    def test_transport_error_has_no_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RestClientError) as exc_info:
            _session(handler).fetch("PROJ-1")

        assert exc_info.value.status_code is None

    def test_fetch_redirect_raises(self) -> None:
        """A redirect to a login page is not an issue."""
        session = _session(
            lambda request: httpx.Response(302, headers={"Location": f"{BASE_URL}/login.jsp"})
        )

        with pytest.raises(RestClientError) as exc_info:
            session.fetch("PROJ-1")

        assert exc_info.value.status_code == 302

    def test_fetch_html_body_raises(self) -> None:
        session = _session(lambda request: httpx.Response(200, text="<html>login</html>"))

        with pytest.raises(RestClientError) as exc_info:
            session.fetch("PROJ-1")

        assert exc_info.value.status_code == 200
        assert "Invalid JSON from /rest/api/2/issue/PROJ-1" in str(exc_info.value)

    def test_fetch_non_object_body_raises(self) -> None:
        session = _session(lambda request: httpx.Response(200, json=["PROJ-1"]))

        with pytest.raises(RestClientError, match="Invalid JSON"):
            session.fetch("PROJ-1")

    def test_basic_auth_header_sent(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization", "")
            return httpx.Response(200, json={"key": "PROJ-1", "fields": {}})

        _session(handler).fetch("PROJ-1")

        assert seen["auth"].startswith("Basic ")

    def test_bearer_token_without_username(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization", "")
            return httpx.Response(200, json={"key": "PROJ-1", "fields": {}})

        _session(handler, username=None, token="pat-token").fetch("PROJ-1")

        assert seen["auth"] == "Bearer pat-token"


@pytest.mark.unit
class TestGetFieldValue:
    """Tests for get_field_value."""

    @pytest.fixture
    def session(self) -> JiraSession:
        return JiraSession(BASE_URL, token="secret")

    def test_returns_string_values(self, session: JiraSession) -> None:
        ticket = Ticket(key="PROJ-1", fields={"customfield_1": ["a", "b"]})

        assert session.get_field_value(ticket, "customfield_1") == ["a", "b"]

    def test_null_value_is_absent(self, session: JiraSession) -> None:
        ticket = Ticket(key="PROJ-1", fields={"customfield_1": None})

        assert session.get_field_value(ticket, "customfield_1") is None

    def test_missing_field_raises(self, session: JiraSession) -> None:
        ticket = Ticket(key="PROJ-1", fields={"summary": "x"})

        with pytest.raises(FieldNotFoundError) as exc_info:
            session.get_field_value(ticket, "customfield_1")

        assert exc_info.value.field_id == "customfield_1"
        assert exc_info.value.issue_key == "PROJ-1"

    def test_non_array_raises(self, session: JiraSession) -> None:
        ticket = Ticket(key="PROJ-1", fields={"customfield_1": "text"})

        with pytest.raises(FieldTypeError):
            session.get_field_value(ticket, "customfield_1")

    def test_null_entries_dropped_and_scalars_stringified(self, session: JiraSession) -> None:
        ticket = Ticket(key="PROJ-1", fields={"customfield_1": ["a", None, 3]})

        assert session.get_field_value(ticket, "customfield_1") == ["a", "3"]

    @pytest.mark.parametrize("entry", [{"value": "a"}, ["a"]])
    def test_structured_entries_raise(self, session: JiraSession, entry: object) -> None:
        """Option and user arrays hold objects, not strings."""
        ticket = Ticket(key="PROJ-1", fields={"customfield_1": ["b", entry]})

        with pytest.raises(FieldTypeError, match="not a string array field"):
            session.get_field_value(ticket, "customfield_1")


@pytest.mark.unit
class TestSubmit:
    """Tests for submit."""

    def test_submit_puts_fields(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        _session(handler).submit("PROJ-1", [("customfield_1", ["a", "b"])])

        assert requests[0].method == "PUT"
        assert requests[0].url.path == "/rest/api/2/issue/PROJ-1"
        assert json.loads(requests[0].content) == {"fields": {"customfield_1": ["a", "b"]}}

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_submit_rejected_raises_with_status(self, status: int) -> None:
        session = _session(
            lambda request: httpx.Response(
                status, json={"errorMessages": [], "errors": {"customfield_1": "bad value"}}
            )
        )

        with pytest.raises(RestClientError) as exc_info:
            session.submit("PROJ-1", [("customfield_1", ["a"])])

        assert exc_info.value.status_code == status
        assert "customfield_1: bad value" in str(exc_info.value)

    def test_submit_redirect_raises(self) -> None:
        session = _session(
            lambda request: httpx.Response(302, headers={"Location": f"{BASE_URL}/login.jsp"})
        )

        with pytest.raises(RestClientError) as exc_info:
            session.submit("PROJ-1", [("customfield_1", ["a"])])

        assert exc_info.value.status_code == 302

    def test_error_text_is_sanitized(self) -> None:
        session = _session(lambda request: httpx.Response(401, text="Bearer abc.def rejected"))

        with pytest.raises(RestClientError) as exc_info:
            session.submit("PROJ-1", [("customfield_1", ["a"])])

        assert "abc.def" not in str(exc_info.value)


@pytest.mark.unit
class TestSearchIssueKeys:
    """Tests for search_issue_keys."""

    def test_paginates_until_total(self) -> None:
        pages = {
            "0": {"total": 3, "issues": [{"key": "A-1"}, {"key": "A-2"}]},
            "2": {"total": 3, "issues": [{"key": "A-3"}]},
        }
        seen_jql: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_jql.append(request.url.params["jql"])
            return httpx.Response(200, json=pages[request.url.params["startAt"]])

        keys = _session(handler).search_issue_keys("project = A")

        assert keys == ["A-1", "A-2", "A-3"]
        assert seen_jql == ["project = A", "project = A"]

    def test_max_results_truncates(self) -> None:
        session = _session(
            lambda request: httpx.Response(
                200, json={"total": 10, "issues": [{"key": f"A-{i}"} for i in range(1, 6)]}
            )
        )

        assert session.search_issue_keys("project = A", max_results=2) == ["A-1", "A-2"]

    def test_empty_result(self) -> None:
        session = _session(lambda request: httpx.Response(200, json={"total": 0, "issues": []}))

        assert session.search_issue_keys("project = NONE") == []

    def test_bad_jql_raises(self) -> None:
        session = _session(
            lambda request: httpx.Response(400, json={"errorMessages": ["Bad JQL"]})
        )

        with pytest.raises(RestClientError, match="Bad JQL"):
            session.search_issue_keys("project = ")

    def test_html_body_raises(self) -> None:
        session = _session(lambda request: httpx.Response(200, text="<html>login</html>"))

        with pytest.raises(RestClientError, match="Invalid JSON from /rest/api/2/search"):
            session.search_issue_keys("project = A")
