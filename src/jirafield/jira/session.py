"""JiraSession - REST access to Jira issues."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import httpx

from jirafield.jira.exceptions import (
    FieldNotFoundError,
    FieldTypeError,
    RestClientError,
)
from jirafield.jira.models import Ticket
from jirafield.logging import sanitize_for_log

logger = logging.getLogger(__name__)

API_PATH = "/rest/api/2"
SEARCH_PAGE_SIZE = 50


class RemoteSession(Protocol):
    """Operations the field update step needs from a Jira connection."""

    def fetch(self, ticket_id: str) -> Ticket | None: ...

    def get_field_value(self, ticket: Ticket, field_id: str) -> list[str] | None: ...

    def submit(self, ticket_id: str, fields: Sequence[tuple[str, list[str]]]) -> None: ...


class JiraSession:
    """Synchronous Jira REST API v2 session.

    Wraps a single ``httpx.Client``; timeouts are owned here, not by callers.
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            base_url: Jira site URL, e.g. "https://example.atlassian.net"
            username: Account name for basic auth. When omitted, the token
                      is sent as a bearer token (Jira Data Center PAT).
            token: API token or personal access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            headers = {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
            auth: tuple[str, str] | None = None
            if self.username and self.token:
                auth = (self.username, self.token)
            elif self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.Client(
                base_url=self.base_url + API_PATH,
                headers=headers,
                auth=auth,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> JiraSession:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, converting transport errors to RestClientError."""
        try:
            return self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RestClientError(
                sanitize_for_log(f"{method} {path} failed: {e}")
            ) from e

    @staticmethod
    def _error_for(response: httpx.Response) -> RestClientError:
        """Build a RestClientError from a failed response."""
        message = response.text
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            messages = list(body.get("errorMessages") or [])
            messages.extend(f"{k}: {v}" for k, v in (body.get("errors") or {}).items())
            if messages:
                message = "; ".join(messages)
        return RestClientError(
            sanitize_for_log(f"{response.status_code} - {message}"),
            status_code=response.status_code,
        )

    @staticmethod
    def _json_object(response: httpx.Response) -> dict[str, Any]:
        """Decode a successful response body that must be a JSON object."""
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise RestClientError(
                f"Invalid JSON from {response.request.url.path}",
                status_code=response.status_code,
            )
        return data

    def fetch(self, ticket_id: str) -> Ticket | None:
        """Fetch an issue by key.

        Args:
            ticket_id: Issue key, e.g. "PROJ-12"

        Returns:
            Ticket, or None if the issue does not exist

        Raises:
            RestClientError: For any other failure
        """
        logger.debug("Fetching issue %s", ticket_id)
        response = self._request("GET", f"/issue/{ticket_id}")
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise self._error_for(response)

        data = self._json_object(response)
        return Ticket(
            key=str(data.get("key", ticket_id)),
            id=str(data.get("id", "")),
            fields=dict(data.get("fields") or {}),
        )

    def get_field_value(self, ticket: Ticket, field_id: str) -> list[str] | None:
        """Read an array-valued field from a fetched issue.

        Returns:
            The field's string values, or None if the field is unset

        Raises:
            FieldNotFoundError: The field is not present on the issue
            FieldTypeError: The field holds something other than an array
        """
        if field_id not in ticket.fields:
            raise FieldNotFoundError(field_id, ticket.key)

        value = ticket.fields[field_id]
        if value is None:
            return None
        if not isinstance(value, list):
            raise FieldTypeError(
                f"Field {field_id} on {ticket.key} is not an array field "
                f"(got {type(value).__name__})"
            )

        values = []
        for item in value:
            if item is None:
                logger.debug("Ignoring null entry in %s on %s", field_id, ticket.key)
                continue
            if isinstance(item, (dict, list)):
                raise FieldTypeError(
                    f"Field {field_id} on {ticket.key} is not a string array field "
                    f"(got {type(item).__name__} entries)"
                )
            values.append(item if isinstance(item, str) else str(item))
        return values

    def submit(self, ticket_id: str, fields: Sequence[tuple[str, list[str]]]) -> None:
        """Set field values on an issue.

        Args:
            ticket_id: Issue key
            fields: (field_id, values) pairs to write

        Raises:
            RestClientError: If Jira rejects the update
        """
        payload = {"fields": {field_id: list(values) for field_id, values in fields}}
        logger.debug("Updating issue %s: %s", ticket_id, payload)
        response = self._request("PUT", f"/issue/{ticket_id}", json=payload)
        if not response.is_success:
            raise self._error_for(response)

    def search_issue_keys(self, jql: str, max_results: int | None = None) -> list[str]:
        """Return the keys of all issues matching a JQL query.

        Args:
            jql: JQL query string
            max_results: Stop after this many keys (None for all)

        Raises:
            RestClientError: If the search fails
        """
        keys: list[str] = []
        start_at = 0
        while True:
            response = self._request(
                "GET",
                "/search",
                params={
                    "jql": jql,
                    "fields": "key",
                    "startAt": start_at,
                    "maxResults": SEARCH_PAGE_SIZE,
                },
            )
            if not response.is_success:
                raise self._error_for(response)

            data = self._json_object(response)
            issues = data.get("issues") or []
            keys.extend(str(issue["key"]) for issue in issues)

            if max_results is not None and len(keys) >= max_results:
                return keys[:max_results]

            start_at += len(issues)
            if not issues or start_at >= int(data.get("total", 0)):
                break

        logger.info("JQL search returned %d issue(s)", len(keys))
        return keys
