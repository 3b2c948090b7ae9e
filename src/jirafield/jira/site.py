"""JiraSite - A configured Jira instance."""

from __future__ import annotations

import logging

import httpx

from jirafield.jira.session import JiraSession

logger = logging.getLogger(__name__)


class JiraSite:
    """A Jira site the build step talks to.

    Holds connection settings and hands out a single shared session.
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.username = username
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._session: JiraSession | None = None

    def get_session(self) -> JiraSession | None:
        """Get the site session, or None if the site has no credentials."""
        if not self.token:
            logger.debug("No credentials configured for %s", self.url)
            return None
        if self._session is None:
            self._session = JiraSession(
                self.url,
                username=self.username,
                token=self.token,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._session

    def close(self) -> None:
        """Close the shared session, if one was opened."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __repr__(self) -> str:
        return f"JiraSite(url={self.url!r})"
