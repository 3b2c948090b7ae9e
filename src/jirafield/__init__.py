"""jirafield - Append values to multi-value Jira custom fields from a build pipeline."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
