"""Custom field identifier normalization and pre-flight checks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

CUSTOM_FIELD_PREFIX = "customfield_"

_NUMERIC_ID = re.compile(r"\d+")


def normalize_field_id(raw: str) -> str:
    """Return the canonical ``customfield_<id>`` form of a field identifier.

    Already-canonical identifiers are returned unchanged. The remainder is
    not validated here; see :func:`check_field_id`.
    """
    if raw.startswith(CUSTOM_FIELD_PREFIX):
        return raw
    return CUSTOM_FIELD_PREFIX + raw


class CheckLevel(str, Enum):
    """Outcome level of a field-id check."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class FieldIdCheck:
    """Result of checking a user-supplied field id.

    Attributes:
        level: OK, WARNING or ERROR.
        message: Human-readable explanation (empty when OK).
    """

    level: CheckLevel
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.level is not CheckLevel.ERROR


def check_field_id(value: str | None) -> FieldIdCheck:
    """Check a bare field id as entered by the user.

    A blank value is only a warning; anything that is not purely numeric is
    an error.
    """
    if not (value or "").strip():
        return FieldIdCheck(CheckLevel.WARNING, "No issue field ID given")
    if not _NUMERIC_ID.fullmatch(value or ""):
        return FieldIdCheck(
            CheckLevel.ERROR,
            f"Not a numeric issue field ID: {value!r}",
        )
    return FieldIdCheck(CheckLevel.OK)
