"""Merge a value into an array-valued custom field."""

from __future__ import annotations

from collections.abc import Sequence


def merge_field_values(current: Sequence[str] | None, value_to_add: str) -> list[str]:
    """Return the value list to submit after adding ``value_to_add``.

    An absent field counts as empty. If the value is already present (exact,
    case-sensitive match) the current values are returned unchanged;
    otherwise it is appended at the end. Order is always preserved and the
    input is never mutated.
    """
    values = list(current) if current is not None else []
    if value_to_add not in values:
        values.append(value_to_add)
    return values
