"""Field helpers - field-id normalization and array value merging."""

from jirafield.fields.merger import merge_field_values
from jirafield.fields.normalizer import (
    CUSTOM_FIELD_PREFIX,
    CheckLevel,
    FieldIdCheck,
    check_field_id,
    normalize_field_id,
)

__all__ = [
    "CUSTOM_FIELD_PREFIX",
    "CheckLevel",
    "FieldIdCheck",
    "check_field_id",
    "merge_field_values",
    "normalize_field_id",
]
