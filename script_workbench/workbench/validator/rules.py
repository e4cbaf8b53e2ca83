"""Validation primitives shared by every output parser."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable
from typing import Any

from workbench.validator.models import ValidationIssue, ValidationSeverity

INSTANCE_ID_INVALID_CHARS_RE = re.compile(r"[\s=:\\#]")
# ConfigSource batch wildvalues may contain "="
CONFIG_WILDVALUE_INVALID_CHARS_RE = re.compile(r"[:#\\\s]")
MAX_INSTANCE_ID_LENGTH = 1024
MAX_INSTANCE_NAME_LENGTH = 255

DATAPOINT_NAME_RE = re.compile(r"[\w.-]+", re.ASCII)
PROPERTY_NAME_RE = re.compile(r"[a-zA-Z_][\w.-]*", re.ASCII)

# Leading numeric prefix as accepted by JavaScript's parseFloat()
_FLOAT_PREFIX_RE = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)

COMMENT_PREFIXES = ("#", "//")

# Raised by load_json, also for well-formed documents holding a huge integer
# literal or nested deeper than the recursion limit
JSON_ERRORS = (ValueError, RecursionError)

_BYTE_ORDER_MARK = "\ufeff"


def issue(
    severity: ValidationSeverity,
    message: str,
    line_number: int,
    field: str | None = None,
) -> ValidationIssue:
    """Build a ValidationIssue from positional parts."""
    return ValidationIssue(
        severity=severity,
        message=message,
        line_number=line_number,
        field=field,
    )


def error(message: str, line_number: int, field: str | None = None) -> ValidationIssue:
    """Shorthand for an error-severity issue."""
    return issue(ValidationSeverity.error, message, line_number, field)


def warning(message: str, line_number: int, field: str | None = None) -> ValidationIssue:
    """Shorthand for a warning-severity issue."""
    return issue(ValidationSeverity.warning, message, line_number, field)


def is_comment(trimmed: str) -> bool:
    return trimmed.startswith(COMMENT_PREFIXES)


def strip_text(text: str) -> str:
    """Trim whitespace and any byte order mark from both ends."""
    stripped = text.strip()
    while stripped.startswith(_BYTE_ORDER_MARK) or stripped.endswith(_BYTE_ORDER_MARK):
        stripped = stripped.strip(_BYTE_ORDER_MARK).strip()
    return stripped


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name}")


def load_json(text: str) -> Any:
    """Decode a JSON document, refusing the non-standard NaN/Infinity literals.

    Raises one of JSON_ERRORS on anything that is not plain JSON.
    """
    return json.loads(strip_text(text), parse_constant=_reject_constant)


def is_missing(value: Any) -> bool:
    """True for None and falsy scalars; empty arrays and objects count as present."""
    return not value and not isinstance(value, (list, dict))


def check_instance_id(value: str, line_number: int) -> list[ValidationIssue]:
    """Validate an Active Discovery instance id (required, length, characters)."""
    if not value or not value.strip():
        return [error("Instance ID is required", line_number, "id")]

    issues: list[ValidationIssue] = []
    if len(value) > MAX_INSTANCE_ID_LENGTH:
        issues.append(
            error(
                f"Instance ID exceeds maximum length of {MAX_INSTANCE_ID_LENGTH} characters",
                line_number,
                "id",
            )
        )
    if INSTANCE_ID_INVALID_CHARS_RE.search(value):
        issues.append(
            error(
                "Instance ID contains invalid characters (spaces, =, :, \\, or #)",
                line_number,
                "id",
            )
        )
    return issues


def check_wildvalue(value: str, line_number: int) -> list[ValidationIssue]:
    """Validate a datapoint wildvalue with the same rules as an instance id."""
    issues: list[ValidationIssue] = []
    if INSTANCE_ID_INVALID_CHARS_RE.search(value):
        issues.append(
            error(
                "Wildvalue contains invalid characters (spaces, =, :, \\, or #)",
                line_number,
                "wildvalue",
            )
        )
    if len(value) > MAX_INSTANCE_ID_LENGTH:
        issues.append(
            error(
                f"Wildvalue exceeds maximum length of {MAX_INSTANCE_ID_LENGTH} characters",
                line_number,
                "wildvalue",
            )
        )
    return issues


def check_config_wildvalue(value: str, line_number: int) -> list[ValidationIssue]:
    """Validate a ConfigSource wildvalue, which tolerates ``=``."""
    if CONFIG_WILDVALUE_INVALID_CHARS_RE.search(value):
        return [
            error(
                f'Wildvalue "{value}" contains invalid characters (:, #, \\, or space)',
                line_number,
                "wildvalue",
            )
        ]
    return []


def check_instance_name(value: str, line_number: int) -> list[ValidationIssue]:
    """Warn on display names longer than the collector shows."""
    if value and len(value) > MAX_INSTANCE_NAME_LENGTH:
        return [
            warning(
                f"Instance name exceeds recommended length of {MAX_INSTANCE_NAME_LENGTH} characters",
                line_number,
                "name",
            )
        ]
    return []


def check_datapoint_name(name: str, line_number: int) -> list[ValidationIssue]:
    """Datapoint names should stick to letters, digits, ``_``, ``.`` and ``-``."""
    if not DATAPOINT_NAME_RE.fullmatch(name):
        return [
            warning(
                f'Datapoint name "{name}" contains non-standard characters',
                line_number,
                "name",
            )
        ]
    return []


def parse_float(text: str) -> float | None:
    """Coerce text to a number the way JavaScript's ``parseFloat`` does.

    Leading whitespace is skipped and the longest numeric prefix wins, so
    ``"42ms"`` gives 42.0. Returns None where parseFloat would give NaN.
    """
    match = _FLOAT_PREFIX_RE.match(text.lstrip())
    if not match:
        return None
    token = match.group(0)
    if token.endswith("Infinity"):
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def check_numeric_value(raw_value: str, line_number: int) -> tuple[float | None, list[ValidationIssue]]:
    value = parse_float(raw_value)
    if value is None:
        return None, [error(f'Value "{raw_value}" is not a valid number', line_number, "value")]
    return value, []


def find_duplicates(names: Iterable[str]) -> set[int]:
    """Return positions of names already seen earlier in the sequence."""
    seen: set[str] = set()
    duplicates: set[int] = set()
    for index, name in enumerate(names):
        if name in seen:
            duplicates.add(index)
        seen.add(name)
    return duplicates


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def to_compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def as_text(value: Any) -> str | None:
    """Render a loosely-typed JSON scalar as text; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return to_compact_json(value)


def truncate(text: str, limit: int = 100, ellipsis: bool = False) -> str:
    if ellipsis and len(text) > limit:
        return text[:limit] + "..."
    return text[:limit]
