"""Fold per-record validation issues into a ParseSummary."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from workbench.validator.models import ParseSummary, ValidationIssue, ValidationSeverity


class HasIssues(Protocol):
    issues: list[ValidationIssue]


def count_severity(issues: Iterable[ValidationIssue], severity: ValidationSeverity) -> int:
    return sum(1 for i in issues if i.severity == severity)


def summarize(records: Sequence[HasIssues]) -> ParseSummary:
    """Summary over record-oriented results.

    A record is valid when it carries no error-severity issue; warnings never
    affect validity.
    """
    errors = 0
    warnings = 0
    valid = 0
    for record in records:
        record_errors = count_severity(record.issues, ValidationSeverity.error)
        errors += record_errors
        warnings += count_severity(record.issues, ValidationSeverity.warning)
        if record_errors == 0:
            valid += 1
    return ParseSummary(total=len(records), valid=valid, errors=errors, warnings=warnings)


def summarize_document(issues: Sequence[ValidationIssue]) -> ParseSummary:
    """Summary for whole-document results, which always count as one record."""
    errors = count_severity(issues, ValidationSeverity.error)
    return ParseSummary(
        total=1,
        valid=0 if errors else 1,
        errors=errors,
        warnings=count_severity(issues, ValidationSeverity.warning),
    )
