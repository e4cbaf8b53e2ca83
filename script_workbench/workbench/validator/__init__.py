"""Script output parsing and validation."""

from workbench.validator.models import (
    ModuleType,
    ParseOptions,
    ParseResult,
    ParseSummary,
    ScriptMode,
    ScriptType,
    ValidationIssue,
    ValidationSeverity,
)
from workbench.validator.pipeline import (
    OutputFormat,
    get_all_issues,
    get_issues_by_severity,
    has_errors,
    has_warnings,
    parse_output,
    parse_output_for_mode,
    resolve_output_format,
)

__all__ = [
    "ModuleType",
    "OutputFormat",
    "ParseOptions",
    "ParseResult",
    "ParseSummary",
    "ScriptMode",
    "ScriptType",
    "ValidationIssue",
    "ValidationSeverity",
    "get_all_issues",
    "get_issues_by_severity",
    "has_errors",
    "has_warnings",
    "parse_output",
    "parse_output_for_mode",
    "resolve_output_format",
]
