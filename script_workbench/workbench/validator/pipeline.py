"""Output parsing pipeline — script-error check, header strip, one format parser.

Order: 1. Script-error detection on the raw text → 2. Header normalization →
3. Format resolution from (mode, module type, script type) → 4. Parse.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from workbench.validator.active_discovery import parse_ad_output
from workbench.validator.collection import parse_collection_output
from workbench.validator.config_source import parse_config_output
from workbench.validator.events import parse_event_output
from workbench.validator.logs import parse_log_output
from workbench.validator.models import (
    ModuleType,
    ParseOptions,
    ParseResult,
    ScriptMode,
    ScriptType,
    ValidationIssue,
    ValidationSeverity,
)
from workbench.validator.normalize import normalize_script_output
from workbench.validator.properties import parse_property_output
from workbench.validator.script_error import detect_script_error
from workbench.validator.topology import parse_topology_output

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """The grammar a piece of output is parsed with."""

    ad = "ad"
    collection = "collection"
    batchcollection = "batchcollection"
    topology = "topology"
    event = "event"
    property = "property"
    log = "log"
    config = "config"


_MODULE_TYPE_FORMATS: dict[ModuleType, OutputFormat] = {
    ModuleType.topologysource: OutputFormat.topology,
    ModuleType.eventsource: OutputFormat.event,
    ModuleType.propertysource: OutputFormat.property,
    ModuleType.logsource: OutputFormat.log,
    ModuleType.configsource: OutputFormat.config,
}

_PARSERS: dict[OutputFormat, Callable[[str], ParseResult]] = {
    OutputFormat.ad: parse_ad_output,
    OutputFormat.collection: parse_collection_output,
    OutputFormat.batchcollection: lambda text: parse_collection_output(text, batch=True),
    OutputFormat.topology: parse_topology_output,
    OutputFormat.event: parse_event_output,
    OutputFormat.property: parse_property_output,
    OutputFormat.log: parse_log_output,
    OutputFormat.config: parse_config_output,
}


def resolve_output_format(options: ParseOptions) -> OutputFormat | None:
    """Map parse options to an output grammar. None means freeform (no parsing)."""
    if options.mode == ScriptMode.freeform:
        return None
    if options.mode == ScriptMode.ad:
        return OutputFormat.ad
    if options.mode == ScriptMode.batchcollection:
        return OutputFormat.batchcollection
    if options.module_type is not None and options.script_type == ScriptType.collection:
        # datasource and diagnosticsource print plain key=value datapoints
        return _MODULE_TYPE_FORMATS.get(options.module_type, OutputFormat.collection)
    return OutputFormat.collection


def _coerce_options(options: ParseOptions | Mapping[str, Any]) -> ParseOptions:
    if isinstance(options, ParseOptions):
        return options
    if not isinstance(options, Mapping):
        raise ValueError(f"Parse options must be a mapping, got {type(options).__name__}")
    return ParseOptions.model_validate(options)


def _run(output: str, options: ParseOptions) -> ParseResult | None:
    output_format = resolve_output_format(options)
    if output_format is None:
        return None

    script_error = detect_script_error(output)
    if script_error is not None:
        logger.debug("Script reported an execution error: %s", script_error.error_message)
        return script_error

    clean_output = normalize_script_output(output)
    logger.debug("Parsing %d chars of output as %s", len(clean_output), output_format.value)
    return _PARSERS[output_format](clean_output)


def parse_output(
    output: str, options: ParseOptions | Mapping[str, Any]
) -> ParseResult | None:
    """Parse script output into a validated, per-record result.

    ``options`` is a ParseOptions or a mapping with ``mode`` and optionally
    ``module_type``/``moduleType`` and ``script_type``/``scriptType``.
    Returns None for freeform mode. Raises ValueError for missing or unknown
    options; malformed output never raises.
    """
    return _run(output, _coerce_options(options))


def parse_output_for_mode(output: str, mode: ScriptMode | str) -> ParseResult | None:
    """Deprecated: use ``parse_output(output, {"mode": mode})``."""
    warnings.warn(
        "parse_output_for_mode() is deprecated; pass ParseOptions to parse_output()",
        DeprecationWarning,
        stacklevel=2,
    )
    return _run(output, ParseOptions(mode=mode))


# ---------------------------------------------------------------------------
# Result inspection
# ---------------------------------------------------------------------------


def get_all_issues(result: ParseResult) -> list[ValidationIssue]:
    """Every issue in a result, in record order."""
    if result.type == "ad":
        return [i for r in result.instances for i in r.issues]
    if result.type in ("collection", "batchcollection"):
        return [i for r in result.datapoints for i in r.issues]
    if result.type == "topology":
        return [i for r in [*result.vertices, *result.edges] for i in r.issues]
    if result.type == "event":
        return [i for r in result.events for i in r.issues]
    if result.type == "property":
        return [i for r in result.properties for i in r.issues]
    if result.type == "log":
        return [i for r in result.entries for i in r.issues]
    return list(result.issues)


def get_issues_by_severity(
    result: ParseResult, severity: ValidationSeverity | str
) -> list[ValidationIssue]:
    """Issues of one severity; accepts the enum or its string value."""
    severity = ValidationSeverity(severity)
    return [i for i in get_all_issues(result) if i.severity == severity]


def has_errors(result: ParseResult) -> bool:
    """True if any record carries an error."""
    return result.summary.errors > 0


def has_warnings(result: ParseResult) -> bool:
    """True if any record carries a warning."""
    return result.summary.warnings > 0
