"""Collection and BatchScript collection output parser.

Plain collection output is one ``datapoint=value`` per line. BatchScript output
is either a JSON document keyed by wildvalue or one
``wildvalue.datapoint=value`` per line.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from workbench.validator.models import (
    CollectionDatapoint,
    CollectionParseResult,
    UnparsedLine,
    ValidationIssue,
)
from workbench.validator.rules import (
    JSON_ERRORS,
    check_config_wildvalue,
    check_datapoint_name,
    check_numeric_value,
    check_wildvalue,
    error,
    is_comment,
    json_type_name,
    load_json,
    parse_float,
    strip_text,
    warning,
)
from workbench.validator.summary import summarize

logger = logging.getLogger(__name__)

# JSON BatchScript output has no line structure
JSON_LINE_NUMBER = 1


def _values_datapoints(wildvalue: str, values: dict[str, Any]) -> list[CollectionDatapoint]:
    datapoints: list[CollectionDatapoint] = []
    for metric, value in values.items():
        issues = check_wildvalue(wildvalue, JSON_LINE_NUMBER)
        num_value: float | None = None

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                num_value = float(value)
            except OverflowError:
                # Integer literal past the float range reads as +/-Infinity
                num_value = math.inf if value > 0 else -math.inf
            raw_value = json.dumps(value)
        elif isinstance(value, str):
            raw_value = value
            num_value = parse_float(value)
            if num_value is None:
                issues.append(
                    error(f'Value "{value}" is not a valid number', JSON_LINE_NUMBER, "value")
                )
        else:
            raw_value = json.dumps(value)
            issues.append(
                error(
                    f"Value must be a number, got {json_type_name(value)}",
                    JSON_LINE_NUMBER,
                    "value",
                )
            )

        datapoints.append(
            CollectionDatapoint(
                name=metric,
                value=num_value,
                raw_value=raw_value,
                wildvalue=wildvalue,
                issues=issues,
                line_number=JSON_LINE_NUMBER,
                raw_line=f"{wildvalue}.{metric}={raw_value}",
            )
        )
    return datapoints


def _configuration_datapoint(wildvalue: str, config: Any) -> CollectionDatapoint:
    issues = check_config_wildvalue(wildvalue, JSON_LINE_NUMBER)

    if not isinstance(config, str):
        raw_value = json.dumps(config)
        preview = raw_value
        issues.append(
            error(
                f"Configuration must be a string, got {json_type_name(config)}",
                JSON_LINE_NUMBER,
                "value",
            )
        )
    else:
        raw_value = config
        preview = config[:50] + "..."
        if not config.strip():
            issues.append(warning("Configuration is empty", JSON_LINE_NUMBER, "value"))

    return CollectionDatapoint(
        name="configuration",
        value=None,
        raw_value=raw_value,
        wildvalue=wildvalue,
        issues=issues,
        line_number=JSON_LINE_NUMBER,
        raw_line=f"{wildvalue}.configuration={preview}",
    )


def try_parse_batch_json(output: str) -> CollectionParseResult | None:
    """Parse the JSON BatchScript form, or return None to fall back to lines.

    Handles both the DataSource shape ``{"data": {wv: {"values": {...}}}}`` and
    the ConfigSource shape ``{"data": {wv: {"configuration": "..."}}}``.
    """
    trimmed = strip_text(output)
    if not trimmed.startswith("{"):
        return None

    try:
        parsed = load_json(trimmed)
    except JSON_ERRORS as e:
        logger.debug("Batch output is not valid JSON, using line format: %s", e)
        return None

    if not isinstance(parsed, dict) or not isinstance(parsed.get("data"), dict):
        logger.debug("Batch JSON has no 'data' object, using line format")
        return None

    datapoints: list[CollectionDatapoint] = []
    for wildvalue, instance_data in parsed["data"].items():
        if not isinstance(instance_data, dict):
            continue
        values = instance_data.get("values")
        if isinstance(values, dict):
            datapoints.extend(_values_datapoints(wildvalue, values))
        elif "configuration" in instance_data:
            datapoints.append(_configuration_datapoint(wildvalue, instance_data["configuration"]))

    return CollectionParseResult(
        type="batchcollection",
        datapoints=datapoints,
        summary=summarize(datapoints),
        is_json_format=True,
    )


def parse_collection_line(line: str, line_number: int, batch: bool) -> CollectionDatapoint:
    """Parse one ``key=value`` line. The caller guarantees a non-leading ``=``."""
    trimmed = line.strip()
    eq_index = trimmed.index("=")
    key = trimmed[:eq_index]
    raw_value = trimmed[eq_index + 1 :]

    name = key
    wildvalue: str | None = None
    issues: list[ValidationIssue] = []

    if batch:
        # Split on the last dot: wildvalues are often IP addresses
        dot_index = key.rfind(".")
        if dot_index > 0:
            wildvalue = key[:dot_index]
            name = key[dot_index + 1 :]
            issues.extend(check_wildvalue(wildvalue, line_number))
        else:
            issues.append(
                error(
                    "Batchscript output requires wildvalue prefix "
                    "(format: wildvalue.datapoint=value)",
                    line_number,
                    "name",
                )
            )

    value, value_issues = check_numeric_value(raw_value, line_number)
    issues.extend(value_issues)
    issues.extend(check_datapoint_name(name, line_number))

    return CollectionDatapoint(
        name=name,
        value=value,
        raw_value=raw_value,
        wildvalue=wildvalue,
        issues=issues,
        line_number=line_number,
        raw_line=line,
    )


def parse_collection_output(output: str, batch: bool = False) -> CollectionParseResult:
    """Parse ``key=value`` collection lines; with ``batch`` the JSON form is tried first."""
    if batch:
        json_result = try_parse_batch_json(output)
        if json_result is not None:
            return json_result

    datapoints: list[CollectionDatapoint] = []
    unparsed: list[UnparsedLine] = []

    for index, line in enumerate(output.split("\n")):
        line_number = index + 1
        trimmed = line.strip()
        if not trimmed:
            continue

        if is_comment(trimmed):
            unparsed.append(
                UnparsedLine(line_number=line_number, content=line, reason="Comment line")
            )
            continue

        eq_index = trimmed.find("=")
        if eq_index < 0:
            unparsed.append(
                UnparsedLine(
                    line_number=line_number,
                    content=line,
                    reason="Does not match collection format (missing = delimiter)",
                )
            )
            continue
        if eq_index == 0:
            unparsed.append(
                UnparsedLine(
                    line_number=line_number,
                    content=line,
                    reason="Missing datapoint name before = delimiter",
                )
            )
            continue

        datapoints.append(parse_collection_line(line, line_number, batch))

    return CollectionParseResult(
        type="batchcollection" if batch else "collection",
        datapoints=datapoints,
        unparsed_lines=unparsed,
        summary=summarize(datapoints),
    )
