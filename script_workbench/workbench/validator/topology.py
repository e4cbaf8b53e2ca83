"""TopologySource output parser: a single ``{"vertices": [...], "edges": [...]}`` document."""

from __future__ import annotations

import logging
from typing import Any

from workbench.validator.models import (
    TopologyEdge,
    TopologyParseResult,
    TopologyVertex,
    UnparsedLine,
    ValidationIssue,
)
from workbench.validator.rules import JSON_ERRORS, as_text, error, is_missing, load_json, truncate
from workbench.validator.summary import summarize

logger = logging.getLogger(__name__)

# Edge keys copied through as-is, mapped to model attribute names
_EDGE_TEXT_FIELDS = {
    "type": "type",
    "displayType": "display_type",
    "fromInstance": "from_instance",
    "toInstance": "to_instance",
    "fromInstanceEdgeType": "from_instance_edge_type",
    "toInstanceEdgeType": "to_instance_edge_type",
    "instanceEdgeType": "instance_edge_type",
    "metricReportingNode": "metric_reporting_node",
}


def _dict_or_none(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _parse_vertex(raw: Any) -> TopologyVertex:
    v = raw if isinstance(raw, dict) else {}
    issues: list[ValidationIssue] = []
    if not v.get("id") and not v.get("name"):
        issues.append(error("Vertex must have an id or name", 1))

    return TopologyVertex(
        id=as_text(v.get("id") or v.get("name") or "unknown"),
        name=as_text(v.get("name")),
        type=as_text(v.get("type")),
        properties=_dict_or_none(v.get("properties")),
        issues=issues,
    )


def _parse_edge(raw: Any) -> TopologyEdge:
    e = raw if isinstance(raw, dict) else {}
    issues: list[ValidationIssue] = []
    if not e.get("from"):
        issues.append(error('Edge must have a "from" field', 1))
    if not e.get("to"):
        issues.append(error('Edge must have a "to" field', 1))

    extras = {attr: as_text(e.get(key)) for key, attr in _EDGE_TEXT_FIELDS.items()}
    return TopologyEdge(
        from_=as_text(e.get("from") or ""),
        to=as_text(e.get("to") or ""),
        health_data=_dict_or_none(e.get("fromHealthData") or e.get("toHealthData")),
        meta_data=_dict_or_none(e.get("metaData")),
        issues=issues,
        **extras,
    )


def parse_topology_output(output: str) -> TopologyParseResult:
    """Parse topology JSON. Invalid JSON or missing arrays become unparsed entries."""
    vertices: list[TopologyVertex] = []
    edges: list[TopologyEdge] = []
    unparsed: list[UnparsedLine] = []

    try:
        parsed = load_json(output)
    except JSON_ERRORS as e:
        logger.debug("Topology output is not valid JSON: %s", e)
        unparsed.append(
            UnparsedLine(
                line_number=1,
                content=truncate(output, ellipsis=True),
                reason=f"Invalid JSON: {e}",
            )
        )
        return TopologyParseResult(unparsed_lines=unparsed)

    doc = parsed if isinstance(parsed, dict) else {}

    if isinstance(doc.get("vertices"), list):
        vertices = [_parse_vertex(v) for v in doc["vertices"]]
    if isinstance(doc.get("edges"), list):
        edges = [_parse_edge(e) for e in doc["edges"]]

    if is_missing(doc.get("vertices")):
        unparsed.append(
            UnparsedLine(
                line_number=1,
                content=truncate(output),
                reason='Missing "vertices" array in topology output',
            )
        )
    if is_missing(doc.get("edges")):
        unparsed.append(
            UnparsedLine(
                line_number=1,
                content=truncate(output),
                reason='Missing "edges" array in topology output',
            )
        )

    return TopologyParseResult(
        vertices=vertices,
        edges=edges,
        unparsed_lines=unparsed,
        summary=summarize([*vertices, *edges]),
    )
