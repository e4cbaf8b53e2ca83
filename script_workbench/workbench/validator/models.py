"""Parse result data models.

Attributes are snake_case in Python and camelCase on the wire, so the editor UI
receives ``lineNumber``, ``rawLine``, ``unparsedLines`` and friends.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    error = "error"
    warning = "warning"
    info = "info"


class ScriptMode(str, Enum):
    freeform = "freeform"
    ad = "ad"
    collection = "collection"
    batchcollection = "batchcollection"


class ModuleType(str, Enum):
    datasource = "datasource"
    configsource = "configsource"
    topologysource = "topologysource"
    propertysource = "propertysource"
    logsource = "logsource"
    eventsource = "eventsource"
    diagnosticsource = "diagnosticsource"


class ScriptType(str, Enum):
    ad = "ad"
    collection = "collection"


class ParseOptions(_WireModel):
    """Which grammar the output should be read with."""

    mode: ScriptMode
    module_type: ModuleType | None = None
    script_type: ScriptType | None = None


class ValidationIssue(_WireModel):
    """A single validation finding attached to a record."""

    severity: ValidationSeverity
    message: str
    line_number: int = Field(1, ge=1)
    field: str | None = None


class ParseSummary(_WireModel):
    total: int = Field(0, ge=0)
    valid: int = Field(0, ge=0)
    errors: int = Field(0, ge=0)
    warnings: int = Field(0, ge=0)


class UnparsedLine(_WireModel):
    """A line (or document fragment) that no record was built from."""

    line_number: int
    content: str
    reason: str


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class ADInstance(_WireModel):
    id: str
    name: str = ""
    description: str | None = None
    properties: dict[str, str | None] | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    line_number: int
    raw_line: str


class CollectionDatapoint(_WireModel):
    name: str
    value: float | None = None
    raw_value: str
    wildvalue: str | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    line_number: int
    raw_line: str


class TopologyVertex(_WireModel):
    id: str
    name: str | None = None
    type: str | None = None
    properties: dict[str, Any] | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)


class TopologyEdge(_WireModel):
    """An edge between two vertices.

    Everything past ``from``/``to`` is display or instance metadata that is
    passed through as the script emitted it.
    """

    from_: str = Field("", alias="from")
    to: str = ""
    type: str | None = None
    display_type: str | None = None
    from_instance: str | None = None
    to_instance: str | None = None
    from_instance_edge_type: str | None = None
    to_instance_edge_type: str | None = None
    instance_edge_type: str | None = None
    health_data: dict[str, Any] | None = None
    meta_data: dict[str, Any] | None = None
    metric_reporting_node: str | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)


class EventEntry(_WireModel):
    happened_on: str | None = None
    severity: str | None = None
    message: str | None = None
    source: str | None = None
    properties: dict[str, Any] | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    line_number: int
    raw_line: str


class PropertyEntry(_WireModel):
    name: str
    value: str
    issues: list[ValidationIssue] = Field(default_factory=list)
    line_number: int
    raw_line: str


class LogEntry(_WireModel):
    timestamp: str | None = None
    message: str
    issues: list[ValidationIssue] = Field(default_factory=list)
    line_number: int
    raw_line: str


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ADParseResult(_WireModel):
    type: Literal["ad"] = "ad"
    instances: list[ADInstance] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class CollectionParseResult(_WireModel):
    type: Literal["collection", "batchcollection"] = "collection"
    datapoints: list[CollectionDatapoint] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)
    is_json_format: bool = False


class TopologyParseResult(_WireModel):
    type: Literal["topology"] = "topology"
    vertices: list[TopologyVertex] = Field(default_factory=list)
    edges: list[TopologyEdge] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class EventParseResult(_WireModel):
    type: Literal["event"] = "event"
    events: list[EventEntry] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class PropertyParseResult(_WireModel):
    type: Literal["property"] = "property"
    properties: list[PropertyEntry] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class LogParseResult(_WireModel):
    type: Literal["log"] = "log"
    entries: list[LogEntry] = Field(default_factory=list)
    unparsed_lines: list[UnparsedLine] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class ConfigParseResult(_WireModel):
    """Whole-document result for non-batch ConfigSource output."""

    type: Literal["config"] = "config"
    content: str
    issues: list[ValidationIssue] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


class ScriptErrorParseResult(_WireModel):
    """The script itself failed to run; its output was never parsed."""

    type: Literal["script_error"] = "script_error"
    error_message: str
    output: str = ""
    issues: list[ValidationIssue] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)


ParseResult = Annotated[
    Union[
        ADParseResult,
        CollectionParseResult,
        TopologyParseResult,
        EventParseResult,
        PropertyParseResult,
        LogParseResult,
        ConfigParseResult,
        ScriptErrorParseResult,
    ],
    Field(discriminator="type"),
]
