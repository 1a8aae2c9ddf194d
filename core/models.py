# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through one
# tool invocation:
#
#   ToolDefinition / ParameterSpec   →  the static, advertised catalog
#   *Params                          →  typed arguments, one record per tool
#   Series / QueryResult             →  what Prometheus sent back
#   ToolSuccess / ToolFailure        →  the dispatcher's outcome
#
# Only the catalog and the query templates live for the whole process.
# Everything else is created at the start of an invocation and dropped at
# its end.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional, Union


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------
_JSON_TYPES = {"string": "string", "boolean": "boolean", "number": "number"}


@dataclass(frozen=True)
class ParameterSpec:
    """One declared tool parameter.

    A parameter is either required or carries a default; never neither.
    ``allowed_values`` documents intent in the schema, it is not enforced.
    """

    name: str
    kind: str                                 # "string" | "boolean" | "number"
    description: str = ""
    allowed_values: tuple = ()
    default: Any = None
    required: bool = False

    def __post_init__(self):
        if self.kind not in _JSON_TYPES:
            raise ValueError(f"Unsupported parameter kind: {self.kind}")
        if not self.required and self.default is None:
            raise ValueError(f"Parameter '{self.name}' needs a default or must be required")

    def json_schema(self) -> dict:
        schema: dict[str, Any] = {"type": _JSON_TYPES[self.kind]}
        if self.description:
            schema["description"] = self.description
        if self.allowed_values:
            schema["enum"] = list(self.allowed_values)
        if not self.required:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-described tool."""

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = ()

    def input_schema(self) -> dict:
        """The JSON-Schema object advertised in an MCP tools/list reply."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
        }
        required = [p.name for p in self.parameters if p.required]
        if required:
            schema["required"] = required
        return schema


@dataclass
class ToolInvocationRequest:
    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# Typed arguments — one record per tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PerformanceParams:
    time_range: str
    metric_type: str


@dataclass(frozen=True)
class HealthParams:
    include_traces: bool                      # accepted, currently inert


@dataclass(frozen=True)
class PrometheusQueryParams:
    query: str
    time_range: str                           # accepted, never substituted


# -----------------------------------------------------------------------------
# Query templates and results
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class MetricQuerySpec:
    """A semantic metric name bound to a PromQL template.

    ``template`` marks the window slot with ``{w}``; instant gauges have none.
    """

    metric_key: str
    template: str

    @property
    def uses_window(self) -> bool:
        return "{w}" in self.template


@dataclass(frozen=True)
class Series:
    """One labelled sample from an instant-vector result."""

    labels: dict[str, str]
    timestamp: float
    value: str                                # exactly as Prometheus sent it

    @property
    def name(self) -> Optional[str]:
        return self.labels.get("__name__")


@dataclass
class QueryResult:
    """The outcome of one backend query: series, or an error marker."""

    metric_key: Optional[str]
    series: list[Series] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, series: list[Series], metric_key: Optional[str] = None) -> "QueryResult":
        return cls(metric_key=metric_key, series=list(series))

    @classmethod
    def failed(cls, message: str, metric_key: Optional[str] = None) -> "QueryResult":
        return cls(metric_key=metric_key, error=message)


# -----------------------------------------------------------------------------
# Dispatcher outcome
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolSuccess:
    text: str


@dataclass(frozen=True)
class ToolFailure:
    tool_name: str
    error: Exception

    @property
    def message(self) -> str:
        return f"Error executing {self.tool_name}: {self.error}"


ToolOutcome = Union[ToolSuccess, ToolFailure]


def to_envelope(outcome: ToolOutcome) -> dict:
    """Render either outcome into the single MCP text-content shape."""
    if isinstance(outcome, ToolFailure):
        text = outcome.message
    else:
        text = outcome.text
    return {"content": [{"type": "text", "text": text}]}
