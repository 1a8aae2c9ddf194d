# =============================================================================
# core/catalog.py  —  Tool Catalog & Argument Parsing
# =============================================================================
#
# The three tools this server exposes, with the exact names and input
# schemas MCP clients see in tools/list.
#
# parse_arguments() turns the loosely typed argument bag of a tools/call
# into the typed record of that tool:
#   - omitted optional argument (missing, None, "")  →  declared default
#   - omitted required argument                      →  MissingRequiredParameter
#   - undeclared keys                                →  ignored
#   - value outside a declared enum                  →  logged, passed through
# =============================================================================

import logging
from typing import Any, Mapping, Optional, Union

from core.errors import MissingRequiredParameter
from core.models import (
    HealthParams,
    ParameterSpec,
    PerformanceParams,
    PrometheusQueryParams,
    ToolDefinition,
)


logger = logging.getLogger(__name__)

TIME_RANGES = ("5m", "15m", "1h", "24h")
METRIC_TYPES = ("all", "latency", "throughput", "memory", "gpu")


GET_MODEL_PERFORMANCE = ToolDefinition(
    name="get_model_performance",
    description=(
        "Get current model runner performance metrics including latency, "
        "throughput, and resource usage"
    ),
    parameters=(
        ParameterSpec("timeRange", "string", allowed_values=TIME_RANGES, default="5m"),
        ParameterSpec("metric_type", "string", allowed_values=METRIC_TYPES, default="all"),
    ),
)

ANALYZE_MODEL_HEALTH = ToolDefinition(
    name="analyze_model_health",
    description="Analyze model health status and provide recommendations",
    parameters=(
        ParameterSpec("includeTraces", "boolean", default=False),
    ),
)

GET_PROMETHEUS_QUERY = ToolDefinition(
    name="get_prometheus_query",
    description="Execute custom Prometheus queries for detailed metrics analysis",
    parameters=(
        ParameterSpec("query", "string", description="PromQL query to execute", required=True),
        ParameterSpec("timeRange", "string", default="1h"),
    ),
)

TOOL_CATALOG: dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (GET_MODEL_PERFORMANCE, ANALYZE_MODEL_HEALTH, GET_PROMETHEUS_QUERY)
}

ToolParams = Union[PerformanceParams, HealthParams, PrometheusQueryParams]


def get_tool(name: str) -> Optional[ToolDefinition]:
    return TOOL_CATALOG.get(name)


def list_tools() -> list[dict]:
    """Catalog in tools/list shape: name, description, inputSchema."""
    return [
        {"name": tool.name, "description": tool.description, "inputSchema": tool.input_schema()}
        for tool in TOOL_CATALOG.values()
    ]


def _is_omitted(value: Any) -> bool:
    return value is None or value == ""


def resolve_arguments(tool: ToolDefinition, arguments: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Apply defaults and required-field checks; return name → value."""
    arguments = arguments or {}
    resolved: dict[str, Any] = {}
    for spec in tool.parameters:
        value = arguments.get(spec.name)
        if _is_omitted(value):
            if spec.required:
                raise MissingRequiredParameter(tool.name, spec.name)
            value = spec.default
        elif spec.allowed_values and value not in spec.allowed_values:
            logger.warning(
                "%s: %s=%r is not one of %s; passing it through",
                tool.name, spec.name, value, list(spec.allowed_values),
            )
        resolved[spec.name] = value
    return resolved


def parse_arguments(tool: ToolDefinition, arguments: Optional[Mapping[str, Any]]) -> ToolParams:
    """Build the typed parameter record for ``tool``."""
    values = resolve_arguments(tool, arguments)
    if tool is GET_MODEL_PERFORMANCE:
        return PerformanceParams(time_range=str(values["timeRange"]),
                                 metric_type=str(values["metric_type"]))
    if tool is ANALYZE_MODEL_HEALTH:
        return HealthParams(include_traces=values["includeTraces"])
    if tool is GET_PROMETHEUS_QUERY:
        return PrometheusQueryParams(query=str(values["query"]),
                                     time_range=str(values["timeRange"]))
    raise ValueError(f"No parameter record for tool: {tool.name}")
