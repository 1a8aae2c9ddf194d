# =============================================================================
# core/dispatcher.py  —  Tool Dispatcher & Handlers
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. Look the tool up in the catalog        (unknown → UnknownTool)
#   2. Parse arguments into the typed record  (missing → MissingRequiredParameter)
#   3. Run the handler
#   4. Wrap the outcome: ToolSuccess(text) or ToolFailure(tool, error)
#
# Nothing raised by steps 1-3 escapes dispatch().  call() renders either
# outcome into the same text envelope, so an MCP client sees a failure only
# as text starting with "Error executing <tool>:".
#
# The dispatcher holds no mutable state.  Concurrent calls share only the
# catalog, the query registry and the client's read-only settings.
# =============================================================================

import logging
from typing import Any, Callable, Mapping, Optional

from core.catalog import (
    ANALYZE_MODEL_HEALTH,
    GET_MODEL_PERFORMANCE,
    GET_PROMETHEUS_QUERY,
    get_tool,
    parse_arguments,
)
from core.errors import BackendQueryFailed, UnknownMetricKey, UnknownTool
from core.formatting import summarize, tabulate
from core.models import (
    HealthParams,
    PerformanceParams,
    PrometheusQueryParams,
    QueryResult,
    ToolFailure,
    ToolInvocationRequest,
    ToolOutcome,
    ToolSuccess,
    to_envelope,
)
from core.queries import PERFORMANCE_METRICS, resolve, uses_window


logger = logging.getLogger(__name__)


HEALTH_REPORT = (
    "### Current Health Status\n\n"
    "**Overall Status**: 🟢 Healthy\n\n"
    "- Model is responding within acceptable limits\n"
    "- Error rates are within normal range\n"
    "- Resource utilization is optimal\n"
)


class ToolDispatcher:
    """Routes tool calls to handlers backed by a Prometheus client.

    ``client`` is anything with ``execute(expression, metric_key=None)``
    returning a QueryResult; normally a core.prometheus.PrometheusClient.
    """

    def __init__(self, client):
        self.client = client
        self._handlers: dict[str, Callable[[Any], str]] = {
            GET_MODEL_PERFORMANCE.name: self.get_model_performance,
            ANALYZE_MODEL_HEALTH.name: self.analyze_model_health,
            GET_PROMETHEUS_QUERY.name: self.get_prometheus_query,
        }

    def dispatch(self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolOutcome:
        try:
            tool = get_tool(tool_name)
            if tool is None:
                raise UnknownTool(tool_name)
            params = parse_arguments(tool, arguments)
            text = self._handlers[tool.name](params)
        except Exception as e:
            logger.error("Tool %s failed: %s", tool_name, e)
            return ToolFailure(tool_name=tool_name, error=e)
        return ToolSuccess(text=text)

    def handle(self, request: ToolInvocationRequest) -> dict:
        """dispatch() rendered as an MCP text-content envelope."""
        return to_envelope(self.dispatch(request.tool_name, request.arguments))

    def call(self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> dict:
        return self.handle(ToolInvocationRequest(tool_name, dict(arguments or {})))

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    def get_model_performance(self, params: PerformanceParams) -> str:
        if params.metric_type == "all":
            metric_keys = PERFORMANCE_METRICS
        else:
            metric_keys = (params.metric_type,)

        results: dict[str, QueryResult] = {}
        for metric_key in metric_keys:
            try:
                expression = resolve(metric_key, params.time_range)
            except UnknownMetricKey as e:
                results[metric_key] = QueryResult.failed(str(e), metric_key=metric_key)
                continue
            if not uses_window(metric_key):
                logger.debug("%s is an instant gauge; timeRange %s not applied", metric_key, params.time_range)
            results[metric_key] = self.client.execute(expression, metric_key=metric_key)

        summary = summarize(results, params.time_range)
        return f"## Model Performance Metrics ({params.time_range})\n\n{summary}"

    def analyze_model_health(self, params: HealthParams) -> str:
        # Static report: no backend query is made and include_traces is unused.
        return HEALTH_REPORT

    def get_prometheus_query(self, params: PrometheusQueryParams) -> str:
        result = self.client.execute(params.query)
        if result.is_error:
            raise BackendQueryFailed(f"Prometheus query failed: {result.error}")
        table = tabulate(result.series, params.query)
        return f"## Prometheus Query Results\n\n**Query:** `{params.query}`\n\n{table}"
