# =============================================================================
# core/errors.py  —  Exception Taxonomy
# =============================================================================
#
# Two families of failure flow through the server:
#
#   1. STRUCTURAL input errors (unknown tool, missing required parameter).
#      These abort the invocation and surface through the dispatcher's
#      catch-all as an "Error executing <tool>: ..." envelope.
#
#   2. BACKEND errors (Prometheus down, bad JSON, PromQL rejected).
#      The Prometheus client raises these internally and converts them into
#      a QueryResult error marker before returning, so one failing metric
#      never aborts the others.
# =============================================================================


class MetricsServerError(Exception):
    """Base class for every error raised by the metrics server."""


class ConfigError(MetricsServerError):
    """An environment variable holds a value that cannot be used."""


# -----------------------------------------------------------------------------
# Structural input errors
# -----------------------------------------------------------------------------
class UnknownTool(MetricsServerError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class MissingRequiredParameter(MetricsServerError):
    def __init__(self, tool_name: str, parameter: str):
        self.tool_name = tool_name
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class UnknownMetricKey(MetricsServerError):
    def __init__(self, metric_key: str):
        self.metric_key = metric_key
        super().__init__(f"Unknown metric key: {metric_key}")


# -----------------------------------------------------------------------------
# Backend errors
# -----------------------------------------------------------------------------
class BackendUnreachable(MetricsServerError):
    """Connection refused, timeout, DNS failure or a non-2xx status."""


class BackendMalformedResponse(MetricsServerError):
    """The body was not JSON or did not have the data.result shape."""


class BackendQueryError(MetricsServerError):
    """Prometheus answered but reported status "error" for the query."""


class BackendQueryFailed(MetricsServerError):
    """Raised by a handler that cannot produce output without its query."""
