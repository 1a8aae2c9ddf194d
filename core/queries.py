# =============================================================================
# core/queries.py  —  Query Template Registry
# =============================================================================
#
# Maps semantic metric keys ("latency", "gpu", ...) to PromQL.  Windowed
# templates carry a {w} slot that resolve() fills with the caller's window
# verbatim; "15m", "1h" and friends are never parsed here.  A bad window
# comes back from Prometheus as a query error, not as a local rejection.
#
# The declaration order of METRIC_QUERIES is the order metrics appear in a
# performance summary.
# =============================================================================

from core.errors import UnknownMetricKey
from core.models import MetricQuerySpec


_SPECS = (
    MetricQuerySpec(
        "latency",
        "histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[{w}]))",
    ),
    MetricQuerySpec("throughput", "rate(model_requests_total[{w}])"),
    MetricQuerySpec("memory", "process_resident_memory_bytes"),
    MetricQuerySpec("gpu", "nvidia_gpu_utilization_percent"),
    MetricQuerySpec("errors", 'rate(http_requests_total{status=~"5.."}[{w}])'),
    MetricQuerySpec("uptime", "up"),
    MetricQuerySpec(
        "responseTime",
        "histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))",
    ),
)

METRIC_QUERIES: dict[str, MetricQuerySpec] = {spec.metric_key: spec for spec in _SPECS}
METRIC_KEYS: tuple[str, ...] = tuple(METRIC_QUERIES)

# What get_model_performance(metric_type="all") queries.  "errors" is in the
# registry but not in this set; see DESIGN.md.
PERFORMANCE_METRICS: tuple[str, ...] = ("latency", "throughput", "memory", "gpu")


def resolve(metric_key: str, time_window: str) -> str:
    """Return the PromQL expression for ``metric_key`` over ``time_window``.

    Raises:
        UnknownMetricKey: if the key is not registered.
    """
    spec = METRIC_QUERIES.get(metric_key)
    if spec is None:
        raise UnknownMetricKey(metric_key)
    # str.replace, not str.format: PromQL label matchers use braces too.
    return spec.template.replace("{w}", time_window)


def uses_window(metric_key: str) -> bool:
    spec = METRIC_QUERIES.get(metric_key)
    if spec is None:
        raise UnknownMetricKey(metric_key)
    return spec.uses_window
