# =============================================================================
# core/formatting.py  —  Result Formatter
# =============================================================================
#
# Two renderings, both pure:
#
#   summarize()  →  narrative, one "- **KEY**: value" line per metric, with
#                   the value converted to a readable unit (ms, req/s, MB, %)
#   tabulate()   →  markdown table of raw series, values left EXACTLY as
#                   Prometheus returned them
#
# Unit conversion belongs to summarize() only.  A tabulated value must read
# back as the backend's number.
# =============================================================================

from typing import Iterable, Mapping

from core.models import QueryResult, Series
from core.queries import METRIC_KEYS


NO_RESULTS = "No results found for the query."

_BYTES_PER_MB = 1024 * 1024


def format_metric_value(metric_key: str, raw: str) -> str:
    """Convert a raw sample string into a display value for ``metric_key``."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return str(raw)

    if metric_key == "latency":
        return f"{value * 1000:.2f}ms"
    if metric_key == "throughput":
        return f"{value:.2f} req/s"
    if metric_key == "memory":
        return f"{value / _BYTES_PER_MB:.2f} MB"
    if metric_key == "gpu":
        return f"{value:.1f}%"
    return str(raw)


def _summary_order(keys: Iterable[str]) -> list[str]:
    """Registry declaration order first, anything unregistered after it."""
    present = list(keys)
    ordered = [key for key in METRIC_KEYS if key in present]
    ordered.extend(key for key in present if key not in METRIC_KEYS)
    return ordered


def summarize(results_by_metric: Mapping[str, QueryResult], time_window: str) -> str:
    """Render a performance overview.

    Metrics with an error marker show the marker; metrics with no series are
    left out entirely.
    """
    lines = [f"### Performance Overview ({time_window})", ""]
    for metric_key in _summary_order(results_by_metric):
        result = results_by_metric[metric_key]
        label = metric_key.upper()
        if result.is_error:
            lines.append(f"- **{label}**: Error: {result.error}")
        elif result.series:
            value = format_metric_value(metric_key, result.series[0].value)
            lines.append(f"- **{label}**: {value}")
    return "\n".join(lines) + "\n"


def _labels(series: Series) -> str:
    return ", ".join(f"{k}={v}" for k, v in series.labels.items() if k != "__name__")


def tabulate(series: list[Series], query: str) -> str:
    """Render series as a ``Metric | Value | Labels`` markdown table.

    ``query`` is the expression that produced the series; it is accepted so
    callers hand over the whole result, the table itself does not print it.
    """
    if not series:
        return NO_RESULTS

    rows = [
        "| Metric | Value | Labels |",
        "|--------|-------|--------|",
    ]
    for item in series:
        rows.append(f"| {item.name or 'value'} | {item.value} | {_labels(item)} |")
    return "\n".join(rows) + "\n"
