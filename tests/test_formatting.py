import pytest

from core.formatting import NO_RESULTS, format_metric_value, summarize, tabulate
from core.models import QueryResult

from tests.conftest import sample


@pytest.mark.parametrize("metric_key, raw, expected", [
    ("latency", "0.523", "523.00ms"),
    ("throughput", "12.3456", "12.35 req/s"),
    ("memory", "2097152", "2.00 MB"),
    ("gpu", "87.26", "87.3%"),
    ("uptime", "1", "1"),
    ("errors", "0.0421", "0.0421"),
    ("latency", "abc", "abc"),
])
def test_format_metric_value(metric_key, raw, expected):
    assert format_metric_value(metric_key, raw) == expected


def test_summarize_empty_is_header_only():
    text = summarize({}, "5m")
    assert text.splitlines() == ["### Performance Overview (5m)", ""]


def test_summarize_error_marker_is_labelled():
    text = summarize({"latency": QueryResult.failed("x")}, "5m")
    assert "- **LATENCY**: Error: x" in text


def test_summarize_omits_metrics_without_series():
    results = {
        "latency": QueryResult.ok([]),
        "gpu": QueryResult.ok([sample("42")]),
    }
    text = summarize(results, "1h")
    assert "LATENCY" not in text
    assert "- **GPU**: 42.0%" in text


def test_summarize_uses_first_series_only():
    results = {"throughput": QueryResult.ok([sample("1"), sample("99")])}
    assert "- **THROUGHPUT**: 1.00 req/s" in summarize(results, "5m")


def test_summarize_order_does_not_depend_on_arrival():
    forward = {
        "latency": QueryResult.ok([sample("0.1")]),
        "throughput": QueryResult.ok([sample("2")]),
        "memory": QueryResult.failed("down"),
        "gpu": QueryResult.ok([sample("50")]),
    }
    backward = dict(reversed(list(forward.items())))
    text = summarize(backward, "5m")
    assert text == summarize(forward, "5m")
    labels = [line.split("**")[1] for line in text.splitlines() if line.startswith("- ")]
    assert labels == ["LATENCY", "THROUGHPUT", "MEMORY", "GPU"]


def test_tabulate_empty_is_sentinel():
    assert tabulate([], "up") == NO_RESULTS


def test_tabulate_keeps_raw_values():
    text = tabulate([sample("0.523", __name__="latency_seconds")], "latency_seconds")
    assert "| latency_seconds | 0.523 |" in text
    assert "ms" not in text


def test_tabulate_rows_and_labels():
    series = [
        sample("1", __name__="up", instance="model-runner:12434", job="model"),
        sample("0", job="prometheus"),
    ]
    lines = tabulate(series, "up").splitlines()
    assert lines[0] == "| Metric | Value | Labels |"
    assert lines[1] == "|--------|-------|--------|"
    assert lines[2] == "| up | 1 | instance=model-runner:12434, job=model |"
    assert lines[3] == "| value | 0 | job=prometheus |"
    assert len(lines) == 4
