import pytest

from core.errors import UnknownMetricKey
from core.queries import METRIC_KEYS, PERFORMANCE_METRICS, resolve, uses_window


WINDOWED = ("latency", "throughput", "errors")
INSTANT = ("memory", "gpu", "uptime", "responseTime")


def test_registry_has_the_seven_metric_keys():
    assert set(METRIC_KEYS) == set(WINDOWED + INSTANT)


@pytest.mark.parametrize("metric_key", WINDOWED)
def test_windowed_templates_embed_the_window(metric_key):
    expression = resolve(metric_key, "15m")
    assert "[15m]" in expression
    assert "{w}" not in expression
    assert uses_window(metric_key)


@pytest.mark.parametrize("metric_key", INSTANT)
def test_instant_templates_ignore_the_window(metric_key):
    expression = resolve(metric_key, "15m")
    assert expression
    assert "15m" not in expression
    assert not uses_window(metric_key)


def test_response_time_uses_fixed_five_minute_window():
    assert resolve("responseTime", "24h") == (
        "histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))"
    )


def test_label_matcher_braces_survive_substitution():
    assert resolve("errors", "1h") == 'rate(http_requests_total{status=~"5.."}[1h])'


def test_window_is_substituted_verbatim():
    assert resolve("throughput", "not a duration") == "rate(model_requests_total[not a duration])"


@pytest.mark.parametrize("metric_key", ["bogus", "LATENCY", "", "all"])
def test_unknown_metric_key(metric_key):
    with pytest.raises(UnknownMetricKey):
        resolve(metric_key, "5m")


def test_performance_fan_out_excludes_errors():
    assert PERFORMANCE_METRICS == ("latency", "throughput", "memory", "gpu")
    assert "errors" in METRIC_KEYS
