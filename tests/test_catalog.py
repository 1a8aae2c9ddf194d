import logging

import pytest

from core.catalog import (
    ANALYZE_MODEL_HEALTH,
    GET_MODEL_PERFORMANCE,
    GET_PROMETHEUS_QUERY,
    TOOL_CATALOG,
    get_tool,
    list_tools,
    parse_arguments,
)
from core.errors import MissingRequiredParameter
from core.models import HealthParams, ParameterSpec, PerformanceParams, PrometheusQueryParams


def test_catalog_names():
    assert list(TOOL_CATALOG) == ["get_model_performance", "analyze_model_health", "get_prometheus_query"]
    assert get_tool("nope") is None


def test_performance_schema():
    schema = GET_MODEL_PERFORMANCE.input_schema()
    assert schema["type"] == "object"
    assert schema["properties"]["timeRange"] == {
        "type": "string", "enum": ["5m", "15m", "1h", "24h"], "default": "5m",
    }
    assert schema["properties"]["metric_type"]["enum"] == ["all", "latency", "throughput", "memory", "gpu"]
    assert schema["properties"]["metric_type"]["default"] == "all"
    assert "required" not in schema


def test_health_schema():
    assert ANALYZE_MODEL_HEALTH.input_schema()["properties"] == {
        "includeTraces": {"type": "boolean", "default": False},
    }


def test_prometheus_query_schema():
    schema = GET_PROMETHEUS_QUERY.input_schema()
    assert schema["required"] == ["query"]
    assert schema["properties"]["query"] == {"type": "string", "description": "PromQL query to execute"}
    assert schema["properties"]["timeRange"]["default"] == "1h"


def test_list_tools_shape():
    tools = list_tools()
    assert [t["name"] for t in tools] == list(TOOL_CATALOG)
    assert all({"name", "description", "inputSchema"} == set(t) for t in tools)


def test_parameter_needs_default_or_required():
    with pytest.raises(ValueError):
        ParameterSpec("timeRange", "string")
    with pytest.raises(ValueError):
        ParameterSpec("timeRange", "duration", default="5m")


def test_defaults_applied():
    assert parse_arguments(GET_MODEL_PERFORMANCE, {}) == PerformanceParams(time_range="5m", metric_type="all")
    assert parse_arguments(GET_MODEL_PERFORMANCE, None) == PerformanceParams(time_range="5m", metric_type="all")
    assert parse_arguments(ANALYZE_MODEL_HEALTH, {}) == HealthParams(include_traces=False)


def test_empty_and_none_count_as_omitted():
    params = parse_arguments(GET_MODEL_PERFORMANCE, {"timeRange": "", "metric_type": None})
    assert params == PerformanceParams(time_range="5m", metric_type="all")


def test_explicit_values_win():
    params = parse_arguments(GET_PROMETHEUS_QUERY, {"query": "up", "timeRange": "24h", "extra": 1})
    assert params == PrometheusQueryParams(query="up", time_range="24h")


@pytest.mark.parametrize("arguments", [{}, {"query": ""}, {"query": None}, {"timeRange": "1h"}])
def test_missing_required_query(arguments):
    with pytest.raises(MissingRequiredParameter) as excinfo:
        parse_arguments(GET_PROMETHEUS_QUERY, arguments)
    assert excinfo.value.parameter == "query"
    assert str(excinfo.value) == "Missing required parameter: query"


def test_enum_values_are_not_enforced(caplog):
    with caplog.at_level(logging.WARNING, logger="core.catalog"):
        params = parse_arguments(GET_MODEL_PERFORMANCE, {"timeRange": "2h", "metric_type": "uptime"})
    assert params == PerformanceParams(time_range="2h", metric_type="uptime")
    assert "timeRange='2h'" in caplog.text
    assert "metric_type='uptime'" in caplog.text
