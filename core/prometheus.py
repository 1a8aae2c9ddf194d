# =============================================================================
# core/prometheus.py  —  Prometheus Instant-Query Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE PromQL expression to  GET <prometheus>/api/v1/query  and turns
#   the JSON reply into a QueryResult.
#
# FAILURE CONTRACT:
#   execute() never raises for backend trouble.  Connection errors,
#   timeouts, non-2xx answers, PromQL errors and malformed JSON all come
#   back as QueryResult.failed(message).  The performance tool fans out over
#   several metrics and each one succeeds or fails on its own.
#
#   There is no retry.  The timeout comes from MetricsConfig.
#
# EXPECTED BODY:
#   {"status": "success",
#    "data": {"resultType": "vector",
#             "result": [{"metric": {...labels}, "value": [1700000000, "1"]}]}}
# =============================================================================

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from core.config import MetricsConfig
from core.errors import (
    BackendMalformedResponse,
    BackendQueryError,
    BackendUnreachable,
    MetricsServerError,
)
from core.models import QueryResult, Series


logger = logging.getLogger(__name__)


class PrometheusClient:
    """Thin synchronous client for the Prometheus HTTP API."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: MetricsConfig) -> "PrometheusClient":
        return cls(config.prometheus_url, timeout=config.query_timeout)

    def query_url(self, expression: str) -> str:
        return f"{self.base_url}/api/v1/query?" + urllib.parse.urlencode({"query": expression})

    def execute(self, expression: str, metric_key: Optional[str] = None) -> QueryResult:
        """Run ``expression`` and return its series or an error marker."""
        try:
            payload = self._fetch(expression)
            series = parse_series(payload)
        except MetricsServerError as e:
            logger.warning("Prometheus query %r failed: %s", expression, e)
            return QueryResult.failed(str(e), metric_key=metric_key)
        return QueryResult.ok(series, metric_key=metric_key)

    def _fetch(self, expression: str) -> Any:
        url = self.query_url(expression)
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            raise _http_error(e)
        except urllib.error.URLError as e:
            raise BackendUnreachable(f"Cannot reach Prometheus at {self.base_url}: {e.reason}")
        except OSError as e:
            # socket.timeout and friends raised while reading the body
            raise BackendUnreachable(f"Cannot reach Prometheus at {self.base_url}: {e}")

        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise BackendMalformedResponse(f"Prometheus returned invalid JSON: {e}")


def _http_error(error: urllib.error.HTTPError) -> MetricsServerError:
    """Prefer Prometheus's own error text (400/422 on bad PromQL)."""
    try:
        detail = json.loads(error.read().decode("utf-8"))
    except (ValueError, OSError, AttributeError):
        detail = None
    if isinstance(detail, dict) and detail.get("status") == "error":
        return _query_error(detail)
    return BackendUnreachable(f"Request failed with status code {error.code}")


def _query_error(payload: dict) -> BackendQueryError:
    error_type = payload.get("errorType")
    message = payload.get("error") or "unknown error"
    if error_type:
        return BackendQueryError(f"{error_type}: {message}")
    return BackendQueryError(message)


def parse_series(payload: Any) -> list[Series]:
    """Extract the instant-vector series from a decoded /api/v1/query body.

    Raises:
        BackendQueryError: the body reports ``status: "error"``.
        BackendMalformedResponse: the body does not have the expected shape.
    """
    if not isinstance(payload, dict):
        raise BackendMalformedResponse("Prometheus response is not a JSON object")
    if payload.get("status") == "error":
        raise _query_error(payload)

    data = payload.get("data")
    if not isinstance(data, dict) or not isinstance(data.get("result"), list):
        raise BackendMalformedResponse("Prometheus response has no data.result list")

    series = []
    for item in data["result"]:
        if not isinstance(item, dict):
            raise BackendMalformedResponse("Prometheus result entry is not an object")
        labels = item.get("metric") or {}
        value = item.get("value")
        if not isinstance(labels, dict) or not isinstance(value, list) or len(value) != 2:
            raise BackendMalformedResponse("Prometheus result entry lacks metric/value")
        try:
            timestamp = float(value[0])
        except (TypeError, ValueError):
            raise BackendMalformedResponse(f"Bad sample timestamp: {value[0]!r}")
        series.append(Series(
            labels={str(k): str(v) for k, v in labels.items()},
            timestamp=timestamp,
            value=str(value[1]),
        ))
    return series
