import pytest

from core.models import QueryResult, Series


class FakePrometheusClient:
    """Stands in for PrometheusClient; answers from a canned table.

    ``results`` maps a metric key or a raw expression to a QueryResult.
    Anything not in the table answers with an empty result.
    """

    def __init__(self, results=None, raises=None):
        self.results = results or {}
        self.raises = raises
        self.calls = []

    def execute(self, expression, metric_key=None):
        self.calls.append((expression, metric_key))
        if self.raises is not None:
            raise self.raises
        result = self.results.get(metric_key) or self.results.get(expression)
        if result is None:
            return QueryResult.ok([], metric_key=metric_key)
        return result

    @property
    def expressions(self):
        return [expression for expression, _ in self.calls]


def sample(value, **labels):
    return Series(labels=labels, timestamp=1700000000.0, value=value)


@pytest.fixture
def fake_client():
    return FakePrometheusClient()
