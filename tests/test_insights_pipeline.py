"""
Connector and pipeline tests with span retrieval mocked out.
"""

import json

import pytest

from pipeline.insights import ServiceInsightsConnector, ServiceInsightsPipeline
from trace_collection import Config


class FakeJaegerClient:
    def __init__(self, traces):
        self.traces = traces
        self.calls = []

    def fetch_traces(self, start_time, end_time, service_name=None, limit=None):
        self.calls.append((start_time, end_time, service_name, limit))
        return self.traces


class SmallLimitConfig(Config):
    TRACE_LIMIT = 1


class TestServiceInsightsConnector:
    def test_get_service_insights_for_service(self, jaeger_trace):
        client = FakeJaegerClient([jaeger_trace])
        connector = ServiceInsightsConnector(Config(), client=client)

        result = connector.get_service_insights_for_service('inventory', 1000, 2000)

        assert client.calls == [(1000000, 2000000, 'inventory', Config.TRACE_LIMIT)]
        assert [node['id'] for node in result['nodes']] == ['frontend', 'inventory']
        assert result['nodes'][1]['relationship'] == 'central'
        assert result['nodes'][0]['relationship'] == 'upstream'
        assert result['summary']['tracesConsidered'] == 1
        assert result['summary']['traceLimitReached'] is False

    def test_trace_limit_reached(self, jaeger_trace):
        connector = ServiceInsightsConnector(SmallLimitConfig(), client=FakeJaegerClient([jaeger_trace]))

        result = connector.get_service_insights_for_service('inventory', 1000, 2000)
        assert result['summary']['traceLimitReached'] is True

    def test_no_traces(self):
        connector = ServiceInsightsConnector(Config(), client=FakeJaegerClient([]))

        result = connector.get_service_insights_for_service('inventory', 1000, 2000)
        assert result['nodes'] == []
        assert result['summary']['tracesConsidered'] == 0


class TestServiceInsightsPipeline:
    def test_analyze_from_file(self, tmp_path, jaeger_trace):
        spans_file = tmp_path / 'traces.json'
        spans_file.write_text(json.dumps({'data': [jaeger_trace]}))

        result = ServiceInsightsPipeline().analyze_from_file(str(spans_file), 'frontend')

        assert result['nodes'][0]['relationship'] == 'central'
        assert result['nodes'][1]['relationship'] == 'downstream'
        assert result['links'][0]['source'] == 'frontend'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ServiceInsightsPipeline().analyze_from_file(str(tmp_path / 'missing.json'), 'frontend')

    def test_save_result(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Config, 'OUTPUT_DIR', str(tmp_path / 'out'))
        result = {'summary': {}, 'nodes': [], 'links': []}

        path = ServiceInsightsPipeline().save_result(result, 'frontend', 'graph')

        assert path == str(tmp_path / 'out' / 'graph.json')
        with open(path) as f:
            assert json.load(f) == result
