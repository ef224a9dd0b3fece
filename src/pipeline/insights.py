#!/usr/bin/env python3
"""
Service Insights Pipeline - Fetches spans and builds service insights graphs
"""

import os
import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from trace_collection import Config, JaegerClient, convert_traces, load_spans
from service_insights import GraphDataExtractor, build_default_span_types

logger = logging.getLogger("service_insights_pipeline")


class ServiceInsightsConnector:
    """Fetches spans for a service and time range and extracts its graph"""

    def __init__(self, config: Optional[Config] = None, client: Optional[JaegerClient] = None,
                 extractor: Optional[GraphDataExtractor] = None):
        self.config = config or Config()
        self.client = client or JaegerClient(self.config)
        self.extractor = extractor or GraphDataExtractor(build_default_span_types(self.config))

    def get_service_insights_for_service(self, service_name: str, start_time: int, end_time: int) -> dict:
        """
        Build the service insights graph for a service.

        Args:
            service_name: Central service
            start_time: Range start, epoch milliseconds
            end_time: Range end, epoch milliseconds

        Returns:
            dict with summary, nodes and links
        """
        limit = self.config.TRACE_LIMIT
        traces = self.client.fetch_traces(start_time * 1000, end_time * 1000, service_name, limit)
        spans = convert_traces(traces)
        trace_limit_reached = len(traces) >= limit

        if trace_limit_reached:
            logger.warning(f"Trace limit of {limit} reached for {service_name}; results may be incomplete")

        return self.extractor.extract(spans, service_name, trace_limit_reached)


class ServiceInsightsPipeline:
    """Handles service insights extraction from files or Jaeger"""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.extractor = GraphDataExtractor(build_default_span_types(self.config))

    def analyze_from_file(self, spans_file: str, service_name: str) -> dict:
        """Extract service insights from a span or trace file"""
        logger.info(f"Service insights - Central service: {service_name}")
        logger.info(f"Spans file: {spans_file}")

        if not os.path.exists(spans_file):
            raise FileNotFoundError(f"Span file not found: {spans_file}")

        with open(spans_file, 'r') as f:
            data = json.load(f)

        spans, trace_count = load_spans(data)
        logger.info(f"Loaded {len(spans)} spans from {trace_count} traces")

        return self.extractor.extract(spans, service_name)

    def analyze_from_jaeger(self, service_name: str, past_interval: Optional[int] = None) -> dict:
        """Extract service insights from traces collected over the past interval (seconds)"""
        past_interval = past_interval or self.config.PAST_INTERVAL
        end_time = int(time.time() * 1000)
        start_time = end_time - past_interval * 1000

        logger.info(f"Collecting traces from {datetime.fromtimestamp(start_time / 1000)} "
                    f"to {datetime.fromtimestamp(end_time / 1000)}")

        connector = ServiceInsightsConnector(self.config, extractor=self.extractor)
        return connector.get_service_insights_for_service(service_name, start_time, end_time)

    def save_result(self, result: dict, service_name: str, output_name: Optional[str] = None) -> str:
        """Save the extraction result as JSON and return its path"""
        output_dir = Path(self.config.OUTPUT_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)

        if output_name is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_name = f"service_insights_{service_name}_{timestamp}"

        result_file = output_dir / f"{output_name}.json"
        with open(result_file, 'w') as f:
            json.dump(result, f, indent=2)

        logger.info(f"Service insights saved: {result_file}")
        return str(result_file)
