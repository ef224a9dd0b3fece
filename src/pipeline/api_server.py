#!/usr/bin/env python3
"""
API Server for Service Insights
Provides REST endpoints for building service insights graphs from Jaeger traces.
"""

from flask import Flask, request, jsonify
import logging
import time
from datetime import datetime

from trace_collection import Config
from service_insights import ServiceInsightsError

from .insights import ServiceInsightsConnector

app = Flask(__name__)

logger = logging.getLogger("api-server")

_connector = None


def get_connector() -> ServiceInsightsConnector:
    """Connector shared by all requests; extraction keeps no state between calls."""
    global _connector
    if _connector is None:
        _connector = ServiceInsightsConnector(Config())
    return _connector


def _parse_millis(name: str, default: int) -> int:
    value = request.args.get(name)
    if value is None or value == '':
        return default
    return int(value)


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': '1.0.0'
    })


@app.route('/api/serviceInsights', methods=['GET'])
def service_insights():
    """
    Build the service insights graph for a service.

    Query parameters:
    - service: Central service (required)
    - from: Range start in epoch milliseconds (default: now - PAST_INTERVAL)
    - to: Range end in epoch milliseconds (default: now)

    Returns:
    - summary, nodes and links of the graph
    """
    service_name = request.args.get('service')
    if not service_name:
        return jsonify({'error': 'Missing required parameter: service'}), 400

    now = int(time.time() * 1000)
    try:
        end_time = _parse_millis('to', now)
        start_time = _parse_millis('from', end_time - Config.PAST_INTERVAL * 1000)
    except ValueError:
        return jsonify({'error': "Parameters 'from' and 'to' must be epoch milliseconds"}), 400

    if start_time > end_time:
        return jsonify({'error': "Parameter 'from' must not be after 'to'"}), 400

    try:
        result = get_connector().get_service_insights_for_service(service_name, start_time, end_time)
        return jsonify(result)

    except ServiceInsightsError as e:
        logger.error(f"Service insights error for {service_name}: {e}")
        return jsonify({'error': str(e)}), 500

    except Exception as e:
        logger.error(f"Unexpected error building service insights for {service_name}: {e}")
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(name)s - %(levelname)s - %(message)s')
    app.run(host='0.0.0.0', port=8000, debug=False)
