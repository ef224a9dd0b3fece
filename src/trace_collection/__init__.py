"""
Trace Collection Package

This package provides configuration, span retrieval from Jaeger and
conversion of Jaeger traces into the flat span format used to build
service insights.
"""

from .config import Config
from .jaeger_client import JaegerClient
from .span_converter import convert_trace, convert_traces, load_spans

__all__ = ['Config', 'JaegerClient', 'convert_trace', 'convert_traces', 'load_spans']
