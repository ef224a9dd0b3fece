"""
Service Insights Package

This package builds the dependency graph around one central service from
distributed-tracing spans, flags dependency cycles and uninstrumented
dependencies, and classifies every node by its relationship to the central
service.
"""

from .enums import NodeType, Relationship
from .errors import ConfigurationError, SchemaError, ServiceInsightsError
from .graph_data_extractor import GraphDataExtractor, extract_nodes_and_links
from .span_types import SpanClassifier, SpanTypeMatcher, build_default_span_types

__all__ = [
    'NodeType', 'Relationship',
    'ServiceInsightsError', 'SchemaError', 'ConfigurationError',
    'GraphDataExtractor', 'extract_nodes_and_links',
    'SpanClassifier', 'SpanTypeMatcher', 'build_default_span_types',
]
