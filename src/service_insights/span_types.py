"""
Span Type Matchers

A span is resolved to a graph node by walking an ordered chain of matchers.
The first matcher whose ``is_type`` predicate accepts the span decides the
node id, display name and kind. The service matcher is the mandatory,
terminal fallback and accepts every span.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .enums import NodeType
from .errors import ConfigurationError

logger = logging.getLogger("span-classifier")

# Matchers are consulted in this order regardless of how they were supplied
KIND_PRIORITY = [
    NodeType.EDGE,
    NodeType.GATEWAY,
    NodeType.MESH,
    NodeType.DATABASE,
    NodeType.OUTBOUND,
    NodeType.SERVICE,
]


def find_tag(span: Dict, key: str) -> Optional[Any]:
    """Return the value of tag ``key`` from a span, or None when absent.

    Tags may be a list of ``{key, value}`` objects (Haystack and Jaeger
    style) or a plain mapping.
    """
    tags = span.get('tags') or []
    if isinstance(tags, dict):
        return tags.get(key)
    for tag in tags:
        if tag.get('key') == key:
            return tag.get('value')
    return None


def _always(span: Dict) -> bool:
    return True


@dataclass(frozen=True)
class SpanTypeMatcher:
    """Pluggable rule mapping spans of one kind to node identities."""
    kind: NodeType
    node_id: Callable[[Dict], str]
    node_name: Callable[[Dict], str]
    is_type: Callable[[Dict], bool] = _always
    database_type: Optional[Callable[[Dict], str]] = None


@dataclass(frozen=True)
class SpanIdentity:
    """Node identity resolved for a single span."""
    node_id: str
    name: str
    kind: NodeType
    database_type: Optional[str] = None


class SpanClassifier:
    """Resolves spans to node identities through an ordered matcher chain."""

    def __init__(self, span_types: List[SpanTypeMatcher]):
        self.span_types = self._validate(span_types)

    @staticmethod
    def _validate(span_types: List[SpanTypeMatcher]) -> List[SpanTypeMatcher]:
        by_kind = {}
        for matcher in span_types:
            if matcher.kind not in KIND_PRIORITY:
                raise ConfigurationError(f"Unsupported span type matcher kind: {matcher.kind.value}")
            if matcher.kind in by_kind:
                raise ConfigurationError(f"Duplicate span type matcher for kind: {matcher.kind.value}")
            by_kind[matcher.kind] = matcher

        if NodeType.SERVICE not in by_kind:
            raise ConfigurationError('Missing required configuration: span type matcher for kind "service"')

        ordered = [by_kind[kind] for kind in KIND_PRIORITY if kind in by_kind]
        logger.debug(f"Span type matchers: {[matcher.kind.value for matcher in ordered]}")
        return ordered

    def match(self, span: Dict) -> SpanTypeMatcher:
        for matcher in self.span_types[:-1]:
            if matcher.is_type(span):
                return matcher
        # Service fallback
        return self.span_types[-1]

    def node_id(self, span: Dict) -> str:
        return self.match(span).node_id(span)

    def classify(self, span: Dict) -> SpanIdentity:
        matcher = self.match(span)
        database_type = None
        if matcher.kind == NodeType.DATABASE and matcher.database_type is not None:
            database_type = matcher.database_type(span)
        return SpanIdentity(
            node_id=matcher.node_id(span),
            name=matcher.node_name(span),
            kind=matcher.kind,
            database_type=database_type
        )


def _split_names(value: str) -> List[str]:
    return [name.strip() for name in value.split(',') if name.strip()]


def build_default_span_types(config=None) -> List[SpanTypeMatcher]:
    """Build the default matcher chain from configuration."""
    if config is None:
        from trace_collection.config import Config
        config = Config()

    edge_services = _split_names(config.EDGE_SERVICE_NAMES)
    gateway_services = _split_names(config.GATEWAY_SERVICE_NAMES)
    mesh_services = _split_names(config.MESH_SERVICE_NAMES)
    database_tag = config.DATABASE_TYPE_TAG
    outbound_kind = config.OUTBOUND_SPAN_KIND

    def database_instance(span: Dict) -> str:
        return find_tag(span, 'db.instance') or span.get('serviceName')

    def is_outbound(span: Dict) -> bool:
        if find_tag(span, 'X-HAYSTACK-IS-MERGED-SPAN') in (True, 'true'):
            return False
        return find_tag(span, 'span.kind') == outbound_kind

    return [
        SpanTypeMatcher(
            kind=NodeType.EDGE,
            is_type=lambda span: span.get('serviceName') in edge_services,
            node_id=lambda span: span.get('serviceName'),
            node_name=lambda span: span.get('serviceName')
        ),
        SpanTypeMatcher(
            kind=NodeType.GATEWAY,
            is_type=lambda span: span.get('serviceName') in gateway_services,
            node_id=lambda span: span.get('serviceName'),
            node_name=lambda span: span.get('serviceName')
        ),
        SpanTypeMatcher(
            kind=NodeType.MESH,
            is_type=lambda span: span.get('serviceName') in mesh_services,
            node_id=lambda span: f"{span.get('serviceName')}-{span.get('operationName')}",
            node_name=lambda span: span.get('operationName')
        ),
        SpanTypeMatcher(
            kind=NodeType.DATABASE,
            is_type=lambda span: find_tag(span, database_tag) is not None,
            node_id=lambda span: f"{find_tag(span, database_tag)}-{database_instance(span)}",
            node_name=database_instance,
            database_type=lambda span: find_tag(span, database_tag)
        ),
        SpanTypeMatcher(
            kind=NodeType.OUTBOUND,
            is_type=is_outbound,
            node_id=lambda span: f"{span.get('serviceName')}-{span.get('operationName')}",
            node_name=lambda span: find_tag(span, 'peer.service') or span.get('operationName')
        ),
        SpanTypeMatcher(
            kind=NodeType.SERVICE,
            node_id=lambda span: span.get('serviceName'),
            node_name=lambda span: span.get('serviceName')
        ),
    ]
