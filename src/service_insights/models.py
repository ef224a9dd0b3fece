"""
Graph Data Model

Nodes and links of a service insights graph. Both are created through
``create_node``/``create_link`` so that missing identity fields surface as a
SchemaError at construction time instead of as a broken graph later.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .enums import NodeType, Relationship
from .errors import SchemaError


def format_avg_duration(duration: float, count: int) -> str:
    """Average span duration in whole milliseconds (durations are microseconds)."""
    return f"{math.floor(duration / count / 1000)} ms"


@dataclass
class Node:
    """One aggregated graph vertex."""
    id: str
    name: str
    service_name: Optional[str] = None
    kind: NodeType = NodeType.SERVICE
    database_type: Optional[str] = None
    count: int = 1
    operations: Dict[str, int] = field(default_factory=dict)
    duration: float = 0
    avg_duration: Optional[str] = None
    trace_ids: List[str] = field(default_factory=list)
    relationship: Optional[Relationship] = None
    invalid_cycle_detected: bool = False
    invalid_cycle_path: Optional[List[str]] = None

    def to_dict(self) -> Dict:
        data = {
            'id': self.id,
            'name': self.name,
            'serviceName': self.service_name,
            'kind': self.kind.value,
            'count': self.count,
            'operations': dict(self.operations),
            'duration': self.duration,
            'avgDuration': self.avg_duration,
            'traceIds': list(self.trace_ids),
            'relationship': self.relationship.value if self.relationship else None,
            'invalidCycleDetected': self.invalid_cycle_detected,
        }
        if self.database_type is not None:
            data['databaseType'] = self.database_type
        if self.invalid_cycle_path is not None:
            data['invalidCyclePath'] = list(self.invalid_cycle_path)
        return data


@dataclass
class Link:
    """One aggregated directed edge between two nodes."""
    source: str
    target: str
    count: int = 1
    tps: int = 1  # occurrence counter, incremented alongside count
    is_uninstrumented: bool = False
    invalid_cycle_detected: bool = False
    invalid_cycle_path: Optional[List[str]] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def to_dict(self) -> Dict:
        data = {
            'source': self.source,
            'target': self.target,
            'count': self.count,
            'tps': self.tps,
            'isUninstrumented': self.is_uninstrumented,
        }
        if self.invalid_cycle_detected:
            data['invalidCycleDetected'] = True
            data['invalidCyclePath'] = list(self.invalid_cycle_path or [])
        return data


def _require(data: Dict, properties, factory: str) -> None:
    for required_property in properties:
        if data.get(required_property) is None:
            raise SchemaError(required_property, factory)


def create_node(**data) -> Node:
    """Create a node, enforcing that ``id`` and ``name`` are present."""
    _require(data, ('id', 'name'), 'create_node')
    return Node(**data)


def create_link(**data) -> Link:
    """Create a link, enforcing that ``source`` and ``target`` are present."""
    _require(data, ('source', 'target'), 'create_link')
    return Link(**data)
