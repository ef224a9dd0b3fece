"""
Node kinds and relationship labels used across the service insights graph.
"""

from enum import Enum


class NodeType(str, Enum):
    """Kind of component a node represents."""
    EDGE = 'edge'
    GATEWAY = 'gateway'
    MESH = 'mesh'
    DATABASE = 'database'
    OUTBOUND = 'outbound'
    SERVICE = 'service'
    UNINSTRUMENTED = 'uninstrumented'


class Relationship(str, Enum):
    """Directional role of a node relative to the central service."""
    CENTRAL = 'central'
    UPSTREAM = 'upstream'
    DOWNSTREAM = 'downstream'
    DISTRIBUTARY = 'distributary'
    UNKNOWN = 'unknown'
