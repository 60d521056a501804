"""Core data model: identifiers, instances, nodes and the hierarchy container."""

from .hierarchy import Hierarchy, HierarchyStats
from .identifiers import (
    DEFAULT_SCHEME,
    HIERARCHY_BRANCH_SEPARATOR,
    HIERARCHY_BRANCH_SEPARATOR_REGEX,
    ROOT_ID,
    IdentifierScheme,
    InvalidIdentifierError,
    compare,
    depth_of,
    is_ancestor_of,
    is_parent_of,
    parent_id,
    segments,
    sort_key,
    trailing_segment,
)
from .instance import Centroid, Instance, InstanceDimensionError
from .node import Node

__all__ = [
    "Centroid",
    "DEFAULT_SCHEME",
    "HIERARCHY_BRANCH_SEPARATOR",
    "HIERARCHY_BRANCH_SEPARATOR_REGEX",
    "Hierarchy",
    "HierarchyStats",
    "IdentifierScheme",
    "Instance",
    "InstanceDimensionError",
    "InvalidIdentifierError",
    "Node",
    "ROOT_ID",
    "compare",
    "depth_of",
    "is_ancestor_of",
    "is_parent_of",
    "parent_id",
    "segments",
    "sort_key",
    "trailing_segment",
]
