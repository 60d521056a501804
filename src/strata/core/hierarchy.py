"""Container for a complete hierarchy and summary statistics over it."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

import xxhash

from .identifiers import DEFAULT_SCHEME, IdentifierScheme, sort_key
from .node import Node

logger = logging.getLogger(__name__)


@dataclass
class HierarchyStats:
    """Summary of the shape and contents of a hierarchy."""

    total_nodes: int = 0
    artificial_nodes: int = 0
    leaf_nodes: int = 0
    depth: int = 0  # Number of levels below the root
    total_instances: int = 0
    dimensions: int = 0  # Feature vector length (0 if there are no instances)
    avg_branching_factor: float = 0.0  # Average number of children per internal node
    level_distribution: Dict[int, int] = field(default_factory=dict)
    class_counts: Dict[str, int] = field(default_factory=dict)

    def is_valid(self) -> bool:
        """Validate values are within expected ranges."""
        if self.total_nodes < 0 or self.depth < 0 or self.total_instances < 0:
            return False
        if not (0 <= self.artificial_nodes <= self.total_nodes):
            return False
        if not (0 <= self.leaf_nodes <= self.total_nodes):
            return False
        if self.avg_branching_factor < 0:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_nodes": self.total_nodes,
            "artificial_nodes": self.artificial_nodes,
            "leaf_nodes": self.leaf_nodes,
            "depth": self.depth,
            "total_instances": self.total_instances,
            "dimensions": self.dimensions,
            "avg_branching_factor": self.avg_branching_factor,
            "level_distribution": {str(k): v for k, v in self.level_distribution.items()},
            "class_counts": dict(self.class_counts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HierarchyStats":
        """Create from dictionary."""
        return cls(
            total_nodes=data.get("total_nodes", 0),
            artificial_nodes=data.get("artificial_nodes", 0),
            leaf_nodes=data.get("leaf_nodes", 0),
            depth=data.get("depth", 0),
            total_instances=data.get("total_instances", 0),
            dimensions=data.get("dimensions", 0),
            avg_branching_factor=data.get("avg_branching_factor", 0.0),
            level_distribution={
                int(k): v for k, v in data.get("level_distribution", {}).items()
            },
            class_counts=dict(data.get("class_counts", {})),
        )


class Hierarchy:
    """
    A complete hierarchy: the root plus every node in identifier order.

    Built by :func:`strata.builder.build_hierarchy`; the node list is the
    owner of every node, the tree links are navigational.
    """

    def __init__(
        self,
        root: Node,
        nodes: Sequence[Node],
        scheme: IdentifierScheme = DEFAULT_SCHEME,
    ):
        self.root = root
        self.scheme = scheme
        self.nodes: List[Node] = sorted(nodes, key=lambda node: sort_key(node.id, scheme))
        self._by_id = {node.id: node for node in self.nodes}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._by_id.get(node_id)

    @property
    def number_of_instances(self) -> int:
        return sum(len(node.instances) for node in self.nodes)

    @property
    def number_of_levels(self) -> int:
        """Levels including the root level."""
        if not self.nodes:
            return 0
        return max(node.level(self.scheme) for node in self.nodes) + 1

    def leaves(self) -> List[Node]:
        return [node for node in self.nodes if node.is_leaf()]

    def artificial_nodes(self) -> List[Node]:
        return [node for node in self.nodes if node.is_artificial]

    def class_counts(self) -> Counter:
        """Number of instances per ground-truth class, where one is known."""
        counts: Counter = Counter()
        for node in self.nodes:
            for instance in node.instances:
                if instance.true_class is not None:
                    counts[instance.true_class] += 1
        return counts

    def validate(self, require_breadth: bool = False) -> List[str]:
        """
        Check the structural invariants of a complete hierarchy.

        Args:
            require_breadth: Also require children indexed 0..k-1

        Returns:
            Human-readable violations; empty when the hierarchy is complete
        """
        problems = []
        seen = set()
        roots = []

        for node in self.nodes:
            if node.id in seen:
                problems.append(f"Duplicate identifier '{node.id}'")
            seen.add(node.id)

            parent = node.parent
            if parent is None:
                roots.append(node)
            else:
                node_segments = self.scheme.segments(node.id)
                if self.scheme.segments(parent.id) != node_segments[:-1] or not node_segments:
                    problems.append(f"'{parent.id}' is not the parent of '{node.id}'")
                if not any(child is node for child in parent.children):
                    problems.append(f"'{node.id}' is missing from the children of '{parent.id}'")

            if require_breadth:
                indices = [self.scheme.segments(child.id)[-1] for child in node.children]
                if indices != list(range(len(node.children))):
                    problems.append(f"Children of '{node.id}' are not indexed 0..k-1: {indices}")

        if len(roots) != 1:
            problems.append(f"Expected exactly one root, found {[n.id for n in roots]}")
        elif roots[0] is not self.root:
            problems.append(f"Parentless node '{roots[0].id}' is not the root")

        return problems

    def structure_hash(self) -> str:
        """Content hash of the identifiers and artificial flags, in order."""
        hasher = xxhash.xxh3_64()
        for node in self.nodes:
            hasher.update(node.id.encode())
            hasher.update(b"*" if node.is_artificial else b"-")
            hasher.update(b"\n")
        return hasher.hexdigest()

    def stats(self) -> HierarchyStats:
        """Compute summary statistics."""
        if not self.nodes:
            return HierarchyStats()

        level_distribution: Counter = Counter()
        internal_nodes = 0
        total_children = 0
        dimensions = 0
        for node in self.nodes:
            level_distribution[node.level(self.scheme)] += 1
            if node.children:
                internal_nodes += 1
                total_children += len(node.children)
            if not dimensions and node.instances:
                dimensions = node.instances[0].dimensions

        return HierarchyStats(
            total_nodes=len(self.nodes),
            artificial_nodes=len(self.artificial_nodes()),
            leaf_nodes=len(self.leaves()),
            depth=self.number_of_levels - 1,
            total_instances=self.number_of_instances,
            dimensions=dimensions,
            avg_branching_factor=total_children / internal_nodes if internal_nodes else 0.0,
            level_distribution=dict(sorted(level_distribution.items())),
            class_counts=dict(sorted(self.class_counts().items())),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Nested tree representation for serialization."""

        def _node_dict(node: Node) -> Dict[str, Any]:
            return {
                "id": node.id,
                "artificial": node.is_artificial,
                "instances": [instance.to_dict() for instance in node.instances],
                "centroid": node.centroid.to_dict() if node.centroid is not None else None,
                "children": [_node_dict(child) for child in node.children],
            }

        return {
            "scheme": self.scheme.to_dict(),
            "stats": self.stats().to_dict(),
            "root": _node_dict(self.root),
        }
