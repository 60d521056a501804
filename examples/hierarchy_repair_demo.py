#!/usr/bin/env python3
"""
Demonstration of rebuilding a complete hierarchy from sparse clustering output.

This example shows how to:
- Build nodes from instances carrying dot-path identifiers
- Fill depth gaps (missing ancestors) and breadth gaps (missing siblings)
- Inspect the repaired tree and its statistics
- Handle identifiers that cannot be placed in the tree
"""

import numpy as np

from strata import (
    FailureKind,
    Instance,
    Node,
    build_complete_hierarchy,
    build_hierarchy,
)


def create_sparse_nodes():
    """Nodes as a hierarchical clusterer might emit them, with gaps."""
    rng = np.random.default_rng(7)
    ids = ["gen.0.1.2", "gen.0.3", "gen.2", "gen.2.0"]
    nodes = []
    for node_id in ids:
        instances = [
            Instance(data=rng.normal(size=3), node_id=node_id, true_class=node_id)
            for _ in range(4)
        ]
        nodes.append(Node(node_id, instances=instances))
    return nodes


def print_tree(node, depth=0):
    marker = " *" if node.is_artificial else ""
    centroid = "-" if node.centroid is None else np.round(node.centroid.data, 2)
    print(f"{'  ' * depth}{node.id}{marker}  centroid={centroid}")
    for child in node.children:
        print_tree(child, depth + 1)


def main():
    print("=== Depth repair only ===")
    hierarchy = build_hierarchy(None, create_sparse_nodes())
    print_tree(hierarchy.root)

    print("\n=== Depth and breadth repair, subtree centroids ===")
    hierarchy = build_hierarchy(
        None, create_sparse_nodes(), fix_breadth_gaps=True, use_subtree=True
    )
    print_tree(hierarchy.root)

    stats = hierarchy.stats()
    print(f"\nNodes: {stats.total_nodes} ({stats.artificial_nodes} artificial)")
    print(f"Depth: {stats.depth}, branching factor {stats.avg_branching_factor:.2f}")
    print(f"Structure hash: {hierarchy.structure_hash()}")
    print(f"Problems: {hierarchy.validate(require_breadth=True) or 'none'}")

    print("\n=== Unplaceable identifier ===")
    nodes = create_sparse_nodes() + [Node("orphan")]
    result = build_complete_hierarchy(None, nodes)
    if result.failure is not None:
        assert result.failure.kind == FailureKind.NO_ANCESTOR
        print(f"Build failed ({result.failure.kind.value}): {result.failure.message}")


if __name__ == "__main__":
    main()
