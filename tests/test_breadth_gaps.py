"""Tests for breadth-gap repair."""

import pytest

from strata.builder.breadth_gaps import fix_breadth_gaps, fix_breadth_gaps_in_node
from strata.builder.relations import create_parent_child_relations
from strata.builder.result import AncestryContradictionError
from strata.core.node import Node


def ids(nodes):
    return [node.id for node in nodes]


def linked(node_ids):
    nodes = [Node(node_id) for node_id in node_ids]
    create_parent_child_relations(nodes)
    return nodes


class TestFixBreadthGapsInNode:
    """Test fix_breadth_gaps_in_node."""

    def test_contiguous_children_untouched(self):
        root = linked(["gen", "gen.0", "gen.1", "gen.2"])[0]
        assert fix_breadth_gaps_in_node(root) == []
        assert ids(root.children) == ["gen.0", "gen.1", "gen.2"]

    def test_leading_gap_filled(self):
        root = linked(["gen", "gen.2"])[0]
        created = fix_breadth_gaps_in_node(root)
        assert ids(created) == ["gen.0", "gen.1"]
        assert ids(root.children) == ["gen.0", "gen.1", "gen.2"]
        assert all(node.parent is root for node in created)
        assert all(node.is_artificial for node in created)

    def test_interior_gaps_filled(self):
        root = linked(["gen", "gen.0", "gen.3", "gen.5"])[0]
        created = fix_breadth_gaps_in_node(root)
        assert ids(created) == ["gen.1", "gen.2", "gen.4"]
        assert ids(root.children) == ["gen.0", "gen.1", "gen.2", "gen.3", "gen.4", "gen.5"]

    def test_children_sorted_numerically(self):
        root = Node("gen")
        ten, one, zero = Node("gen.10"), Node("gen.1"), Node("gen.0")
        for child in (ten, one, zero):
            root.add_child(child)
            child.parent = root
        created = fix_breadth_gaps_in_node(root)
        assert len(created) == 8
        assert ids(root.children) == [f"gen.{i}" for i in range(11)]
        assert root.children[10] is ten

    def test_leaf_node_untouched(self):
        leaf = Node("gen.0")
        assert fix_breadth_gaps_in_node(leaf) == []
        assert leaf.children == []

    def test_non_descendant_child_is_fatal(self):
        parent = Node("gen.0")
        stranger = Node("gen.1.0")
        parent.add_child(stranger)
        with pytest.raises(AncestryContradictionError, match="IS NOT an ancestor"):
            fix_breadth_gaps_in_node(parent)

    def test_duplicate_index_is_fatal(self):
        parent = Node("gen.0")
        first = Node("gen.0.0")
        duplicate = Node("gen.0.0")
        parent.set_children([first, duplicate])
        with pytest.raises(AncestryContradictionError):
            fix_breadth_gaps_in_node(parent)


class TestFixBreadthGaps:
    """Test breadth-first repair across the tree."""

    def test_repairs_every_level(self):
        nodes = linked(["gen", "gen.1", "gen.1.2", "gen.1.2.1"])
        root = nodes[0]
        created = fix_breadth_gaps(root)
        assert sorted(ids(created)) == ["gen.0", "gen.1.0", "gen.1.1", "gen.1.2.0"]

        gen_1 = nodes[1]
        assert ids(root.children) == ["gen.0", "gen.1"]
        assert ids(gen_1.children) == ["gen.1.0", "gen.1.1", "gen.1.2"]

    def test_created_nodes_are_leaves(self):
        nodes = linked(["gen", "gen.3"])
        created = fix_breadth_gaps(nodes[0])
        assert all(node.is_leaf() for node in created)

    def test_second_pass_creates_nothing(self):
        nodes = linked(["gen", "gen.2", "gen.2.4"])
        fix_breadth_gaps(nodes[0])
        assert fix_breadth_gaps(nodes[0]) == []

    def test_breadth_first_creation_order(self):
        nodes = linked(["gen", "gen.1", "gen.1.1"])
        created = fix_breadth_gaps(nodes[0])
        assert ids(created) == ["gen.0", "gen.1.0"]
