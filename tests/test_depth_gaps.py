"""Tests for depth-gap repair."""

import pytest

from strata.builder.depth_gaps import (
    find_nearest_ancestor,
    fix_depth_gaps,
    fix_depth_gaps_between,
)
from strata.builder.relations import create_parent_child_relations
from strata.builder.result import NoAncestorError
from strata.core.node import Node


def ids(nodes):
    return [node.id for node in nodes]


class TestFindNearestAncestor:
    """Test find_nearest_ancestor."""

    def setup_method(self):
        self.nodes = [Node("gen"), Node("gen.0"), Node("gen.0.1"), Node("gen.1")]

    def test_deepest_ancestor_wins(self):
        assert find_nearest_ancestor(self.nodes, (0, 1, 5, 2)).id == "gen.0.1"

    def test_root_when_nothing_deeper(self):
        assert find_nearest_ancestor(self.nodes, (2, 0)).id == "gen"

    def test_node_is_not_its_own_ancestor(self):
        assert find_nearest_ancestor(self.nodes, (0, 1)).id == "gen.0"

    def test_min_length_requires_strictly_deeper(self):
        assert find_nearest_ancestor(self.nodes, (0, 1, 5), min_length=2) is None
        assert find_nearest_ancestor(self.nodes, (0, 1, 5), min_length=1).id == "gen.0.1"

    def test_no_candidate(self):
        assert find_nearest_ancestor([Node("gen.3")], (0, 1)) is None


class TestFixDepthGapsBetween:
    """Test fix_depth_gaps_between."""

    def test_creates_intermediate_chain(self):
        root = Node("gen")
        leaf = Node("gen.0.1.2")
        created = fix_depth_gaps_between(root, leaf)

        assert ids(created) == ["gen.0", "gen.0.1"]
        assert all(node.is_artificial for node in created)
        assert created[0].parent is root
        assert created[1].parent is created[0]
        assert leaf.parent is created[1]
        assert root.children == [created[0]]
        assert created[0].children == [created[1]]
        assert created[1].children == [leaf]

    def test_direct_parent_creates_nothing(self):
        parent = Node("gen.0")
        child = Node("gen.0.4")
        assert fix_depth_gaps_between(parent, child) == []
        assert child.parent is parent
        assert parent.children == [child]

    def test_uses_descendant_segments(self):
        ancestor = Node("gen.2")
        leaf = Node("gen.2.7.3.1")
        created = fix_depth_gaps_between(ancestor, leaf)
        assert ids(created) == ["gen.2.7", "gen.2.7.3"]


class TestFixDepthGaps:
    """Test fix_depth_gaps."""

    def _repair(self, node_ids):
        nodes = [Node(node_id) for node_id in node_ids]
        create_parent_child_relations(nodes)
        root = next(node for node in nodes if node.id == "gen")
        created = fix_depth_gaps(root, nodes)
        return nodes, created

    def test_no_gaps(self):
        nodes, created = self._repair(["gen", "gen.0", "gen.0.0"])
        assert created == []

    def test_single_missing_chain(self):
        nodes, created = self._repair(["gen", "gen.0.1.2"])
        assert ids(created) == ["gen.0", "gen.0.1"]
        assert nodes[1].parent is created[1]

    def test_shared_missing_ancestors_created_once(self):
        nodes, created = self._repair(["gen", "gen.0.1.2", "gen.0.1.3", "gen.0.4"])
        assert sorted(ids(created)) == ["gen.0", "gen.0.1"]
        gen_0, gen_0_1 = sorted(created, key=lambda node: node.id)
        assert nodes[1].parent is gen_0_1
        assert nodes[2].parent is gen_0_1
        assert nodes[3].parent is gen_0
        assert ids(gen_0.children) == ["gen.0.1", "gen.0.4"]

    def test_artificial_candidate_must_be_strictly_deeper(self):
        # gen.0 is real; gen.0.1 gets created for the first leaf and must be
        # reused for the second rather than attaching to gen.0
        nodes, created = self._repair(["gen", "gen.0", "gen.0.1.0", "gen.0.1.1"])
        assert ids(created) == ["gen.0.1"]
        assert nodes[2].parent is created[0]
        assert nodes[3].parent is created[0]

    def test_real_ancestor_later_in_list_is_used(self):
        nodes, created = self._repair(["gen", "gen.0.1.2", "gen.0"])
        assert ids(created) == ["gen.0.1"]
        assert created[0].parent is nodes[2]

    def test_every_non_root_gets_parent(self):
        nodes, created = self._repair(["gen", "gen.3.3.3", "gen.1", "gen.1.2.0"])
        for node in nodes + created:
            if node.id != "gen":
                assert node.parent is not None

    def test_unrelated_identifier_is_fatal(self):
        nodes = [Node("gen"), Node("orphan")]
        create_parent_child_relations(nodes)
        with pytest.raises(NoAncestorError, match="orphan"):
            fix_depth_gaps(nodes[0], nodes)

    def test_duplicate_root_identifier_is_fatal(self):
        root = Node("gen")
        nodes = [root, Node("gen")]
        create_parent_child_relations(nodes)
        with pytest.raises(NoAncestorError):
            fix_depth_gaps(root, nodes)
