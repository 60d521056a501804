"""Hierarchy node model."""

import logging
import weakref
from typing import Iterable, List, Optional

from .identifiers import DEFAULT_SCHEME, IdentifierScheme
from .instance import Centroid, Instance

logger = logging.getLogger(__name__)


class Node:
    """
    A node of the hierarchy, identified by a path-style identifier.

    The parent link is a weak back-reference: the node collection that the
    hierarchy builder works on owns every node, and ``parent`` is only
    navigational. ``children`` is an ordinary ordered list.
    """

    __slots__ = (
        "_id",
        "_parent_ref",
        "children",
        "instances",
        "centroid",
        "is_artificial",
        "__weakref__",
    )

    def __init__(
        self,
        node_id: str,
        parent: Optional["Node"] = None,
        use_subtree: bool = False,
        instances: Optional[Iterable[Instance]] = None,
        is_artificial: bool = False,
    ):
        """
        Initialize a Node.

        Args:
            node_id: Path-style identifier, e.g. ``gen.0.1``
            parent: Optional parent node (not registered as its child)
            use_subtree: Whether the initial centroid includes descendant instances
            instances: Data instances belonging to this node
            is_artificial: Whether the node was synthesized to close a gap
        """
        self._id = node_id
        self._parent_ref = None
        self.children: List["Node"] = []
        self.instances: List[Instance] = list(instances) if instances else []
        self.centroid: Optional[Centroid] = None
        self.is_artificial = is_artificial
        self.parent = parent
        self.recalculate_centroid(use_subtree)

    @classmethod
    def artificial(
        cls, node_id: str, parent: Optional["Node"] = None, use_subtree: bool = False
    ) -> "Node":
        """Create an empty placeholder node."""
        return cls(node_id, parent, use_subtree, is_artificial=True)

    @property
    def id(self) -> str:
        return self._id

    @property
    def parent(self) -> Optional["Node"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: Optional["Node"]) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    def add_child(self, child: "Node") -> None:
        self.children.append(child)

    def set_children(self, children: Iterable["Node"]) -> None:
        self.children = list(children)

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def level(self, scheme: IdentifierScheme = DEFAULT_SCHEME) -> int:
        """Depth implied by the identifier (root is level 0)."""
        return len(scheme.segments(self._id))

    def get_descendants(self) -> List["Node"]:
        """Get all descendant nodes, depth first."""
        descendants = []
        for child in self.children:
            descendants.append(child)
            descendants.extend(child.get_descendants())
        return descendants

    def get_ancestors(self) -> List["Node"]:
        """Get all ancestor nodes up to the root, nearest first."""
        ancestors = []
        current = self.parent
        while current is not None:
            ancestors.append(current)
            current = current.parent
        return ancestors

    def get_subtree_instances(self) -> List[Instance]:
        """Instances of this node followed by those of all its descendants."""
        result = list(self.instances)
        for descendant in self.get_descendants():
            result.extend(descendant.instances)
        return result

    def recalculate_centroid(self, use_subtree: bool) -> None:
        """
        Recompute the centroid from the instances in scope.

        Args:
            use_subtree: Also include the instances of all descendants
        """
        instances = self.get_subtree_instances() if use_subtree else self.instances
        if not instances:
            self.centroid = None
            return
        self.centroid = Centroid.from_instances(instances, self._id)

    def __repr__(self) -> str:
        marker = ", artificial" if self.is_artificial else ""
        return f"Node({self._id!r}, children={len(self.children)}{marker})"
