"""Reader for generated hierarchy CSV files.

Each row describes one instance::

    node_id[,true_class][,instance_name],feature_0,feature_1,...

Rows sharing a ``node_id`` become one node. Nodes the file does not mention
are filled in by the hierarchy builder.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from ..builder import build_hierarchy
from ..core.hierarchy import Hierarchy
from ..core.identifiers import DEFAULT_SCHEME, IdentifierScheme, InvalidIdentifierError
from ..core.instance import Instance
from ..core.node import Node

logger = logging.getLogger(__name__)


class HierarchyFormatError(ValueError):
    """Raised when a hierarchy CSV file cannot be parsed."""

    def __init__(self, message: str, path: Optional[Path] = None, line: Optional[int] = None):
        location = ""
        if path is not None:
            location = f"{path}:{line}: " if line is not None else f"{path}: "
        super().__init__(f"{location}{message}")
        self.path = path
        self.line = line


def read_nodes(
    path: Union[str, Path],
    delimiter: str = ",",
    with_header: bool = True,
    with_true_class: bool = False,
    with_instance_names: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> Tuple[Optional[Node], List[Node]]:
    """
    Read the real nodes listed in a hierarchy CSV file.

    Args:
        path: CSV file to read
        delimiter: Column delimiter
        with_header: Skip the first row
        with_true_class: Second column holds the ground-truth class
        with_instance_names: Next column holds the instance name

    Returns:
        The root node (None if the file has no root row) and all nodes in
        order of first appearance

    Raises:
        HierarchyFormatError: If a row is malformed
    """
    path = Path(path)
    feature_start = 1 + int(with_true_class) + int(with_instance_names)
    instances_by_node: Dict[str, List[Instance]] = {}
    dimensions: Optional[int] = None

    with open(path, newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)
        for row in reader:
            line = reader.line_num
            if with_header and line == 1:
                continue
            if not row or all(not cell.strip() for cell in row):
                continue

            if len(row) <= feature_start:
                raise HierarchyFormatError(
                    f"expected at least {feature_start + 1} columns, got {len(row)}", path, line
                )

            node_id = row[0].strip()
            try:
                scheme.segments(node_id)
            except InvalidIdentifierError as e:
                raise HierarchyFormatError(str(e), path, line) from e

            column = 1
            true_class = None
            if with_true_class:
                true_class = row[column].strip() or None
                column += 1
            name = None
            if with_instance_names:
                name = row[column].strip() or None

            try:
                data = np.asarray([float(cell) for cell in row[feature_start:]], dtype=np.float64)
            except ValueError as e:
                raise HierarchyFormatError(f"non-numeric feature value: {e}", path, line) from e

            if dimensions is None:
                dimensions = len(data)
            elif len(data) != dimensions:
                raise HierarchyFormatError(
                    f"expected {dimensions} features, got {len(data)}", path, line
                )

            instances_by_node.setdefault(node_id, []).append(
                Instance(data=data, node_id=node_id, true_class=true_class, name=name)
            )

    nodes = [
        Node(node_id, instances=instances) for node_id, instances in instances_by_node.items()
    ]
    root = next((node for node in nodes if node.id == scheme.root_id), None)

    logger.info(
        f"Read {sum(len(i) for i in instances_by_node.values())} instances "
        f"in {len(nodes)} nodes from {path}"
    )
    return root, nodes


def read_csv(
    path: Union[str, Path],
    delimiter: str = ",",
    with_header: bool = True,
    with_true_class: bool = False,
    with_instance_names: bool = False,
    fix_breadth_gaps: bool = False,
    use_subtree: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> Hierarchy:
    """
    Read a hierarchy CSV file and build the complete hierarchy from it.

    Raises:
        HierarchyFormatError: If a row is malformed
        HierarchyBuildError: If the identifiers cannot form a single tree
    """
    root, nodes = read_nodes(
        path, delimiter, with_header, with_true_class, with_instance_names, scheme
    )
    return build_hierarchy(root, nodes, fix_breadth_gaps, use_subtree, scheme)
