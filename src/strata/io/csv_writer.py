"""Writer for hierarchy CSV files, the inverse of :mod:`strata.io.csv_reader`."""

import csv
import logging
from pathlib import Path
from typing import TextIO, Union

from ..core.hierarchy import Hierarchy

logger = logging.getLogger(__name__)


def write_rows(
    hierarchy: Hierarchy,
    f: TextIO,
    delimiter: str = ",",
    with_header: bool = True,
    with_true_class: bool = False,
    with_instance_names: bool = False,
) -> int:
    """
    Write every instance of the hierarchy to an open text stream, one row each.

    Returns:
        Number of instance rows written
    """
    dimensions = hierarchy.stats().dimensions
    rows = 0

    writer = csv.writer(f, delimiter=delimiter)
    if with_header:
        header = ["node_id"]
        if with_true_class:
            header.append("true_class")
        if with_instance_names:
            header.append("instance_name")
        header.extend(f"f{i}" for i in range(dimensions))
        writer.writerow(header)

    for node in hierarchy:
        for instance in node.instances:
            row = [node.id]
            if with_true_class:
                row.append(instance.true_class or "")
            if with_instance_names:
                row.append(instance.name or "")
            row.extend(repr(float(value)) for value in instance.data)
            writer.writerow(row)
            rows += 1

    return rows


def write_csv(
    hierarchy: Hierarchy,
    path: Union[str, Path],
    delimiter: str = ",",
    with_header: bool = True,
    with_true_class: bool = False,
    with_instance_names: bool = False,
) -> int:
    """
    Write every instance of the hierarchy, one row each, in identifier order.

    Artificial nodes hold no instances and therefore produce no rows; reading
    the file back recreates them.

    Args:
        hierarchy: Hierarchy to write
        path: Destination file
        delimiter: Column delimiter
        with_header: Write a header row
        with_true_class: Write the ground-truth class column
        with_instance_names: Write the instance name column

    Returns:
        Number of instance rows written
    """
    path = Path(path)
    with open(path, "w", newline="") as f:
        rows = write_rows(
            hierarchy, f, delimiter, with_header, with_true_class, with_instance_names
        )

    logger.info(f"Wrote {rows} instances to {path}")
    return rows
