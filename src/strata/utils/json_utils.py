"""JSON export for hierarchies, whose instances and centroids hold numpy arrays."""

import json
from pathlib import Path
from typing import Any, Union

import numpy as np

from ..core.hierarchy import Hierarchy


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder for numpy arrays and scalars.

    Arrays become lists and numpy scalars (``np.float32``, ``np.int64``,
    ``np.bool_``...) become the matching Python value.
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return super().default(obj)


def dumps_numpy(obj: Any, **kwargs) -> str:
    """Serialize obj to a JSON string, handling numpy types."""
    return json.dumps(obj, cls=NumpyJSONEncoder, **kwargs)


def dump_numpy(obj: Any, fp, **kwargs) -> None:
    """Serialize obj as JSON to a file object, handling numpy types."""
    json.dump(obj, fp, cls=NumpyJSONEncoder, **kwargs)


def write_json(hierarchy: Hierarchy, path: Union[str, Path], indent: int = 2) -> None:
    """Write the hierarchy as a nested JSON tree.

    Feature vectors of instances and centroids are written as lists.
    """
    with open(path, "w") as f:
        dump_numpy(hierarchy.to_dict(), f, indent=indent)
