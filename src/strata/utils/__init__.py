"""Utility functions for strata"""

from strata.utils.json_utils import NumpyJSONEncoder, dump_numpy, dumps_numpy, write_json

__all__ = [
    "NumpyJSONEncoder",
    "dumps_numpy",
    "dump_numpy",
    "write_json",
]
