"""
Serialization of lookup tables.

Two formats:

- JSON: every table with every field, for inspection and for comparing
  runs. Keys are sorted so equal tables give byte-identical files.
- npz: the ``lookup`` column of each correlator table as an int array,
  which is what the contraction code iterates over.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Union

import numpy as np

from .table import LookupTable, LookupTables


def table_to_list(table: LookupTable) -> list:
    """Entries of a table as plain dicts, in id order."""
    return [asdict(entry) for entry in table]


def lookup_tables_to_dict(tables: LookupTables) -> dict:
    """
    Nested dict of all tables, grouped as operator / quarkline / correlator.

    Tuples become lists once written as JSON.
    """
    result = {}
    for group_name in ("operator", "quarkline", "correlator"):
        group = getattr(tables, group_name)
        result[group_name] = {
            name: table_to_list(value)
            for name, value in vars(group).items()
            if isinstance(value, LookupTable)
        }
    result["operator"]["index_of_unity"] = tables.operator.index_of_unity
    return result


def dump_lookup_tables(tables: LookupTables, output_path: Union[str, Path]) -> Path:
    """
    Write all tables as JSON.

    Returns
    -------
    Path
        The output_path (for chaining).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(lookup_tables_to_dict(tables), f, indent=1, sort_keys=True)
    return output_path


def correlator_index_array(table: LookupTable) -> np.ndarray:
    """
    ``lookup`` columns of a correlator table as an (entries, width) array.

    All entries of one diagram table have the same width. An empty table
    gives shape (0, 0).

    Raises
    ------
    ValueError
        If the entries have different widths.
    """
    rows = [entry.lookup for entry in table]
    if not rows:
        return np.zeros((0, 0), dtype=np.int64)
    widths = {len(r) for r in rows}
    if len(widths) != 1:
        raise ValueError(f"Table {table.name} has lookups of widths {sorted(widths)}")
    return np.array(rows, dtype=np.int64)


def save_index_arrays(tables: LookupTables, output_path: Union[str, Path]) -> Path:
    """Save the index array of every non-empty correlator table to one npz."""
    output_path = Path(output_path)
    if output_path.suffix != ".npz":
        output_path = output_path.with_name(output_path.name + ".npz")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    arrays = {
        name: correlator_index_array(value)
        for name, value in vars(tables.correlator).items()
        if isinstance(value, LookupTable) and len(value)
    }
    np.savez_compressed(
        output_path,
        index_of_unity=np.int64(tables.operator.index_of_unity),
        **arrays,
    )
    return output_path


def load_index_arrays(path: Union[str, Path]) -> Dict[str, np.ndarray]:
    """
    Load arrays written by ``save_index_arrays``.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Index file not found: {path}")
    with np.load(path) as data:
        return {name: data[name].copy() for name in data.files}
