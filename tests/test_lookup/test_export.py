"""
Unit tests for JSON and npz export of lookup tables.
"""

import json

import numpy as np
import pytest

from slaph_lookup.infile.descriptors import (
    GlobalData,
    Quark,
    make_correlator,
    make_operator_list,
)
from slaph_lookup.lookup.builder import init_lookup_tables
from slaph_lookup.lookup.export import (
    correlator_index_array,
    dump_lookup_tables,
    load_index_arrays,
    lookup_tables_to_dict,
    save_index_arrays,
)
from slaph_lookup.lookup.table import CorrInfo, LookupTable, LookupTables


def _tables():
    data = GlobalData(
        quarks=[Quark("u", 2, "TB", 2, "EI", 6, "DF", 4, "/data")],
        operator_list=[make_operator_list("g5.d0.p(0,0,1)"),
                       make_operator_list("g5.d0.p(0,0,-1)")],
        correlator_list=[make_correlator("C2+:Q0:Op0:Q0:Op1")],
    )
    return init_lookup_tables(data)


def _corr_table(*lookups):
    table = LookupTable("C30", lambda e: e.hdf5_dataset_name)
    for n, lookup in enumerate(lookups):
        table.add(lambda i: CorrInfo(i, "", "", f"d{n}", lookup, ()))
    return table


class TestJson:
    """Tests for the JSON dump."""

    def test_groups(self):
        result = lookup_tables_to_dict(_tables())
        assert set(result) == {"operator", "quarkline", "correlator"}
        assert result["operator"]["index_of_unity"] == -1
        assert len(result["correlator"]) == 16
        assert result["correlator"]["C2c"][0]["lookup"] == (0,)

    def test_dump(self, tmp_path):
        path = dump_lookup_tables(_tables(), tmp_path / "out" / "tables.json")
        assert path.exists()
        with open(path) as f:
            loaded = json.load(f)
        assert loaded["operator"]["ricQ2_lookup"][0]["rnd_vec_ids"] == [[0, 1], [1, 0]]
        assert loaded["quarkline"]["Q2V"][0]["gamma"] == [5]
        assert loaded["correlator"]["C20"] == []

    def test_identical_runs_identical_files(self, tmp_path):
        a = dump_lookup_tables(_tables(), tmp_path / "a.json")
        b = dump_lookup_tables(_tables(), tmp_path / "b.json")
        assert a.read_bytes() == b.read_bytes()


class TestIndexArrays:
    """Tests for the npz index arrays."""

    def test_array(self):
        arr = correlator_index_array(_corr_table((0, 1, 2), (0, 1, 3)))
        assert arr.dtype == np.int64
        np.testing.assert_array_equal(arr, [[0, 1, 2], [0, 1, 3]])

    def test_empty(self):
        assert correlator_index_array(_corr_table()).shape == (0, 0)

    def test_mixed_widths(self):
        with pytest.raises(ValueError, match="C30"):
            correlator_index_array(_corr_table((0,), (0, 1)))

    def test_save_and_load(self, tmp_path):
        path = save_index_arrays(_tables(), tmp_path / "index")
        assert path.name == "index.npz"

        arrays = load_index_arrays(path)
        assert int(arrays["index_of_unity"]) == -1
        np.testing.assert_array_equal(arrays["C2c"], [[0]])
        np.testing.assert_array_equal(arrays["corrC"], [[0, 1]])
        assert "C20" not in arrays

    def test_empty_tables(self, tmp_path):
        path = save_index_arrays(LookupTables(), tmp_path / "empty.npz")
        assert set(load_index_arrays(path)) == {"index_of_unity"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_index_arrays(tmp_path / "nope.npz")
