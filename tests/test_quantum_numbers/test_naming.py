"""
Unit tests for output and dataset names.
"""

from slaph_lookup.quantum_numbers.enumeration import QuantumNumbers
from slaph_lookup.quantum_numbers.naming import (
    build_correlator_names,
    build_dataset_name,
    build_hdf5_filename,
)


def _qn(p, g, d=(0, 0, 0)):
    return QuantumNumbers(momentum=p, displacement=d, gamma=g)


class TestFilename:
    """Tests for the per-diagram output file."""

    def test_zero_padding(self):
        assert build_hdf5_filename("C20", 714) == "C20_cnfg0714.h5"
        assert build_hdf5_filename("C2+", 0) == "C2+_cnfg0000.h5"

    def test_long_config(self):
        assert build_hdf5_filename("C1", 12345) == "C1_cnfg12345.h5"


class TestDatasetName:
    """Tests for dataset names."""

    def test_two_legs(self):
        row = (_qn((0, 0, 1), (5,)), _qn((0, 0, -1), (5,)))
        assert (build_dataset_name("C2+", ["u", "u"], row)
                == "C2+_uu_p001.d000.g5_p00-1.d000.g5")

    def test_several_gammas_and_displacement(self):
        row = (_qn((1, 0, 0), (1, 5), d=(0, 0, 1)),)
        assert build_dataset_name("C1", ["s"], row) == "C1_s_p100.d001.g15"

    def test_negative_components(self):
        row = (_qn((-1, 0, 1), (4,)),)
        assert build_dataset_name("C1", ["u"], row) == "C1_u_p-101.d000.g4"


class TestCorrelatorNames:
    """Tests for the per-row names of a correlator."""

    def test_one_entry_per_row(self):
        rows = [
            (_qn((0, 0, 0), (5,)), _qn((0, 0, 0), (5,))),
            (_qn((0, 0, 1), (5,)), _qn((0, 0, -1), (5,))),
        ]
        corr_names, datasets = build_correlator_names(
            "C20", 714, "/out", "no", ["u", "d"], rows)

        assert corr_names == [("/out/", "C20_cnfg0714.h5")] * 2
        assert datasets == [
            "C20_ud_p000.d000.g5_p000.d000.g5",
            "C20_ud_p001.d000.g5_p00-1.d000.g5",
        ]

    def test_overwrite_has_no_effect(self):
        rows = [(_qn((0, 0, 0), (5,)),)]
        assert (build_correlator_names("C1", 1, ".", "yes", ["u"], rows)
                == build_correlator_names("C1", 1, ".", "no", ["u"], rows))

    def test_empty(self):
        assert build_correlator_names("C1", 1, ".", "no", ["u"], []) == ([], [])
