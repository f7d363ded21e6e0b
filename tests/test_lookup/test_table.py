"""
Unit tests for the append-only lookup table.
"""

import pytest

from slaph_lookup.lookup.table import (
    CorrInfo,
    LookupTable,
    LookupTables,
    VdaggerVQuantumNumbers,
)


def _vdv_table():
    return LookupTable("vdaggerv", lambda e: (e.momentum, e.displacement))


def _vdv(p):
    return lambda i: VdaggerVQuantumNumbers(id=i, momentum=p, displacement=(0, 0, 0))


class TestLookupTable:
    """Tests for LookupTable."""

    def test_ids_are_positions(self):
        table = _vdv_table()
        a = table.add(_vdv((0, 0, 0)))
        b = table.add(_vdv((0, 0, 1)))
        assert (a.id, b.id) == (0, 1)
        assert table[1] is b
        assert len(table) == 2
        assert [e.id for e in table] == [0, 1]

    def test_find(self):
        table = _vdv_table()
        table.add(_vdv((0, 0, 1)))
        assert table.find(((0, 0, 1), (0, 0, 0))) == 0
        assert table.find(((0, 0, -1), (0, 0, 0))) is None

    def test_lookup_or_add(self):
        table = _vdv_table()
        key = ((0, 0, 1), (0, 0, 0))
        assert table.lookup_or_add(key, _vdv((0, 0, 1))) == 0
        assert table.lookup_or_add(key, _vdv((0, 0, 1))) == 0
        assert len(table) == 1

    def test_first_entry_wins(self):
        """A forced duplicate does not shadow the earlier entry."""
        table = _vdv_table()
        table.add(_vdv((0, 0, 1)))
        table.add(_vdv((0, 0, 1)))
        assert table.find(((0, 0, 1), (0, 0, 0))) == 0

    def test_entries_are_frozen(self):
        entry = VdaggerVQuantumNumbers(id=0, momentum=(0, 0, 0),
                                       displacement=(0, 0, 0))
        with pytest.raises(AttributeError):
            entry.id = 3


class TestAggregates:
    """Tests for the aggregate of all tables."""

    def test_fresh_tables_are_empty(self):
        tables = LookupTables()
        assert all(len(t) == 0 for t in tables.tables())
        assert tables.operator.index_of_unity == -1

    def test_table_count(self):
        # 5 operator, 3 quarkline, 16 correlator tables
        assert len(list(LookupTables().tables())) == 24

    def test_instances_do_not_share_tables(self):
        a, b = LookupTables(), LookupTables()
        a.correlator.C1.add(lambda i: CorrInfo(i, "", "", "x", (0,), ()))
        assert len(b.correlator.C1) == 0

    def test_summary_lists_non_empty(self):
        tables = LookupTables()
        tables.correlator.C2c.add(lambda i: CorrInfo(i, "./", "f.h5", "x", (0,), ()))
        summary = tables.summary()
        assert "C2c: 1" in summary
        assert "C20" not in summary
        assert "index_of_unity: -1" in summary
