"""
Unit tests for 3-vector arithmetic.
"""

from slaph_lookup.quantum_numbers.momentum import (
    add_momenta,
    add_momenta_squared,
    change_sign_array,
    compute_norm_squ,
    is_opposite,
)


class TestMomentum:
    """Tests for momentum helpers."""

    def test_change_sign(self):
        assert change_sign_array((1, -2, 0)) == (-1, 2, 0)

    def test_norm(self):
        assert compute_norm_squ((1, -2, 2)) == 9
        assert compute_norm_squ((0, 0, 0)) == 0

    def test_add(self):
        assert add_momenta((1, 0, 0), (0, 1, -1)) == (1, 1, -1)
        assert add_momenta_squared((1, 0, 0), (0, 1, -1)) == 3

    def test_opposite(self):
        assert is_opposite((0, 0, 1), (0, 0, -1))
        assert is_opposite((0, 0, 0), (0, 0, 0))
        assert not is_opposite((0, 0, 1), (0, 0, 1))
